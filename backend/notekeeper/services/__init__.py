# Services package init
"""
Notekeeper Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession and validated request
       schemas, apply business rules, and raise application exceptions.

Service Inventory:
    - NoteService: list (joined with usernames), create, update, delete
    - UserService: batched id → username resolution and existence checks
"""

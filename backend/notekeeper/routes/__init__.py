# Routes package init
"""
Notekeeper Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET    /notes   (list notes joined with usernames)
                  POST   /notes   (create note)
                  PATCH  /notes   (replace note fields)
                  DELETE /notes   (delete note)
    - health.py:  GET    /health  (service health check)

Routes stay thin: they declare the body schema and status code, then call
the service. Business rules live in notekeeper.services.
"""

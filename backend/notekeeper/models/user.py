"""
Notekeeper Backend — User SQLAlchemy Model
============================================

What:  Minimal `users` table consumed by the notes handlers.
Who:   UserService resolves note owners to usernames through this model.

Account management (sign-up, credentials, roles) belongs to another service;
this table only carries what the notes endpoints read.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"

"""
User Entity

Represents a chat account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserPresence


class User(SQLModel, table=True):
    """
    User entity - represents a chat account.

    Business Rules:
    - Email is stored lower-cased and trimmed, unique across all rows
    - Username is unique across all rows, active or not
    - Password stored as bcrypt hash (cost factor 12)
    - Deactivation is a soft delete: is_active=False, status=OFFLINE
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=254)
    username: str = Field(unique=True, index=True, max_length=32)
    display_name: str = Field(max_length=32)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    avatar_url: Optional[str] = Field(default=None, max_length=512)
    bio: Optional[str] = Field(default=None, max_length=280)
    status: UserPresence = Field(default=UserPresence.OFFLINE)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_seen: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_active", "is_active"),)

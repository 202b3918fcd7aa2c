"""
Session Entity

Server-side record of an issued session token.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one row per issued session token.

    Business Rules:
    - The token carries the row id as its ``sid`` claim
    - A token whose row is gone is treated as revoked
    - Expires 30 days after sign-in, no sliding renewal
    - Rows are deleted on sign-out, password reset and deactivation
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

"""
User Management Use Case DTOs (Data Transfer Objects)

Profile data leaves the application layer through these models only; the
password hash never does.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.entities import User, UserPresence


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either spelling"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserProfile(CamelModel):
    """Public profile of a user"""

    id: str
    email: str
    username: str
    display_name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    status: UserPresence
    created_at: datetime
    updated_at: datetime
    last_seen: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=str(user.id),
            email=user.email,
            username=user.username,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            bio=user.bio,
            status=user.status,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_seen=user.last_seen,
        )


class UpdateProfileCommand(BaseModel):
    """Profile fields to change; None leaves a field untouched"""

    display_name: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[UserPresence] = None


class DeactivationResult(BaseModel):
    user_id: str
    sessions_deleted: int

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, active or not"""
        pass

    @abstractmethod
    async def get_active_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID only if the account is active"""
        pass

    @abstractmethod
    async def get_active_by_email(self, email: str) -> Optional[User]:
        """Get active user by normalized email address"""
        pass

    @abstractmethod
    async def find_by_email_or_display_name(
        self, email: str, display_name: str
    ) -> Optional[User]:
        """Find any user holding the email, or the display name case-insensitively"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username, active or not"""
        pass

    @abstractmethod
    async def get_by_username_excluding(
        self, username: str, exclude_user_id: UUID
    ) -> Optional[User]:
        """Get another user holding the username"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user; raises IntegrityError on a unique clash"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

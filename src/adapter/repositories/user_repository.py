from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id, User.is_active == True)  # noqa: E712
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email, User.is_active == True)  # noqa: E712
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_email_or_display_name(
        self, email: str, display_name: str
    ) -> Optional[User]:
        """
        Look up a registration clash.

        Email rows match exactly (emails are stored normalized); display names
        match case-insensitively. An email match wins over a display-name
        match so the caller can report the more specific field.
        """
        stmt = select(User).where(
            or_(
                User.email == email,
                func.lower(User.display_name) == display_name.lower(),
            )
        )
        result = await self.session.exec(stmt)
        users = list(result.all())
        for user in users:
            if user.email == email:
                return user
        return users[0] if users else None

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username_excluding(
        self, username: str, exclude_user_id: UUID
    ) -> Optional[User]:
        stmt = select(User).where(User.username == username, User.id != exclude_user_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

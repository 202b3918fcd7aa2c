"""
Refresh Session Use Case

Re-issues a session token with current profile claims.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import IssuedSession
from .signin_use_case import build_issued_session


class RefreshSessionUseCase:
    """
    Use case for refreshing the claims snapshot of a session.

    Business Rules:
    - Display claims are otherwise only written at sign-in
    - The session keeps its original expiry (no sliding renewal)
    - A deleted or expired session, or an inactive user, cannot be refreshed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, session_id: UUID) -> Result[IssuedSession]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None or session.user_id != user_id or session.is_expired(utcnow()):
                return Return.err(Error("INVALID_SESSION", "Invalid or expired session"))

            user = await self.uow.users.get_active_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(build_issued_session(user, session))

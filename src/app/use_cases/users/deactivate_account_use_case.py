"""
Deactivate Account Use Case

Soft-deletes the signed-in account.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.password_service import validate_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import UserPresence
from .dtos import DeactivationResult


class DeactivateAccountUseCase:
    """
    Use case for account deactivation.

    Business Rules:
    - The current password must be confirmed
    - The row is kept: is_active=False, status=OFFLINE
    - Every session row of the user is deleted, so outstanding tokens stop
      working immediately
    - Outstanding password reset tokens are consumed
    - Afterwards sign-in fails exactly as for an unknown email
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, password: str) -> Result[DeactivationResult]:
        async with self.uow:
            user = await self.uow.users.get_active_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not validate_password(password, user.password_hash):
                return Return.err(Error("INVALID_PASSWORD", "Invalid password", field="password"))

            user.is_active = False
            user.status = UserPresence.OFFLINE
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            sessions_deleted = await self.uow.sessions.delete_all_by_user_id(user.id)
            await self.uow.password_reset_tokens.invalidate_all_for_user(user.id)

            await self.uow.commit()

        return Return.ok(
            DeactivationResult(user_id=str(user_id), sessions_deleted=sessions_deleted)
        )

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.password_service import hash_password, validate_password_strength
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import StatusResponse
from src.domain.base import utcnow


class ChangePasswordUseCase:
    """
    Use case for setting a new password on the signed-in account.

    The new password is re-validated against every strength rule, then
    rehashed with bcrypt.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, new_password: str) -> Result[StatusResponse]:
        strength = validate_password_strength(new_password)
        if not strength.is_valid:
            return Return.err(
                Error(
                    "WEAK_PASSWORD",
                    "Password does not meet requirements",
                    field="newPassword",
                    details=[{"field": "newPassword", "message": e} for e in strength.errors],
                )
            )

        async with self.uow:
            user = await self.uow.users.get_active_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.password_hash = hash_password(new_password)
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

        return Return.ok(
            StatusResponse(status="success", message="Password changed successfully")
        )

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.password_service import validate_password
from src.app.services.unit_of_work import UnitOfWork
from .dtos import StatusResponse


class VerifyPasswordUseCase:
    """Re-confirms the signed-in user's password before sensitive actions."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, password: str) -> Result[StatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_active_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not validate_password(password, user.password_hash):
                return Return.err(Error("INVALID_PASSWORD", "Invalid password", field="password"))

        return Return.ok(
            StatusResponse(status="verified", message="Password verified successfully")
        )

from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import StatusResponse


class SignoutUseCase:
    """Deletes the caller's session row; the token stops working at once."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID) -> Result[StatusResponse]:
        async with self.uow:
            await self.uow.sessions.delete_by_id(session_id)
            await self.uow.commit()
        return Return.ok(StatusResponse(status="signed_out", message="Signed out successfully"))

"""
Request Password Reset Use Case

Handles generating and delivering password reset tokens.
"""

import hashlib
from datetime import timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.services.password_reset_notifier import (
    LoggingPasswordResetNotifier,
    PasswordResetNotifier,
)
from src.app.services.password_service import generate_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import PasswordResetToken
from .dtos import StatusResponse

RESET_TOKEN_LENGTH = 32
DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)

RESET_REQUESTED = StatusResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure 32-character token
    - Hash token with SHA-256 before storing
    - Token expires in 1 hour; older outstanding tokens are consumed
    - No email enumeration (same response for valid/invalid emails)
    - Rate limiting is applied by the admission layer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: Optional[PasswordResetNotifier] = None,
        token_ttl: Optional[timedelta] = None,
    ):
        self.uow = uow
        self.notifier = notifier or LoggingPasswordResetNotifier()
        self.token_ttl = token_ttl or DEFAULT_RESET_TOKEN_TTL

    async def execute(self, email: str) -> Result[StatusResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the same "sent" status whether or not the email exists
        """
        async with self.uow:
            user = await self.uow.users.get_active_by_email(email.lower().strip())

            if user is None:
                return Return.ok(RESET_REQUESTED)

            reset_token = generate_token(RESET_TOKEN_LENGTH)
            token_hash = hashlib.sha256(reset_token.encode()).hexdigest()

            await self.uow.password_reset_tokens.invalidate_all_for_user(user.id)
            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    user_id=user.id,
                    token_hash=token_hash,
                    used=False,
                    expires_at=utcnow() + self.token_ttl,
                )
            )

            await self.uow.commit()

        # The plain token only exists in this delivery
        await self.notifier.send_reset_token(user, reset_token)

        return Return.ok(RESET_REQUESTED)

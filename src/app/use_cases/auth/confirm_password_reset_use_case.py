"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import hashlib

from libs.result import Error, Result, Return
from src.app.services.password_service import hash_password, validate_password_strength
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import StatusResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Token must not be expired (1 hour window)
    - Token must not already be used
    - New password must pass the full strength rule set
    - Password is hashed with bcrypt (cost factor 12)
    - All user sessions are deleted
    - Token is marked as used after successful reset
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> Result[StatusResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from the reset link)
            new_password: New password to set

        Errors:
            - WEAK_PASSWORD: Password does not meet strength requirements
            - INVALID_TOKEN: Token not found, or its account is gone
            - TOKEN_EXPIRED: Token has expired
            - TOKEN_ALREADY_USED: Token has already been used
        """
        strength = validate_password_strength(new_password)
        if not strength.is_valid:
            return Return.err(
                Error(
                    "WEAK_PASSWORD",
                    "Password does not meet strength requirements",
                    field="password",
                    details=[{"field": "password", "message": e} for e in strength.errors],
                )
            )

        token_hash = hashlib.sha256(token.encode()).hexdigest()

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(token_hash)

            if reset_token is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired password reset token"))

            if reset_token.used:
                return Return.err(
                    Error("TOKEN_ALREADY_USED", "Password reset token has already been used")
                )

            if reset_token.expires_at < utcnow():
                return Return.err(Error("TOKEN_EXPIRED", "Password reset token has expired"))

            user = await self.uow.users.get_active_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired password reset token"))

            user.password_hash = hash_password(new_password)
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.password_reset_tokens.mark_used(reset_token)
            await self.uow.sessions.delete_all_by_user_id(user.id)

            await self.uow.commit()

        return Return.ok(
            StatusResponse(status="success", message="Password has been reset successfully")
        )

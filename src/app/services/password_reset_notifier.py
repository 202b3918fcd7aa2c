import logging
from abc import ABC, abstractmethod

from src.domain.entities import User

logger = logging.getLogger(__name__)


class PasswordResetNotifier(ABC):
    """Delivers a password reset token to its owner (email, chat, ...)"""

    @abstractmethod
    async def send_reset_token(self, user: User, token: str) -> None:
        pass


class LoggingPasswordResetNotifier(PasswordResetNotifier):
    """
    Stand-in used until a mail collaborator is wired in.

    Only records that a token was issued; the token itself is never logged.
    """

    async def send_reset_token(self, user: User, token: str) -> None:
        logger.info(f"Password reset token issued for user_id={user.id}")

"""
Chat Account Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import UserPresence
from .user import User
from .session import Session
from .password_reset_token import PasswordResetToken

__all__ = [
    # Enums
    "UserPresence",
    # Entities
    "User",
    "Session",
    "PasswordResetToken",
]

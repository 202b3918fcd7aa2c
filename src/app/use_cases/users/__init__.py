"""
User Management Use Cases

All profile and account business logic.
"""

from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .change_password_use_case import ChangePasswordUseCase
from .deactivate_account_use_case import DeactivateAccountUseCase
from .dtos import DeactivationResult, UpdateProfileCommand, UserProfile

__all__ = [
    # Use Cases
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "ChangePasswordUseCase",
    "DeactivateAccountUseCase",
    # DTOs
    "UpdateProfileCommand",
    "UserProfile",
    "DeactivationResult",
]

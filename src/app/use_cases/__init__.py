"""
Use Cases

Organized into domain folders:
- auth/: Registration, sign-in, sessions and password resets
- users/: Profile and account management
"""

from .auth import (
    ConfirmPasswordResetUseCase,
    RefreshSessionUseCase,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    SigninUseCase,
    SignoutUseCase,
    VerifyPasswordUseCase,
)
from .users import (
    ChangePasswordUseCase,
    DeactivateAccountUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "SigninUseCase",
    "SignoutUseCase",
    "RefreshSessionUseCase",
    "VerifyPasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Users
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "ChangePasswordUseCase",
    "DeactivateAccountUseCase",
]

"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .signin_use_case import SigninUseCase
from .signout_use_case import SignoutUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .verify_password_use_case import VerifyPasswordUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import IssuedSession, RegisterCommand, StatusResponse

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "SigninUseCase",
    "SignoutUseCase",
    "RefreshSessionUseCase",
    "VerifyPasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "IssuedSession",
    "StatusResponse",
]

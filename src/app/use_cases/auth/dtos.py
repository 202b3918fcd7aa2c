"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime

from pydantic import BaseModel

from src.app.use_cases.users.dtos import UserProfile


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    display_name: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class IssuedSession(BaseModel):
    """A signed session token and the profile it was issued for"""

    session_token: str
    session_id: str
    expires_at: datetime
    user: UserProfile


class StatusResponse(BaseModel):
    """Generic status/message outcome"""

    status: str
    message: str

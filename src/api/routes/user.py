from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from src.api.error import ConflictError, NotFoundError, ServerError, ValidationError
from src.api.schemas import MessageResponse, UserData, UserResponse
from src.api.security import API_POLICY, PROFILE_POLICY, Admission
from src.api.utils.cookies import clear_session_cookie
from src.api.utils.jwt import SessionClaims
from src.api.utils.request_model import Bio, DisplayName, RequestModel, Username
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    ChangePasswordUseCase,
    DeactivateAccountUseCase,
    GetProfileUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import get_current_session, get_unit_of_work
from src.domain.entities import UserPresence

router = APIRouter(prefix="/user", tags=["User"])

DEACTIVATION_WORD = "DEACTIVATE"


@router.get(
    "/profile",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    dependencies=[Depends(Admission(API_POLICY))],
)
async def get_profile(
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Signed-in user's profile, never including the password hash

    Raises:
        - 401 Unauthorized: No valid session
        - 404 Not Found: Account no longer active
    """
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(UUID(claims.sub))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise NotFoundError(error)
        raise ServerError(error)

    return UserResponse(data=UserData(user=result.value))


class UpdateProfileRequest(RequestModel):
    """Any subset of the editable profile fields"""

    display_name: Optional[DisplayName] = None
    username: Optional[Username] = None
    bio: Optional[Bio] = None
    status: Optional[UserPresence] = None


@router.patch(
    "/profile",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    dependencies=[
        Depends(Admission(PROFILE_POLICY, "Too many profile updates. Please try again later."))
    ],
)
async def update_profile(
    request: UpdateProfileRequest,
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Edit displayName, username, bio or status

    Session claims keep the old display values until the next sign-in or
    ``POST /auth/session/refresh``.

    Raises:
        - 400 Bad Request: Invalid input, or username held by another user
        - 401 Unauthorized: No valid session
        - 404 Not Found: Account no longer active
    """
    command = UpdateProfileCommand(
        display_name=request.display_name,
        username=request.username,
        bio=request.bio,
        status=request.status,
    )

    use_case = UpdateProfileUseCase(uow)
    result = await use_case.execute(UUID(claims.sub), command)

    if result.is_err():
        error = result.error
        if error.code == "USERNAME_TAKEN":
            raise ConflictError(error)
        elif error.code in ("INVALID_DISPLAY_NAME", "INVALID_USERNAME"):
            raise ValidationError(error)
        elif error.code == "USER_NOT_FOUND":
            raise NotFoundError(error)
        raise ServerError(error)

    return UserResponse(message="Profile updated successfully", data=UserData(user=result.value))


class DeactivateAccountRequest(RequestModel):
    """
    Password confirmation for deactivation.

    ``confirmation`` is optional for API clients; when sent it must be the
    exact word DEACTIVATE.
    """

    password: str = Field(..., min_length=1)
    confirmation: Optional[str] = None

    @field_validator("confirmation")
    @classmethod
    def check_confirmation_word(cls, value):
        if value is not None and value != DEACTIVATION_WORD:
            raise PydanticCustomError(
                "deactivation_confirmation",
                "Please type DEACTIVATE exactly to confirm account deactivation",
            )
        return value


@router.delete(
    "/profile",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[Depends(Admission(PROFILE_POLICY))],
)
async def deactivate_account(
    request: DeactivateAccountRequest,
    http_request: Request,
    response: Response,
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate the signed-in account

    The row is kept with is_active=False; every session is deleted and the
    cookie is cleared. Sign-in then fails exactly as for an unknown email.

    Raises:
        - 400 Bad Request: Wrong password or confirmation word
        - 401 Unauthorized: No valid session
        - 404 Not Found: Account already inactive
    """
    use_case = DeactivateAccountUseCase(uow)
    result = await use_case.execute(UUID(claims.sub), request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ValidationError(error)
        elif error.code == "USER_NOT_FOUND":
            raise NotFoundError(error)
        raise ServerError(error)

    clear_session_cookie(response, http_request.app.state.config)
    return MessageResponse(message="Account deactivated successfully")


class ChangePasswordRequest(RequestModel):
    new_password: str = Field(..., min_length=1)


@router.patch(
    "/password",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[Depends(Admission(PROFILE_POLICY))],
)
async def change_password(
    request: ChangePasswordRequest,
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set a new password for the signed-in account

    Raises:
        - 400 Bad Request: New password fails a strength rule (``details``
          lists each one)
        - 401 Unauthorized: No valid session
        - 404 Not Found: Account no longer active
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(UUID(claims.sub), request.new_password)

    if result.is_err():
        error = result.error
        if error.code == "WEAK_PASSWORD":
            raise ValidationError(error)
        elif error.code == "USER_NOT_FOUND":
            raise NotFoundError(error)
        raise ServerError(error)

    return MessageResponse(message=result.value.message)

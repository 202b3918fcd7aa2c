from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.api.error import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from src.api.schemas import MessageResponse, UserData, UserResponse
from src.api.security import API_POLICY, AUTH_POLICY, PASSWORD_RESET_POLICY, Admission
from src.api.utils.cookies import clear_session_cookie, set_session_cookie
from src.api.utils.jwt import SessionClaims
from src.api.utils.request_model import DisplayName, RequestModel, passwords_match
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ConfirmPasswordResetUseCase,
    IssuedSession,
    RefreshSessionUseCase,
    RegisterCommand,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    SigninUseCase,
    SignoutUseCase,
    VerifyPasswordUseCase,
)
from src.app.use_cases.users import UserProfile
from src.app.use_cases.users.dtos import CamelModel
from src.depends import get_current_session, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])

# ============================================================================
# Response envelopes
# ============================================================================


class SessionTokenData(CamelModel):
    user: UserProfile
    session_token: str
    expires_at: datetime


class SessionTokenResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: SessionTokenData


class SessionUser(CamelModel):
    id: str
    email: str
    name: str
    username: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    status: str


class SessionData(CamelModel):
    user: SessionUser
    expires: datetime


class SessionResponse(BaseModel):
    success: bool = True
    data: SessionData


def _session_token_response(
    response: Response, http_request: Request, issued: IssuedSession, message: str
) -> SessionTokenResponse:
    set_session_cookie(
        response, http_request.app.state.config, issued.session_token, issued.expires_at
    )
    return SessionTokenResponse(
        message=message,
        data=SessionTokenData(
            user=issued.user,
            session_token=issued.session_token,
            expires_at=issued.expires_at,
        ),
    )


# ============================================================================
# Registration and sign-in
# ============================================================================


class RegisterRequest(RequestModel):
    """
    Registration HTTP request payload

    Field rules are checked here; password strength and uniqueness are
    business rules checked by RegisterUseCase.
    """

    email: EmailStr = Field(..., description="User email address")
    display_name: DisplayName = Field(..., description="Public display name")
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., min_length=1)

    @field_validator("confirm_password")
    @classmethod
    def check_confirmation(cls, value, info):
        return passwords_match(info.data.get("password"), value)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    dependencies=[
        Depends(
            Admission(AUTH_POLICY, "Too many registration attempts. Please try again later.")
        )
    ],
)
async def register(
    request: RegisterRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register a new account

    Raises:
        - 400 Bad Request: Invalid input, weak password, or email / display
          name already in use (``field`` names which)
        - 403 Forbidden: Origin not allowed
        - 429 Too Many Requests: Rate limited
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        display_name=request.display_name,
        password=request.password,
    )

    config = http_request.app.state.config
    use_case = RegisterUseCase(uow, blocked_email_domains=config.BLOCKED_EMAIL_DOMAINS)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_ALREADY_EXISTS", "DISPLAY_NAME_TAKEN", "USERNAME_TAKEN"):
            raise ConflictError(error)
        elif error.code in ("WEAK_PASSWORD", "INVALID_DISPLAY_NAME", "EMAIL_DOMAIN_NOT_ALLOWED"):
            raise ValidationError(error)
        raise ServerError(error)

    return UserResponse(
        message="Account created successfully", data=UserData(user=result.value)
    )


class SigninRequest(RequestModel):
    """Email format is not checked, so a malformed address fails like a wrong one"""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


@router.post(
    "/signin",
    status_code=status.HTTP_200_OK,
    response_model=SessionTokenResponse,
    dependencies=[
        Depends(Admission(AUTH_POLICY, "Too many sign-in attempts. Please try again later."))
    ],
)
async def signin(
    request: SigninRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Credential sign-in

    Sets the session cookie and also returns the token for API clients.

    Raises:
        - 401 Unauthorized: Invalid credentials (never says which part)
        - 500 Internal Server Error: Server error
    """
    config = http_request.app.state.config
    use_case = SigninUseCase(uow, session_max_age=timedelta(days=config.SESSION_MAX_AGE_DAYS))
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise AuthenticationError(error)
        raise ServerError(error)

    return _session_token_response(response, http_request, result.value, "Signed in successfully")


@router.post(
    "/signout",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[Depends(Admission(API_POLICY))],
)
async def signout(
    http_request: Request,
    response: Response,
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete the caller's session row and clear the cookie"""
    use_case = SignoutUseCase(uow)
    result = await use_case.execute(UUID(claims.sid))

    if result.is_err():
        raise ServerError(result.error)

    clear_session_cookie(response, http_request.app.state.config)
    return MessageResponse(message=result.value.message)


# ============================================================================
# Session
# ============================================================================


@router.get(
    "/session",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
    dependencies=[Depends(Admission(API_POLICY))],
)
async def get_session(claims: SessionClaims = Depends(get_current_session)):
    """
    Current session claims

    Display fields are the snapshot taken at sign-in or the last refresh.
    """
    return SessionResponse(
        data=SessionData(
            user=SessionUser(
                id=claims.sub,
                email=claims.email,
                name=claims.name,
                username=claims.username,
                avatar_url=claims.avatar_url,
                bio=claims.bio,
                status=claims.status,
            ),
            expires=datetime.fromtimestamp(claims.exp, UTC).replace(tzinfo=None),
        )
    )


@router.post(
    "/session/refresh",
    status_code=status.HTTP_200_OK,
    response_model=SessionTokenResponse,
    dependencies=[Depends(Admission(API_POLICY))],
)
async def refresh_session(
    http_request: Request,
    response: Response,
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Re-issue the session token with the current profile

    The session keeps its original expiry.

    Raises:
        - 401 Unauthorized: Session revoked or expired
        - 404 Not Found: Account no longer active
    """
    use_case = RefreshSessionUseCase(uow)
    result = await use_case.execute(UUID(claims.sub), UUID(claims.sid))

    if result.is_err():
        error = result.error
        if error.code == "INVALID_SESSION":
            raise AuthenticationError(error)
        elif error.code == "USER_NOT_FOUND":
            raise NotFoundError(error)
        raise ServerError(error)

    return _session_token_response(response, http_request, result.value, "Session refreshed")


# ============================================================================
# Password checks and resets
# ============================================================================


class VerifyPasswordRequest(RequestModel):
    password: str = Field(..., min_length=1)


@router.post(
    "/verify-password",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[Depends(Admission(AUTH_POLICY))],
)
async def verify_password(
    request: VerifyPasswordRequest,
    claims: SessionClaims = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Re-confirm the signed-in user's password

    Raises:
        - 400 Bad Request: Wrong password
        - 401 Unauthorized: No valid session
        - 404 Not Found: Account no longer active
    """
    use_case = VerifyPasswordUseCase(uow)
    result = await use_case.execute(UUID(claims.sub), request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ValidationError(error)
        elif error.code == "USER_NOT_FOUND":
            raise NotFoundError(error)
        raise ServerError(error)

    return MessageResponse(message=result.value.message)


class RequestPasswordResetRequest(RequestModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/request-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[
        Depends(
            Admission(
                PASSWORD_RESET_POLICY,
                "Too many password reset attempts. Please try again later.",
            )
        )
    ],
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Start a password reset

    Same answer whether or not the email belongs to an account.
    """
    state = http_request.app.state
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier=state.password_reset_notifier,
        token_ttl=timedelta(minutes=state.config.PASSWORD_RESET_TOKEN_TTL_MINUTES),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return MessageResponse(message=result.value.message)


class ConfirmPasswordResetRequest(RequestModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., min_length=1)

    @field_validator("confirm_password")
    @classmethod
    def check_confirmation(cls, value, info):
        return passwords_match(info.data.get("password"), value)


@router.post(
    "/confirm-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[
        Depends(
            Admission(
                PASSWORD_RESET_POLICY,
                "Too many password reset attempts. Please try again later.",
            )
        )
    ],
)
async def confirm_password_reset(
    request: ConfirmPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set a new password with a reset token

    Every session of the account is revoked.

    Raises:
        - 400 Bad Request: Weak password, or the token is unknown, used or
          expired
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("WEAK_PASSWORD", "INVALID_TOKEN", "TOKEN_EXPIRED", "TOKEN_ALREADY_USED"):
            raise ValidationError(error)
        raise ServerError(error)

    return MessageResponse(message=result.value.message)

from datetime import UTC, datetime
from typing import Optional

from fastapi import Request, Response


def session_cookie_name(config) -> str:
    if config.IS_PRODUCTION:
        return config.SECURE_SESSION_COOKIE_NAME
    return config.SESSION_COOKIE_NAME


def set_session_cookie(response: Response, config, token: str, expires_at: datetime) -> None:
    """httpOnly, SameSite=Lax, path=/; Secure and Domain only in production."""
    max_age = int((expires_at.replace(tzinfo=UTC) - datetime.now(UTC)).total_seconds())
    response.set_cookie(
        key=session_cookie_name(config),
        value=token,
        max_age=max(0, max_age),
        path="/",
        domain=config.COOKIE_DOMAIN if config.IS_PRODUCTION else None,
        secure=config.IS_PRODUCTION,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response, config) -> None:
    response.delete_cookie(
        key=session_cookie_name(config),
        path="/",
        domain=config.COOKIE_DOMAIN if config.IS_PRODUCTION else None,
        secure=config.IS_PRODUCTION,
        httponly=True,
        samesite="lax",
    )


def extract_session_token(request: Request, config) -> Optional[str]:
    """Session cookie first, then an ``Authorization: Bearer`` header."""
    token = request.cookies.get(session_cookie_name(config))
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None

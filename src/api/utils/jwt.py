from datetime import UTC, datetime
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from config import ApplicationConfig


class SessionClaims(BaseModel):
    """
    Claims carried by a session token.

    Display fields are a snapshot taken at sign-in (or an explicit session
    refresh) and may lag behind later profile edits for up to the session
    lifetime. ``sub`` is the authority for authorization.
    """

    sub: str
    sid: str
    email: str
    name: str
    username: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    status: str
    iat: int
    exp: int


def issue_session_token(
    user_id: str,
    session_id: str,
    email: str,
    name: str,
    username: str,
    avatar_url: Optional[str],
    bio: Optional[str],
    status: str,
    expires_at: datetime,
) -> str:
    """
    Sign a session token.

    Args:
        user_id: User UUID as string (``sub``)
        session_id: Server-side session row UUID as string (``sid``)
        expires_at: Absolute expiry (naive UTC), shared with the session row

    Returns:
        JWT string
    """
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "sid": session_id,
        "email": email,
        "name": name,
        "username": username,
        "avatar_url": avatar_url,
        "bio": bio,
        "status": status,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.replace(tzinfo=UTC).timestamp()),
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def read_session_token(token: str) -> Optional[SessionClaims]:
    """
    Verify signature and expiry, then rebuild the claim set.

    Returns:
        SessionClaims or None if the token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
        return SessionClaims(**payload)
    except (JWTError, ValueError, TypeError):
        return None

"""
Sign-in Use Case

Checks credentials and issues a session token.
"""

from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.api.utils.jwt import issue_session_token
from src.app.services.password_service import validate_password, verify_dummy_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import UserProfile
from src.domain.base import utcnow
from src.domain.entities import Session, User, UserPresence
from .dtos import IssuedSession

DEFAULT_SESSION_MAX_AGE = timedelta(days=30)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")


def build_issued_session(user: User, session: Session) -> IssuedSession:
    """Sign a token for a session row; claims are a snapshot of the user."""
    token = issue_session_token(
        user_id=str(user.id),
        session_id=str(session.id),
        email=user.email,
        name=user.display_name,
        username=user.username,
        avatar_url=user.avatar_url,
        bio=user.bio,
        status=UserPresence(user.status).value,
        expires_at=session.expires_at,
    )
    return IssuedSession(
        session_token=token,
        session_id=str(session.id),
        expires_at=session.expires_at,
        user=UserProfile.from_user(user),
    )


class SigninUseCase:
    """
    Use case for credential sign-in and session issuance.

    Business Rules:
    - Email is normalized (lower-cased, trimmed) before lookup
    - Unknown email, inactive account and wrong password all return the same
      INVALID_CREDENTIALS error
    - A bcrypt comparison runs even when no user matched
    - On success: last_seen=now, status=ONLINE, a session row is created
    - Token and session row share one absolute expiry (30 days), never
      extended
    """

    def __init__(self, uow: UnitOfWork, session_max_age: Optional[timedelta] = None):
        self.uow = uow
        self.session_max_age = session_max_age or DEFAULT_SESSION_MAX_AGE

    async def execute(self, email: str, password: str) -> Result[IssuedSession]:
        """
        Execute sign-in use case.

        Args:
            email: Email as typed by the user
            password: Plain text password

        Returns:
            Result with IssuedSession, or Error(INVALID_CREDENTIALS)
        """
        normalized_email = email.lower().strip()

        async with self.uow:
            user = await self.uow.users.get_active_by_email(normalized_email)

            if user is None:
                verify_dummy_password(password)
                return Return.err(INVALID_CREDENTIALS)

            if not validate_password(password, user.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            now = utcnow()
            user.last_seen = now
            user.status = UserPresence.ONLINE
            user = await self.uow.users.update(user)

            session = await self.uow.sessions.create(
                Session(user_id=user.id, created_at=now, expires_at=now + self.session_max_age)
            )

            await self.uow.commit()

            return Return.ok(build_issued_session(user, session))

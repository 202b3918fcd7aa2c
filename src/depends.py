from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import AuthenticationError
from src.api.utils.cookies import extract_session_token
from src.api.utils.jwt import SessionClaims, read_session_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_session(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SessionClaims:
    """
    Dependency to read and verify the caller's session.

    The token comes from the session cookie or an Authorization header. A
    token is accepted only while its server-side session row exists and has
    not expired, so sign-out and deactivation take effect immediately.

    Returns:
        SessionClaims rebuilt from the token

    Raises:
        AuthenticationError: 401 if the token is missing, invalid, expired
            or its session was revoked
    """
    token = extract_session_token(request, request.app.state.config)
    if token is None:
        raise AuthenticationError()

    claims = read_session_token(token)
    if claims is None:
        raise AuthenticationError(Error("INVALID_SESSION", "Invalid or expired session"))

    try:
        session_id = UUID(claims.sid)
    except ValueError:
        raise AuthenticationError(Error("INVALID_SESSION", "Invalid or expired session"))

    async with uow:
        session = await uow.sessions.get_by_id(session_id)
        revoked = (
            session is None
            or session.is_expired(utcnow())
            or str(session.user_id) != claims.sub
        )

    if revoked:
        raise AuthenticationError(Error("INVALID_SESSION", "Invalid or expired session"))

    return claims

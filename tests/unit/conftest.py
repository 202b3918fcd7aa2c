import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_active_by_id = AsyncMock(return_value=None)
    uow.users.get_active_by_email = AsyncMock(return_value=None)
    uow.users.find_by_email_or_display_name = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_username_excluding = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.delete_by_id = AsyncMock(return_value=True)
    uow.sessions.delete_all_by_user_id = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.mark_used = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.invalidate_all_for_user = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def make_user():
    """Build an active User; the password hash is real bcrypt when a password is given"""
    from src.app.services.password_service import hash_password
    from src.domain.entities import User, UserPresence

    def _make_user(password=None, **overrides):
        fields = dict(
            email="alice@acme.com",
            username="alice",
            display_name="Alice",
            password_hash=hash_password(password) if password else "not-a-bcrypt-hash",
            status=UserPresence.OFFLINE,
        )
        fields.update(overrides)
        return User(**fields)

    return _make_user

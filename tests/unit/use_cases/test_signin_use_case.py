"""
Unit tests for SigninUseCase

Every failure must be indistinguishable from the caller's side.
"""
from datetime import timedelta
from unittest.mock import patch

import pytest

from src.api.utils.jwt import read_session_token
from src.app.use_cases.auth import SigninUseCase
from src.domain.entities import UserPresence

PASSWORD = "Sunrise42Tide"


@pytest.mark.asyncio
async def test_successful_signin_issues_session(mock_uow, make_user):
    user = make_user(password=PASSWORD)
    mock_uow.users.get_active_by_email.return_value = user

    result = await SigninUseCase(mock_uow).execute("  ALICE@acme.com", PASSWORD)

    assert result.is_ok()
    issued = result.value
    mock_uow.users.get_active_by_email.assert_awaited_once_with("alice@acme.com")

    assert user.status == UserPresence.ONLINE
    assert user.last_seen is not None

    session = mock_uow.sessions.create.call_args.args[0]
    assert session.user_id == user.id
    assert session.expires_at - session.created_at == timedelta(days=30)
    assert issued.expires_at == session.expires_at
    mock_uow.commit.assert_awaited_once()

    claims = read_session_token(issued.session_token)
    assert claims.sub == str(user.id)
    assert claims.sid == str(session.id)
    assert claims.username == "alice"
    assert claims.name == "Alice"
    assert claims.status == "ONLINE"


@pytest.mark.asyncio
async def test_session_lifetime_is_configurable(mock_uow, make_user):
    mock_uow.users.get_active_by_email.return_value = make_user(password=PASSWORD)

    result = await SigninUseCase(mock_uow, session_max_age=timedelta(days=1)).execute(
        "alice@acme.com", PASSWORD
    )

    session = mock_uow.sessions.create.call_args.args[0]
    assert result.value.expires_at - session.created_at == timedelta(days=1)


@pytest.mark.asyncio
async def test_unknown_email_runs_dummy_check(mock_uow):
    with patch(
        "src.app.use_cases.auth.signin_use_case.verify_dummy_password"
    ) as dummy_check:
        result = await SigninUseCase(mock_uow).execute("ghost@acme.com", PASSWORD)

    dummy_check.assert_called_once_with(PASSWORD)
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_fail_identically(mock_uow, make_user):
    result_unknown = await SigninUseCase(mock_uow).execute("ghost@acme.com", PASSWORD)

    mock_uow.users.get_active_by_email.return_value = make_user(password=PASSWORD)
    result_wrong = await SigninUseCase(mock_uow).execute("alice@acme.com", "Wrong42Password")

    assert result_unknown.error == result_wrong.error
    assert result_wrong.error.message == "Invalid email or password"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()

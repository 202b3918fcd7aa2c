"""Unit tests for GetProfileUseCase and UpdateProfileUseCase"""
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.users import GetProfileUseCase, UpdateProfileCommand, UpdateProfileUseCase
from src.domain.entities import User, UserPresence


@pytest.mark.asyncio
async def test_get_profile(mock_uow, make_user):
    user = make_user(bio="hi")
    mock_uow.users.get_active_by_id.return_value = user

    result = await GetProfileUseCase(mock_uow).execute(user.id)

    assert result.value.id == str(user.id)
    assert result.value.bio == "hi"
    assert "password_hash" not in result.value.model_dump()


@pytest.mark.asyncio
async def test_get_profile_of_inactive_user(mock_uow):
    result = await GetProfileUseCase(mock_uow).execute(uuid4())

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_only_given_fields(mock_uow, make_user):
    user = make_user(bio="old bio")
    mock_uow.users.get_active_by_id.return_value = user

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(status=UserPresence.DO_NOT_DISTURB)
    )

    assert result.value.status == UserPresence.DO_NOT_DISTURB
    assert result.value.bio == "old bio"
    assert result.value.display_name == "Alice"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_sanitizes_text_and_lowercases_username(mock_uow, make_user):
    user = make_user()
    mock_uow.users.get_active_by_id.return_value = user

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id,
        UpdateProfileCommand(
            display_name="<i>Ali</i>", username="Ali.Cat", bio="<script>x()</script>likes cats"
        ),
    )

    assert result.value.display_name == "Ali"
    assert result.value.username == "ali.cat"
    assert result.value.bio == "likes cats"
    mock_uow.users.get_by_username_excluding.assert_awaited_once_with("ali.cat", user.id)


@pytest.mark.asyncio
async def test_username_held_by_another_user(mock_uow, make_user):
    user = make_user()
    mock_uow.users.get_active_by_id.return_value = user
    mock_uow.users.get_by_username_excluding.return_value = User(
        email="bob@acme.com", username="bob", display_name="Bob", password_hash="x"
    )

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(username="bob")
    )

    assert result.error.code == "USERNAME_TAKEN"
    assert result.error.field == "username"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_keeping_own_username_is_allowed(mock_uow, make_user):
    user = make_user()
    mock_uow.users.get_active_by_id.return_value = user

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(username="ALICE")
    )

    assert result.value.username == "alice"


@pytest.mark.asyncio
async def test_unique_constraint_race_maps_to_username_taken(mock_uow, make_user):
    user = make_user()
    mock_uow.users.get_active_by_id.return_value = user
    mock_uow.users.update.side_effect = IntegrityError("UPDATE", {}, Exception("UNIQUE"))

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(username="bob")
    )

    assert result.error.code == "USERNAME_TAKEN"


@pytest.mark.asyncio
async def test_update_of_inactive_user(mock_uow):
    result = await UpdateProfileUseCase(mock_uow).execute(
        uuid4(), UpdateProfileCommand(bio="hi")
    )

    assert result.error.code == "USER_NOT_FOUND"

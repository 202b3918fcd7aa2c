import pytest
from httpx import AsyncClient

PASSWORD = "Sunrise42Tide"


@pytest.mark.asyncio
async def test_get_profile(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    response = await client.get("/user/profile", headers=headers)

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == "alice@acme.com"
    assert user["username"] == "alice"
    assert user["status"] == "ONLINE"
    assert {"createdAt", "updatedAt", "lastSeen", "avatarUrl", "bio"} <= set(user)
    assert "passwordHash" not in user


@pytest.mark.asyncio
async def test_profile_requires_session(client: AsyncClient):
    response = await client.get("/user/profile")

    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_partial_update(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    response = await client.patch(
        "/user/profile",
        json={"bio": "  <b>Hello</b> there  ", "status": "IDLE", "username": "Alice.Cat"},
        headers=headers,
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["message"] == "Profile updated successfully"
    user = data["data"]["user"]
    assert user["bio"] == "Hello there"
    assert user["status"] == "IDLE"
    assert user["username"] == "alice.cat"
    assert user["displayName"] == "Alice"


@pytest.mark.asyncio
async def test_username_taken_by_other_user(client: AsyncClient, register, signin):
    await register(email="alice@acme.com", display_name="Alice")
    await register(email="bob@acme.com", display_name="Bob")
    headers = await signin(email="bob@acme.com")

    taken = await client.patch("/user/profile", json={"username": "alice"}, headers=headers)
    own = await client.patch("/user/profile", json={"username": "bob"}, headers=headers)

    assert taken.status_code == 400
    assert taken.json()["code"] == "USERNAME_TAKEN"
    assert taken.json()["field"] == "username"
    assert own.status_code == 200


@pytest.mark.asyncio
async def test_invalid_profile_fields(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    response = await client.patch(
        "/user/profile",
        json={"username": "no spaces allowed", "bio": "x" * 281, "status": "AWAY"},
        headers=headers,
    )

    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert {"username", "bio", "status"} <= fields


@pytest.mark.asyncio
async def test_deactivation_blocks_signin(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    response = await client.request(
        "DELETE",
        "/user/profile",
        json={"password": PASSWORD, "confirmation": "DEACTIVATE"},
        headers=headers,
    )

    assert response.status_code == 200, response.text
    assert response.json()["message"] == "Account deactivated successfully"

    old_session = await client.get("/user/profile", headers=headers)
    assert old_session.status_code == 401

    signin_again = await client.post(
        "/auth/signin", json={"email": "alice@acme.com", "password": PASSWORD}
    )
    unknown = await client.post(
        "/auth/signin", json={"email": "ghost@acme.com", "password": PASSWORD}
    )
    assert signin_again.status_code == 401
    assert signin_again.json() == unknown.json()


@pytest.mark.asyncio
async def test_deactivation_checks_password_and_confirmation(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    wrong_password = await client.request(
        "DELETE", "/user/profile", json={"password": "Wrong42Password"}, headers=headers
    )
    wrong_word = await client.request(
        "DELETE",
        "/user/profile",
        json={"password": PASSWORD, "confirmation": "deactivate"},
        headers=headers,
    )

    assert wrong_password.status_code == 400
    assert wrong_password.json()["code"] == "INVALID_PASSWORD"
    assert wrong_word.status_code == 400
    assert wrong_word.json()["details"][0]["field"] == "confirmation"

    still_active = await client.get("/user/profile", headers=headers)
    assert still_active.status_code == 200


@pytest.mark.asyncio
async def test_generated_username_skips_renamed_username(
    client: AsyncClient, register, signin
):
    await register(email="alice@acme.com", display_name="Alice")
    headers = await signin()
    await client.patch("/user/profile", json={"username": "carol"}, headers=headers)

    response = await register(email="carol@acme.com", display_name="Carol")

    assert response.status_code == 201
    assert response.json()["data"]["user"]["username"] == "carol1"

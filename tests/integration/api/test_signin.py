import pytest
from httpx import AsyncClient

PASSWORD = "Sunrise42Tide"


@pytest.mark.asyncio
async def test_successful_signin_sets_session_cookie(client: AsyncClient, register):
    await register()

    response = await client.post(
        "/auth/signin", json={"email": "ALICE@acme.com", "password": PASSWORD}
    )

    assert response.status_code == 200, response.text
    data = response.json()["data"]
    assert data["user"]["email"] == "alice@acme.com"
    assert data["user"]["status"] == "ONLINE"
    assert isinstance(data["sessionToken"], str) and data["sessionToken"]
    assert "expiresAt" in data

    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"next-auth.session-token={data['sessionToken']};")
    assert "HttpOnly" in cookie
    assert "SameSite=lax" in cookie
    assert "Path=/" in cookie


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_identical(client: AsyncClient, register):
    await register()

    wrong_password = await client.post(
        "/auth/signin", json={"email": "alice@acme.com", "password": "Wrong42Password"}
    )
    unknown_email = await client.post(
        "/auth/signin", json={"email": "ghost@acme.com", "password": PASSWORD}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "error": "Invalid email or password",
        "code": "INVALID_CREDENTIALS",
    }
    assert "set-cookie" not in wrong_password.headers


@pytest.mark.asyncio
async def test_signout_revokes_token(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    response = await client.post("/auth/signout", headers=headers)
    assert response.status_code == 200
    assert "Max-Age=0" in response.headers["set-cookie"]

    after = await client.get("/auth/session", headers=headers)
    assert after.status_code == 401


@pytest.mark.asyncio
async def test_session_reflects_claims_snapshot(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    await client.patch("/user/profile", json={"displayName": "Alice Cooper"}, headers=headers)

    stale = await client.get("/auth/session", headers=headers)
    assert stale.status_code == 200
    assert stale.json()["data"]["user"]["name"] == "Alice"

    refreshed = await client.post("/auth/session/refresh", headers=headers)
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["user"]["displayName"] == "Alice Cooper"

    client.cookies.clear()
    new_headers = {"Authorization": f"Bearer {refreshed.json()['data']['sessionToken']}"}
    current = await client.get("/auth/session", headers=new_headers)
    assert current.json()["data"]["user"]["name"] == "Alice Cooper"
    # Refreshing never extends the session
    assert current.json()["data"]["expires"] == stale.json()["data"]["expires"]


@pytest.mark.asyncio
async def test_session_requires_authentication(client: AsyncClient):
    response = await client.get("/auth/session")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(client: AsyncClient):
    response = await client.get("/auth/session", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_verify_password(client: AsyncClient, register, signin):
    await register()
    headers = await signin()

    ok = await client.post("/auth/verify-password", json={"password": PASSWORD}, headers=headers)
    wrong = await client.post(
        "/auth/verify-password", json={"password": "Wrong42Password"}, headers=headers
    )
    anonymous = await client.post("/auth/verify-password", json={"password": PASSWORD})

    assert ok.status_code == 200
    assert wrong.status_code == 400
    assert wrong.json()["code"] == "INVALID_PASSWORD"
    assert anonymous.status_code == 401

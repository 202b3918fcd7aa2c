import pytest
from httpx import AsyncClient

PASSWORD = "Sunrise42Tide"


@pytest.mark.asyncio
async def test_successful_registration(client: AsyncClient, register):
    """A new account is created ONLINE with a username derived from the display name"""
    response = await register(email="Alice@Acme.com", display_name="Alice.B")

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Account created successfully"

    user = data["data"]["user"]
    assert user["email"] == "alice@acme.com"
    assert user["username"] == "aliceb"
    assert user["displayName"] == "Alice.B"
    assert user["status"] == "ONLINE"
    assert "password" not in user
    assert "passwordHash" not in user


@pytest.mark.asyncio
async def test_email_conflict_is_case_insensitive(client: AsyncClient, register):
    """Registering A@B.com after a@b.com reports the email field"""
    await register(email="alice@acme.com", display_name="Alice")

    response = await register(email="ALICE@acme.com", display_name="Someone Else")

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "EMAIL_ALREADY_EXISTS"
    assert data["field"] == "email"


@pytest.mark.asyncio
async def test_display_name_conflict(client: AsyncClient, register):
    await register(email="alice@acme.com", display_name="Alice")

    response = await register(email="bob@acme.com", display_name="alice")

    assert response.status_code == 400
    assert response.json()["field"] == "displayName"


@pytest.mark.asyncio
async def test_second_user_gets_suffixed_username(client: AsyncClient, register):
    await register(email="alice@acme.com", display_name="Alice")

    response = await register(email="alice2@acme.com", display_name="Alice.")

    assert response.status_code == 201
    assert response.json()["data"]["user"]["username"] == "alice1"


@pytest.mark.asyncio
async def test_weak_password_lists_rules(client: AsyncClient, register):
    response = await register(password="alllowercase")

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "WEAK_PASSWORD"
    assert [d["message"] for d in data["details"]] == [
        "Password must contain at least one uppercase letter",
        "Password must contain at least one number",
    ]


@pytest.mark.asyncio
async def test_mismatched_confirmation(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={
            "email": "alice@acme.com",
            "displayName": "Alice",
            "password": PASSWORD,
            "confirmPassword": PASSWORD + "x",
        },
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Validation failed"
    assert {"field": "confirmPassword", "message": "Passwords don't match"} in data["details"]


@pytest.mark.asyncio
async def test_invalid_fields(client: AsyncClient, register):
    response = await register(email="not-an-email", display_name="A<>")

    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert {"email", "displayName"} <= fields


@pytest.mark.asyncio
async def test_blocked_email_domain(client: AsyncClient, register):
    response = await register(email="alice@tempmail.com")

    assert response.status_code == 400
    assert response.json()["code"] == "EMAIL_DOMAIN_NOT_ALLOWED"


@pytest.mark.asyncio
async def test_prototype_pollution_payload_is_rejected(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={
            "__proto__": {"isAdmin": True},
            "email": "alice@acme.com",
            "displayName": "Alice",
            "password": PASSWORD,
            "confirmPassword": PASSWORD,
        },
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"

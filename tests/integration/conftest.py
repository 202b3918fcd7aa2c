import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work

PASSWORD = "Sunrise42Tide"


class IntegrationConfig(ApplicationConfig):
    ENVIRONMENT = "development"
    IS_PRODUCTION = False
    ENABLE_LOGGING_MIDDLEWARE = False
    RATE_LIMIT_ENABLED = True


class ProductionConfig(IntegrationConfig):
    ENVIRONMENT = "production"
    IS_PRODUCTION = True
    CORS_ORIGINS = ["https://chat.acme.com"]
    COOKIE_DOMAIN = "chat.acme.com"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


def _build_app(config, db_session):
    from src.api.app import create_app

    app = create_app(config)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def app(db_session):
    return _build_app(IntegrationConfig, db_session)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def production_client(db_session):
    app = _build_app(ProductionConfig, db_session)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://test") as ac:
        yield ac


@pytest.fixture
def register(client):
    """POST /auth/register with a strong default password"""

    async def _register(email="alice@acme.com", display_name="Alice", password=PASSWORD):
        return await client.post(
            "/auth/register",
            json={
                "email": email,
                "displayName": display_name,
                "password": password,
                "confirmPassword": password,
            },
        )

    return _register


@pytest.fixture
def signin(client):
    """Sign in and return Authorization headers for the new session"""

    async def _signin(email="alice@acme.com", password=PASSWORD):
        response = await client.post("/auth/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        # Requests authenticate explicitly through the Bearer header
        client.cookies.clear()
        token = response.json()["data"]["sessionToken"]
        return {"Authorization": f"Bearer {token}"}

    return _signin

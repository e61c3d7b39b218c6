import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.auth_service import AuthService
from src.app.services.credential_hasher import CredentialHasher
from src.depends import get_auth_service, get_unit_of_work, lockout_policy, token_codec

TEST_PASSWORD = "SecurePass123!"

# Minimum bcrypt cost keeps the suite fast
fast_hasher = CredentialHasher(rounds=4)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
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


@pytest_asyncio.fixture
async def client(db_session):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    def override_get_auth_service():
        return AuthService(
            SqlAlchemyUnitOfWork(db_session),
            token_codec,
            hasher=fast_hasher,
            lockout=lockout_policy,
            expose_verification_token=True,
        )

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_auth_service] = override_get_auth_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_user(client):
    """Register an account and return the response body."""

    async def _register(email="user@example.com", password=TEST_PASSWORD, name="Test User"):
        response = await client.post(
            "/auth/register", json={"email": email, "password": password, "name": name}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def verified_user(client, register_user):
    """Register, verify and log in. Returns the login response body."""

    async def _verified(email="user@example.com", password=TEST_PASSWORD):
        registered = await register_user(email=email, password=password)
        verify = await client.post(
            "/auth/verify-email", json={"token": registered["verification_token"]}
        )
        assert verify.status_code == 200, verify.text
        login = await client.post("/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        # Tests pass credentials explicitly
        client.cookies.clear()
        return login.json()

    return _verified


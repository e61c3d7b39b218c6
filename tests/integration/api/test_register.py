import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, User


@pytest.mark.asyncio
async def test_successful_registration(client: AsyncClient, db_session):
    """Registration creates an unverified attendee and a verification token"""
    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "pw123456",
        "name": "A",
        "phone": "+15550100",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "a@x.com"
    assert data["user"]["name"] == "A"
    assert data["user"]["verified"] is False
    assert data["user"]["role"] == "attendee"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]
    assert len(data["verification_token"]) == 64

    user = (await db_session.exec(select(User).where(User.email == "a@x.com"))).one()
    assert user.password_hash != "pw123456"
    assert user.password_hash.startswith("$2")
    assert user.verification_token == data["verification_token"]

    events = (await db_session.exec(select(AuditEvent))).all()
    assert [e.action for e in events] == ["REGISTER"]


@pytest.mark.asyncio
async def test_duplicate_email(client: AsyncClient, register_user):
    await register_user(email="a@x.com")

    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "another-pass",
        "name": "B",
    })

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_USER"


@pytest.mark.asyncio
async def test_invalid_email_rejected(client: AsyncClient):
    response = await client.post("/auth/register", json={
        "email": "not-an-email",
        "password": "pw123456",
        "name": "A",
    })

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_short_password_rejected(client: AsyncClient):
    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "short",
        "name": "A",
    })

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_password_over_72_bytes_rejected(client: AsyncClient):
    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "p" * 73,
        "name": "A",
    })

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_multibyte_password_over_72_bytes_rejected(client: AsyncClient):
    """40 characters fit max_length but encode to 80 bytes"""
    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "é" * 40,
        "name": "A",
    })

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_multibyte_password_within_72_bytes_accepted(client: AsyncClient):
    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "é" * 36,
        "name": "A",
    })

    assert response.status_code == 201

import uuid

import pytest
from fastapi import status
from sqlalchemy import select

from app.models import User
from app.services.auth import create_access_token, decode_access_token, verify_password
from tests.conftest import auth_headers

REGISTRATION = {"name": "Aamir", "email": "a@x.com", "password": "secret1"}


@pytest.mark.asyncio
async def test_register_then_login(client):
    registered = await client.post("/api/auth/register", json=REGISTRATION)

    assert registered.status_code == status.HTTP_201_CREATED
    body = registered.json()
    assert body["token"]
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["role"] == "user"
    assert str(decode_access_token(body["token"])) == body["user"]["id"]

    logged_in = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert logged_in.status_code == status.HTTP_200_OK
    assert logged_in.json()["user"]["id"] == body["user"]["id"]

    wrong = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret2"})
    assert wrong.status_code == status.HTTP_401_UNAUTHORIZED
    assert wrong.json() == {"message": "Invalid credentials"}


@pytest.mark.asyncio
async def test_login_unknown_email_is_401(client):
    response = await client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "secret1"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_password_is_stored_hashed(client, db):
    await client.post("/api/auth/register", json=REGISTRATION)

    stored = (await db.execute(select(User).where(User.email == "a@x.com"))).scalars().one()
    assert stored.password_hash != "secret1"
    assert verify_password("secret1", stored.password_hash)


@pytest.mark.asyncio
async def test_duplicate_email_is_400(client):
    await client.post("/api/auth/register", json=REGISTRATION)

    response = await client.post("/api/auth/register", json=dict(REGISTRATION, name="Someone else"))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "User already exists"}


@pytest.mark.asyncio
@pytest.mark.parametrize("changes, field", [
    ({"password": "12345"}, "password"),
    ({"email": "not-an-email"}, "email"),
    ({"name": ""}, "name"),
    ({"phone": "call me"}, "phone"),
])
async def test_register_validation(client, changes, field):
    response = await client.post("/api/auth/register", json=dict(REGISTRATION, **changes))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert field in {e["field"] for e in response.json()["errors"]}


@pytest.mark.asyncio
async def test_register_with_phone(client):
    response = await client.post("/api/auth/register", json=dict(REGISTRATION, phone="+91 9876543210"))

    assert response.status_code == status.HTTP_201_CREATED


def test_token_carries_user_id():
    user_id = uuid.uuid4()
    assert decode_access_token(create_access_token(user_id)) == user_id


@pytest.mark.asyncio
async def test_me_requires_token(client):
    response = await client.get("/api/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_me_and_profile_update(client, user):
    headers = auth_headers(user)

    me = await client.get("/api/auth/me", headers=headers)
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["email"] == "user@example.com"
    assert "passwordHash" not in me.json()
    assert "password_hash" not in me.json()

    updated = await client.patch("/api/auth/me", json={"name": "Renamed", "phone": "9876543210"}, headers=headers)
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["phone"] == "9876543210"

    again = await client.get("/api/auth/me", headers=headers)
    assert again.json()["name"] == "Renamed"


@pytest.mark.asyncio
async def test_saved_searches_lifecycle(client, user):
    headers = auth_headers(user)

    first = await client.post(
        "/api/auth/saved-searches",
        json={"name": "Srinagar homes", "district": "Srinagar", "propertyType": "residential", "maxPrice": 6000000},
        headers=headers,
    )
    assert first.status_code == status.HTTP_200_OK
    second = await client.post("/api/auth/saved-searches", json={"category": "rent", "bedrooms": 2}, headers=headers)

    searches = second.json()
    assert [s["name"] for s in searches] == ["Srinagar homes", None]
    assert searches[0]["maxPrice"] == 6000000
    assert searches[1]["bedrooms"] == 2

    listed = await client.get("/api/auth/saved-searches", headers=headers)
    assert listed.json() == searches

    removed = await client.delete(f"/api/auth/saved-searches/{searches[0]['id']}", headers=headers)
    assert removed.status_code == status.HTTP_200_OK
    missing = await client.delete("/api/auth/saved-searches/99999", headers=headers)
    assert missing.status_code == status.HTTP_200_OK

    remaining = await client.get("/api/auth/saved-searches", headers=headers)
    assert [s["id"] for s in remaining.json()] == [searches[1]["id"]]


@pytest.mark.asyncio
async def test_saved_search_rejects_invalid_filters(client, user):
    response = await client.post(
        "/api/auth/saved-searches", json={"district": "Atlantis"}, headers=auth_headers(user)
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST

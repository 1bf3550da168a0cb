from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.database import get_session
from app.dependencies.geocoding import get_geocode_client, locations_rate_limiter
from app.main import app
from app.models import Base, Property, User
from app.services.auth import create_access_token, hash_password
from app.services.geocode_cache import GeocodeCache
from app.services.geocoding import GeocodeClient

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)

PROPERTY_PAYLOAD = {
    "title": "Lake view house",
    "description": "Three bedroom house a short walk from Dal Lake",
    "price": 4500000,
    "location": "Rajbagh",
    "district": "Srinagar",
    "propertyType": "residential",
    "category": "sale",
    "bedrooms": 3,
    "bathrooms": 2,
    "area": 1800,
    "areaUnit": "sqft",
    "amenities": ["parking", "garden"],
    "images": ["https://cdn.example.com/listings/1.jpg"],
}


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeNominatim:
    """Stands in for the Nominatim HTTP API and records every request."""

    def __init__(self):
        self.requests = []
        self.payload = []
        self.status_code = 200
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def calls(self) -> int:
        return len(self.requests)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


async def make_user(db, email="user@example.com", name="Test User", role="user", password="secret1") -> User:
    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    await db.commit()
    return user


async def make_property(db, owner: User, minutes: int = 0, **overrides) -> Property:
    values = {
        "title": "Lake view house",
        "description": "Three bedroom house",
        "price": 4500000,
        "location": "Rajbagh",
        "district": "Srinagar",
        "property_type": "residential",
        "category": "sale",
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 1800,
        "area_unit": "sqft",
        "amenities": ["parking"],
        "images": ["https://cdn.example.com/listings/1.jpg"],
        "featured": False,
        "status": "available",
        "created_at": BASE_TIME + timedelta(minutes=minutes),
    }
    values.update(overrides)
    prop = Property(**values, created_by_id=owner.id)
    db.add(prop)
    await db.commit()
    return prop


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def admin(db):
    return await make_user(db, email="admin@example.com", name="Site Admin", role="admin")


@pytest_asyncio.fixture
async def user(db):
    return await make_user(db)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def nominatim():
    return FakeNominatim()


@pytest.fixture
def geocoder(clock, nominatim):
    return GeocodeClient(
        cache=GeocodeCache(clock=clock),
        base_url="https://nominatim.test",
        user_agent="RoyalEstatesTests/1.0",
        country_codes="in",
        transport=httpx.MockTransport(nominatim.handler),
    )


@pytest_asyncio.fixture
async def client(session_factory, geocoder):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    async def no_rate_limit():
        return None

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[locations_rate_limiter] = no_rate_limit
    app.dependency_overrides[get_geocode_client] = lambda: geocoder
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides = {}

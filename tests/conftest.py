"""Test configuration and fixtures"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from uuid import uuid4

from reserva.main import app
from reserva.database import Base, get_db
from reserva.api.auth import create_access_token
from reserva.api.deps import get_core
from reserva.booking.core import build_core
from reserva.models.business import Business, BusinessKind, Resource, ResourceKind


@pytest.fixture
async def test_engine(tmp_path):
    """Create test database (file-backed SQLite so sessions see each other's commits)"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reserva.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_hotel(test_db, owner_id):
    """Create a test hotel"""
    hotel = Business(id=uuid4(), name="Hotel Test", kind=BusinessKind.HOTEL, owner_id=owner_id)
    test_db.add(hotel)
    await test_db.commit()
    return hotel


@pytest.fixture
async def test_rooms(test_db, test_hotel):
    """Room 101 sleeps four, room 102 sleeps two"""
    rooms = [
        Resource(id=uuid4(), business_id=test_hotel.id, kind=ResourceKind.ROOM, number="101", capacity=4),
        Resource(id=uuid4(), business_id=test_hotel.id, kind=ResourceKind.ROOM, number="102", capacity=2),
    ]
    test_db.add_all(rooms)
    await test_db.commit()
    return rooms


@pytest.fixture
async def test_restaurant(test_db, owner_id):
    """Create a test restaurant"""
    restaurant = Business(id=uuid4(), name="Test Bistro", kind=BusinessKind.RESTAURANT, owner_id=owner_id)
    test_db.add(restaurant)
    await test_db.commit()
    return restaurant


@pytest.fixture
async def test_tables(test_db, test_restaurant):
    tables = [
        Resource(id=uuid4(), business_id=test_restaurant.id, kind=ResourceKind.TABLE, number="T1", capacity=2),
        Resource(id=uuid4(), business_id=test_restaurant.id, kind=ResourceKind.TABLE, number="T2", capacity=6),
    ]
    test_db.add_all(tables)
    await test_db.commit()
    return tables


@pytest.fixture
async def core(session_factory):
    """Booking core over the test database; past dates allowed for fixed-date scenarios"""
    return await build_core(
        session_factory,
        supported_currencies=["USD", "EUR"],
        allow_past_bookings=True,
    )


@pytest.fixture
def test_user_id():
    return uuid4()


@pytest.fixture
def other_user_id():
    return uuid4()


@pytest.fixture
def owner_id():
    """User owning the test hotel and the test restaurant"""
    return uuid4()


@pytest.fixture
async def client(core, session_factory):
    """Create test client wired to the test booking core"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_core] = lambda: core
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(client, test_user_id):
    """Create authenticated test client"""
    token = create_access_token(test_user_id, email="guest@example.com")
    client.headers["Authorization"] = f"Bearer {token}"

    return client


@pytest.fixture
def other_user_headers(other_user_id):
    """Authorization header of a second user"""
    token = create_access_token(other_user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers(owner_id):
    """Authorization header of the businesses' owner"""
    token = create_access_token(owner_id)
    return {"Authorization": f"Bearer {token}"}

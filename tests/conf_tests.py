import os
import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from shareit.main import app
from shareit.db import Base, get_db
from shareit.models.booking import Booking, BookingStatus
from shareit.models.item import Item
from shareit.models.user import User
from shareit.utils.auth import build_booking_service
from shareit.utils.clock import fixed_clock

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
Base.metadata.create_all(bind=engine)

# Frozen "now" for the service-level tests
NOW = datetime(2026, 3, 10, 12, 0, 0)


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

client = TestClient(app)


def user_headers(user):
    return {"X-Sharer-User-Id": str(user.id)}


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables before each test"""
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_next_user():
    """Helper function to generate unique user numbers"""
    if not hasattr(get_next_user, "user_count"):
        get_next_user.user_count = 0
    get_next_user.user_count += 1
    return get_next_user.user_count


def create_user(db):
    number = get_next_user()
    user = User(name=f"user_{number}", email=f"user_{number}@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_item(db, owner, available=True):
    item = Item(
        name="Cordless drill",
        description="18V drill with two batteries",
        available=available,
        owner_id=owner.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def create_booking(db, item, booker, start, end, status=BookingStatus.WAITING):
    booking = Booking(
        item_id=item.id, booker_id=booker.id, start=start, end=end, status=status
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


@pytest.fixture
def owner(test_db):
    return create_user(test_db)


@pytest.fixture
def booker(test_db):
    return create_user(test_db)


@pytest.fixture
def stranger(test_db):
    return create_user(test_db)


@pytest.fixture
def item(test_db, owner):
    return create_item(test_db, owner)


@pytest.fixture
def service(test_db):
    """Booking service wired to the test session with the clock frozen at NOW"""
    return build_booking_service(test_db, clock=fixed_clock(NOW))


@pytest.fixture
def waiting_booking(test_db, item, booker):
    return create_booking(
        test_db, item, booker, NOW + timedelta(days=1), NOW + timedelta(days=2)
    )

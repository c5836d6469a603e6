import os

# Must be set before app.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, get_db, enable_sqlite_foreign_keys
from app.core.rate_limit import limiter
from app.models.agency import Agency
from app.models.booking import Booking, BookingStatus
from app.models.location import Location, LocationValue
from app.models.property import Property
from app.models.user import User

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function", autouse=True)
def reset_rate_limits():
    """Rate limit counters live in memory and would leak between tests."""
    limiter.reset()
    yield


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


# ============== DATA HELPERS ==============

def create_location(db_session, names):
    """Insert a location from {language: name} pairs, in the given order."""
    location = Location()
    for language, name in names.items():
        location.values.append(LocationValue(language=language, value=name))
    db_session.add(location)
    db_session.commit()
    db_session.refresh(location)
    return location


def create_agency(db_session, full_name, is_active=True):
    agency = Agency(full_name=full_name, avatar=f"{full_name.lower().replace(' ', '-')}.png", is_active=is_active)
    db_session.add(agency)
    db_session.commit()
    db_session.refresh(agency)
    return agency


def create_booking(db_session, prop, status=BookingStatus.PAID.value, days_from_now=10, nights=3,
                   cancellation=True, cancel_request=False, user=None):
    start = datetime.combine(datetime.now().date(), datetime.min.time()) + timedelta(days=days_from_now)
    booking = Booking(
        property_id=prop.id,
        agency_id=prop.agency_id,
        user_id=user.id if user else None,
        from_date=start,
        to_date=start + timedelta(days=nights),
        status=status,
        cancellation=cancellation,
        cancel_request=cancel_request,
        price=120.0 * nights,
    )
    db_session.add(booking)
    db_session.commit()
    db_session.refresh(booking)
    return booking


# ============== FIXTURES ==============

@pytest.fixture(scope="function")
def paris(db_session):
    return create_location(db_session, {"en": "Paris", "fr": "Paris"})


@pytest.fixture(scope="function")
def test_agency(db_session):
    return create_agency(db_session, "Seaside Rentals")


@pytest.fixture(scope="function")
def second_agency(db_session):
    return create_agency(db_session, "Mountain Homes")


@pytest.fixture(scope="function")
def test_user(db_session):
    user = User(email="renter@example.com", full_name="Test Renter", language="en")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def test_property(db_session, test_agency, paris):
    prop = Property(
        name="Montmartre Loft",
        agency_id=test_agency.id,
        location_id=paris.id,
        price=120.0,
        cancellation=0,
    )
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop


@pytest.fixture(scope="function")
def second_property(db_session, second_agency):
    lyon = create_location(db_session, {"en": "Lyon", "fr": "Lyon"})
    prop = Property(
        name="Alpine Chalet",
        agency_id=second_agency.id,
        location_id=lyon.id,
        price=200.0,
        cancellation=50,
    )
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop

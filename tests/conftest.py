from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import bella_cucina.config as config_mod
import bella_cucina.db as db
from bella_cucina.main import app
from bella_cucina.models import Base, MenuItem
from bella_cucina.rate_limit import limiter

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"


def _seed_menu(session):
    session.add_all([
        MenuItem(id="margherita", name="Margherita Pizza", category="pizza", price=Decimal("18.00")),
        MenuItem(id="pepperoni", name="Pepperoni Pizza", category="pizza", price=Decimal("19.00")),
        MenuItem(id="carbonara", name="Spaghetti Carbonara", category="pasta", price=Decimal("22.00")),
        MenuItem(id="tiramisu", name="Tiramisu", category="desserts", price=Decimal("12.00")),
        MenuItem(id="cannoli", name="Cannoli", category="desserts", price=Decimal("11.00")),
        MenuItem(
            id="osso-buco",
            name="Osso Buco",
            category="mains",
            price=Decimal("32.00"),
            is_available=False,
        ),
    ])
    session.commit()


@pytest.fixture
def session_factory():
    """Sessionmaker bound to a seeded in-memory SQLite DB.

    Uses StaticPool so all connections share the same in-memory database.
    """
    engine = db.build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    _seed_menu(session)
    session.close()

    yield TestingSessionLocal

    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory, monkeypatch):
    """Shared FastAPI TestClient using the in-memory SQLite DB.

    Sets up test admin credentials and disables rate limiting.
    """
    monkeypatch.setattr(config_mod, "ADMIN_USERNAME", TEST_ADMIN_USERNAME)
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)

    # Patch the db module used by the app (startup creates tables on it)
    monkeypatch.setattr(db, "engine", session_factory.kw["bind"])
    monkeypatch.setattr(db, "SessionLocal", session_factory)

    monkeypatch.setattr(limiter, "enabled", False)

    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_auth():
    """Returns HTTP Basic Auth tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)


@pytest.fixture
def checkout_payload():
    """Builds a valid checkout body; pass items and any field overrides."""
    def build(items=None, **overrides):
        payload = {
            "fullName": "Maria Rossi",
            "email": "maria@example.com",
            "phone": "555-0100",
            "address": "12 Mulberry St",
            "city": "New York",
            "state": "NY",
            "zipCode": "10013",
            "deliveryNotes": "Ring twice",
            "paymentMethod": "credit",
            "items": items if items is not None else [{"menuItemId": "margherita", "quantity": 2}],
        }
        payload.update(overrides)
        return payload
    return build

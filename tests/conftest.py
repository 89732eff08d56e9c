"""
Shared test fixtures.

Sets up an isolated snapshot database so tests never touch
the real one, and a fresh in-memory ledger per test. API tests
get a client whose ledger, rate service and database session
are all the fixtures below.
"""

from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from personal_ledger.api.deps import get_ledger, get_rate_service
from personal_ledger.main import app
from personal_ledger.models.base import Base, get_db
from personal_ledger.services.exchange_rates import ExchangeRateService
from personal_ledger.services.ledger_service import LedgerService


# SQLite keeps the tests free of external database infrastructure.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# Units per one USD. Small round numbers keep expected values exact.
TEST_RATES = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.5"),
    "JPY": Decimal("100"),
}


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory():
    """Session factory bound to the test database, for persistence listeners."""
    return TestSessionLocal


@pytest.fixture
def ledger():
    """A fresh, empty ledger with a fixed rate table."""
    return LedgerService(rate_provider=lambda: TEST_RATES)


@pytest.fixture
def rate_service():
    """Rate service answering from an in-process rate API."""
    def handler(request):
        return httpx.Response(200, json={
            "base": "USD",
            "rates": {code: str(rate) for code, rate in TEST_RATES.items()},
        })

    return ExchangeRateService(
        base_url="https://rates.test/latest",
        reference_currency="USD",
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def client(db_session, ledger, rate_service):
    """
    Provide a test client wired to the fixtures.

    We override the dependencies so the FastAPI app uses our
    test session and ledger instead of the real ones.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_rate_service] = lambda: rate_service
    yield TestClient(app)
    app.dependency_overrides.clear()

"""
Pytest configuration and shared fixtures.
"""

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from homecalc.calculations import CallToAction, build_default_registry
from homecalc.db.database import get_db
from homecalc.db.models import Base, CalculationRecord, CalculatorEvent  # noqa: F401
from homecalc.main import create_app

TEST_CTA = CallToAction(url="https://example.com/consult", text="Book a Call")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def registry():
    """Default registry with a seeded random source."""
    return build_default_registry(TEST_CTA, rng=random.Random(42))


@pytest.fixture
def app(registry):
    """Application wired to the test registry and database."""
    application = create_app(registry)
    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)

"""Pytest fixtures for API testing."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from orgunits.main import app
from orgunits.core.database import get_db
from orgunits.core.hierarchy import HierarchyEngine, ROOT_SENTINEL
from orgunits.core.repository import OrganizationRepository
from orgunits.models.base import Base
from orgunits.models.organization import Organization

# In-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client with database override.

    Note: db_session already created tables, so we don't need to create them again.
    """
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def repository(db_session):
    return OrganizationRepository(db_session)


@pytest.fixture
def hierarchy(repository):
    return HierarchyEngine(repository)


@pytest.fixture
def org_hierarchy(db_session):
    """Create a test organization hierarchy.

    GHQ (active root)
    ├── EUHQ
    │   └── DEHQ
    └── USHQ
    """
    ghq = Organization(
        id="GHQ",
        description="Global HQ",
        parent_id=ROOT_SENTINEL,
        active=True,
        tz="UTC",
        currency="USD",
        locale="en-US"
    )
    euhq = Organization(id="EUHQ", description="Europe HQ", parent_id="GHQ", currency="EUR")
    ushq = Organization(id="USHQ", description="Americas HQ", parent_id="GHQ")
    dehq = Organization(id="DEHQ", description="Germany HQ", parent_id="EUHQ", locale="de-DE")
    db_session.add_all([ghq, euhq, ushq, dehq])
    db_session.commit()

    return {
        "ghq": ghq,
        "euhq": euhq,
        "ushq": ushq,
        "dehq": dehq
    }

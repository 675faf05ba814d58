"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from payplus_roi.api.main import create_app
from payplus_roi.domain.engine import ROIEngine
from payplus_roi.domain.snapshot import default_snapshot, snapshot_to_dict
from payplus_roi.infrastructure.database.models import Base
from payplus_roi.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test_payplus.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def roi_engine() -> ROIEngine:
    """Engine on the default snapshot with the standard rate table"""
    return ROIEngine(
        exchange_rates={"USD": 1.00, "GBP": 0.79, "EUR": 0.92},
        currency_symbols={"USD": "$", "GBP": "£", "EUR": "€"},
    )


@pytest.fixture
def canonical_snapshot() -> Dict[str, Any]:
    """
    Reference scenario: $50M over 1.1M payments, 90% rails, 60% local,
    half of cross-border needing FX, tiers 40/35/25.
    """
    return snapshot_to_dict(default_snapshot())

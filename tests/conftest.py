"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Generator, List
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from roundup_gateway.api.dependencies import get_advisor_client, get_forecast_rng, get_ledger_client
from roundup_gateway.api.main import create_app
from roundup_gateway.domain.models import IncomePoint
from roundup_gateway.infrastructure.clients.advisor import AdvisorClient
from roundup_gateway.infrastructure.database.models import Base
from roundup_gateway.infrastructure.database.session import get_db
from tests.helpers import FixedJitter


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
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
def ledger_client() -> MagicMock:
    """Ledger client whose webhook never leaves the process"""
    client = MagicMock()
    client.send_roundup_event = AsyncMock(return_value=None)
    return client


@pytest.fixture
def advisor_client() -> AdvisorClient:
    """Advisor without credentials, so it always falls back to default text"""
    advisor = AdvisorClient()
    advisor.api_key = None
    return advisor


@pytest.fixture
def client(db: Session, ledger_client: MagicMock, advisor_client: AdvisorClient) -> TestClient:
    """Create FastAPI test client with test database and stubbed collaborators"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger_client] = lambda: ledger_client
    app.dependency_overrides[get_advisor_client] = lambda: advisor_client
    app.dependency_overrides[get_forecast_rng] = lambda: FixedJitter(1.0)
    return TestClient(app)


@pytest.fixture
def weekly_income() -> List[IncomePoint]:
    """Eight weekly gig payouts growing from 1000 to 1700"""
    start = date(2024, 1, 1)
    return [
        IncomePoint(date=start + timedelta(days=7 * i), amount=Decimal(1000 + 100 * i))
        for i in range(8)
    ]

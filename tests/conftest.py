"""Pytest fixtures for testing"""

import pytest
from typing import Dict, Generator, List, Optional, Tuple
import httpx
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from interest_calc.api.main import create_app
from interest_calc.api.dependencies import get_rates_client, get_settings_store
from interest_calc.domain.models import RateTable
from interest_calc.infrastructure.clients.rates import RatesClient
from interest_calc.infrastructure.database.models import Base
from interest_calc.infrastructure.database.repositories import SettingsRepository


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_RATES_URL = "https://rates.test/v2/exchange-rates"

RATES_DOCUMENT = {
    "data": {
        "currency": "USD",
        "rates": {
            "00": "1.0",
            "USD": "1.0",
            "EUR": "0.9",
            "GBP": "0.75",
        },
    }
}


class MemoryStore:
    """Dict-backed settings store that records every write"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})
        self.writes: List[Tuple[str, str]] = []

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes.append((key, value))


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def store_factory():
    """Build a MemoryStore pre-filled with stored values"""
    return MemoryStore


@pytest.fixture
def settings_repository() -> Generator[SettingsRepository, None, None]:
    """Create test database and a settings repository bound to it"""
    Base.metadata.create_all(bind=engine)
    try:
        yield SettingsRepository(TestingSessionLocal)
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def rate_table() -> RateTable:
    """Small rate table including the home-currency marker"""
    return RateTable(rates={"USD": "1.0", "EUR": "0.9", "00": "1.0"}, base_currency="USD")


@pytest.fixture
def rates_transport() -> httpx.MockTransport:
    """Rate API stub answering with RATES_DOCUMENT"""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=RATES_DOCUMENT)

    return httpx.MockTransport(handler)


@pytest.fixture
def client(settings_repository: SettingsRepository, rates_transport: httpx.MockTransport) -> TestClient:
    """Create FastAPI test client with test database and stubbed rate API"""
    app = create_app()

    app.dependency_overrides[get_settings_store] = lambda: settings_repository
    app.dependency_overrides[get_rates_client] = lambda: RatesClient(url=TEST_RATES_URL, transport=rates_transport)
    return TestClient(app)

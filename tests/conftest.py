"""
Shared test fixtures: stub per-diem lookup, calculator, test client.
"""

import os
import pytest
from fastapi.testclient import TestClient

# Keep tests off the network and independent of any local .env
os.environ["GSA_API_KEY"] = ""
os.environ["PER_DIEM_PROXY_URL"] = ""

from backend.main import app
from backend.package_calculator import PayPackageCalculator
from backend.routers.packages import get_calculator
from backend.schemas import DailyRates


class StubLookup:
    """Returns fixed rates and records every call."""

    def __init__(self, rates: DailyRates):
        self.rates = rates
        self.calls = []

    def fetch_daily_rates(self, city, state, zip_code, month, year):
        self.calls.append((city, state, zip_code, month, year))
        return self.rates


@pytest.fixture
def standard_rates():
    """GSA standard rate: $96 lodging + $59 M&IE."""
    return DailyRates(daily_lodging=96, daily_meals=59, is_standard_rate=True)


@pytest.fixture
def stub_lookup(standard_rates):
    return StubLookup(standard_rates)


@pytest.fixture
def calculator(stub_lookup):
    return PayPackageCalculator(rate_lookup=stub_lookup)


@pytest.fixture
def client(calculator):
    """FastAPI test client with the calculator swapped for the stubbed one."""
    app.dependency_overrides[get_calculator] = lambda: calculator
    yield TestClient(app)
    app.dependency_overrides.clear()


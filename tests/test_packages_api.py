"""
API tests: /api/packages endpoints, input validation, settings wiring.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from backend.config import Settings, settings
from backend.routers.packages import get_calculator
from backend.schemas import ContractInput


def _payload(**overrides):
    """camelCase body as the form sends it."""
    body = {
        "billRate": 100,
        "hoursPerWeek": 40,
        "durationWeeks": 10,
        "city": "Austin",
        "state": "TX",
        "zipCode": "",
        "month": "Jan",
        "year": "2025",
        "hasBenefits": False,
    }
    body.update(overrides)
    return body


# ============================================================
# POST /api/packages/calculate
# ============================================================

def test_calculate_returns_all_scenarios(client):
    response = client.post("/api/packages/calculate", json=_payload())
    assert response.status_code == 200
    data = response.json()

    assert data["stateMinimumWage"] == 7.25
    assert [s["grossMarginPercent"] for s in data["scenarios"]] == [40.0, 35.0, 30.0, 25.0]
    assert data["dailyRates"] == {"dailyLodging": 96.0, "dailyMeals": 59.0, "isStandardRate": True}

    first = data["scenarios"][0]
    assert first["weekly"]["grossPay"] == pytest.approx(2400.0)
    assert first["weekly"]["taxablePay"] == pytest.approx(1315.0)
    assert first["weekly"]["stipendPay"] == pytest.approx(1085.0)
    assert first["hourly"]["taxableRate"] == pytest.approx(32.875)
    assert first["total"]["contractRevenue"] == 40000.0
    assert first["internalBreakdown"]["totalMargin"] == pytest.approx(16000.0)
    assert first["minimumWageApplied"] is False
    assert first["rateTooLow"] is False


def test_calculate_blank_zip_treated_as_absent(client, stub_lookup):
    client.post("/api/packages/calculate", json=_payload(zipCode="  "))
    assert stub_lookup.calls == [("Austin", "TX", None, "Jan", "2025")]


def test_calculate_normalizes_state_and_month(client, stub_lookup):
    response = client.post("/api/packages/calculate", json=_payload(state="ca", month="mar"))
    assert response.status_code == 200
    assert response.json()["stateMinimumWage"] == 16.0
    assert stub_lookup.calls[0][1] == "CA"
    assert stub_lookup.calls[0][3] == "Mar"


@pytest.mark.parametrize("field,value", [
    ("hoursPerWeek", 0),
    ("hoursPerWeek", 61),
    ("hoursPerWeek", 37.5),
    ("billRate", 0),
    ("billRate", -10),
    ("durationWeeks", 0),
    ("state", "Texas"),
    ("month", "January"),
    ("year", "25"),
    ("zipCode", "7870"),
])
def test_calculate_rejects_invalid_input(client, stub_lookup, field, value):
    response = client.post("/api/packages/calculate", json=_payload(**{field: value}))
    assert response.status_code == 422
    assert stub_lookup.calls == []


def test_calculate_missing_required_field(client):
    body = _payload()
    del body["billRate"]
    response = client.post("/api/packages/calculate", json=body)
    assert response.status_code == 422


# ============================================================
# GET endpoints
# ============================================================

def test_list_margins(client):
    response = client.get("/api/packages/margins")
    assert response.status_code == 200
    assert response.json()["grossMarginPercents"] == [40.0, 35.0, 30.0, 25.0]


def test_minimum_wage_lookup(client):
    data = client.get("/api/packages/minimum-wage/wa").json()
    assert data == {"state": "WA", "minimumWage": 16.28, "isFederalFloor": False}

    unknown = client.get("/api/packages/minimum-wage/ZZ").json()
    assert unknown["minimumWage"] == 7.25
    assert unknown["isFederalFloor"] is True


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# ============================================================
# Contract model and settings
# ============================================================

def test_contract_accepts_snake_case_and_is_frozen():
    contract = ContractInput(bill_rate=50, hours_per_week=36, duration_weeks=13,
                             state=" nm ", zip_code="87501-1234", month="sep", year=2025)
    assert contract.state == "NM"
    assert contract.zip_code == "87501"
    assert contract.month == "Sep"
    assert contract.year == "2025"
    assert contract.is_local_contract is False
    with pytest.raises(ValidationError):
        contract.bill_rate = 75


def test_default_calculator_from_settings():
    calc = get_calculator()
    assert calc.margin_scenarios == tuple(settings.MARGIN_SCENARIOS)
    assert calc.cost_model is None


def test_calculator_models_employer_costs_when_enabled():
    with patch.object(settings, "MODEL_EMPLOYER_COSTS", True):
        calc = get_calculator()
    assert calc.cost_model.payroll_tax_rate == settings.PAYROLL_TAX_RATE
    assert calc.cost_model.benefits_weekly_cost == settings.BENEFITS_WEEKLY_COST


def test_margin_scenarios_from_environment(monkeypatch):
    monkeypatch.setenv("MARGIN_SCENARIOS", "[0.33, 0.30, 0.25]")
    assert Settings().MARGIN_SCENARIOS == [0.33, 0.30, 0.25]


@pytest.mark.parametrize("margins", [[], [1.0], [0.4, -0.1]])
def test_margin_scenarios_validated(margins):
    with pytest.raises(ValidationError):
        Settings(MARGIN_SCENARIOS=margins)


def test_bad_zip_message_mentions_zip_plus_four(client):
    response = client.post("/api/packages/calculate", json=_payload(zipCode="787011"))
    assert response.status_code == 422
    assert "5 digits or ZIP+4" in response.json()["detail"][0]["msg"]

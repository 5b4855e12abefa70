import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .wage_tables import DAYS_PER_WEEK, MONTH_ABBREVIATIONS

_STATE_RE = re.compile(r"^[A-Z]{2}$")
_ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")
_YEAR_RE = re.compile(r"^\d{4}$")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire. Accepts either on input."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ContractInput(CamelModel):
    bill_rate: float = Field(gt=0)
    hours_per_week: int = Field(ge=1, le=60)
    duration_weeks: int = Field(gt=0)
    city: str = ""
    state: str
    zip_code: Optional[str] = None
    month: str
    year: str
    is_local_contract: bool = False
    has_benefits: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @field_validator("city")
    @classmethod
    def _strip_city(cls, v: str) -> str:
        return v.strip()

    @field_validator("state")
    @classmethod
    def _check_state(cls, v: str) -> str:
        code = v.strip().upper()
        if not _STATE_RE.match(code):
            raise ValueError("state must be a 2-letter code")
        return code

    @field_validator("zip_code")
    @classmethod
    def _check_zip(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not _ZIP_RE.match(v):
            raise ValueError("zip code must be 5 digits or ZIP+4")
        return v[:5]

    @field_validator("month")
    @classmethod
    def _check_month(cls, v: str) -> str:
        month = v.strip().title()
        if month not in MONTH_ABBREVIATIONS:
            raise ValueError(f"month must be one of {', '.join(MONTH_ABBREVIATIONS)}")
        return month

    @field_validator("year", mode="before")
    @classmethod
    def _check_year(cls, v) -> str:
        year = str(v).strip()
        if not _YEAR_RE.match(year):
            raise ValueError("year must be a 4-digit year")
        return year


class DailyRates(CamelModel):
    daily_lodging: float = Field(ge=0, allow_inf_nan=False)
    daily_meals: float = Field(ge=0, allow_inf_nan=False)
    is_standard_rate: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @property
    def daily_total(self) -> float:
        return self.daily_lodging + self.daily_meals

    @property
    def weekly_stipend(self) -> float:
        return self.daily_total * DAYS_PER_WEEK


class EmployerCostModel(BaseModel):
    """Employer-side cost lines deducted from margin in the internal breakdown."""
    benefits_weekly_cost: float = Field(default=0.0, ge=0)
    payroll_tax_rate: float = Field(default=0.0, ge=0, lt=1)
    workers_comp_weekly: float = Field(default=0.0, ge=0)

    class Config:
        frozen = True


class WeeklyPay(CamelModel):
    gross_pay: float
    taxable_pay: float
    stipend_pay: float


class HourlyRates(CamelModel):
    blended_rate: float
    taxable_rate: float
    stipend_rate: float
    overtime_rate: float


class ContractTotals(CamelModel):
    contract_revenue: float
    contract_gross_pay: float
    gross_pay: float
    taxable_pay: float
    stipend_pay: float


class InternalBreakdown(CamelModel):
    total_contract_revenue: float
    total_contract_gross_pay: float
    benefits_cost: float = 0.0
    payroll_taxes: float = 0.0
    workers_comp: float = 0.0
    total_margin: float
    weekly_margin: float


class ScenarioResult(CamelModel):
    gross_margin_percent: float
    weekly: WeeklyPay
    hourly: HourlyRates
    total: ContractTotals
    internal_breakdown: InternalBreakdown
    minimum_wage_applied: bool = False
    rate_too_low: bool = False


class PackageResult(CamelModel):
    scenarios: List[ScenarioResult]
    state_minimum_wage: float
    daily_rates: DailyRates

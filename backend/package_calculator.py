"""
Pay Package Calculator.

Turns one contract (bill rate, hours, duration, location) into a fixed list
of pay packages, one per gross-margin target.
Pure math: the per-diem lookup is the only outside call.

Input: ContractInput + DailyRates (from PerDiemLookup) + state minimum wage
Output: PackageResult (scenarios in margin-list order + state minimum wage)
"""

import logging
from types import MappingProxyType
from typing import Optional

from .per_diem_lookup import PerDiemLookup
from .schemas import (
    ContractInput,
    ContractTotals,
    DailyRates,
    EmployerCostModel,
    HourlyRates,
    InternalBreakdown,
    PackageResult,
    ScenarioResult,
    WeeklyPay,
)
from .wage_tables import (
    BASE_WEEKLY_HOURS,
    FULL_STIPEND_MIN_HOURS,
    MARGIN_SCENARIOS,
    OVERTIME_MULTIPLIER,
    STATE_MINIMUM_WAGES,
    resolve_minimum_wage,
)

logger = logging.getLogger(__name__)

# Local contracts get no tax-free stipend, so no lookup is made
LOCAL_CONTRACT_RATES = DailyRates(daily_lodging=0.0, daily_meals=0.0, is_standard_rate=False)


def build_scenario(margin: float, contract: ContractInput, rates: DailyRates,
                   minimum_wage: float,
                   cost_model: Optional[EmployerCostModel] = None) -> ScenarioResult:
    """
    One pay package at one margin target.

    Rates are sized on a 40-hour week first, then applied to the scheduled hours:
    - taxable pay must cover minimum wage at 40 hours; the stipend gives way if not
    - a stipend pushed below zero by the clamp is floored at 0 (rate_too_low)
    - under 30 hours the stipend is prorated by hours / 40
    - hours over 40 are paid at 1.5x the blended rate, all taxable
    """
    hours = contract.hours_per_week
    weeks = contract.duration_weeks

    blended_rate = contract.bill_rate * (1 - margin)
    overtime_rate = blended_rate * OVERTIME_MULTIPLIER

    # --- 40-hour baseline ---
    base_weekly_gross = blended_rate * BASE_WEEKLY_HOURS
    weekly_stipend = 0.0 if contract.is_local_contract else rates.weekly_stipend

    base_weekly_taxable = base_weekly_gross - weekly_stipend
    actual_weekly_stipend = weekly_stipend
    minimum_wage_applied = False
    rate_too_low = False

    min_weekly_taxable = minimum_wage * BASE_WEEKLY_HOURS
    if base_weekly_taxable < min_weekly_taxable:
        base_weekly_taxable = min_weekly_taxable
        actual_weekly_stipend = base_weekly_gross - base_weekly_taxable
        minimum_wage_applied = True
        if actual_weekly_stipend < 0:
            # Blended rate alone is under minimum wage
            actual_weekly_stipend = 0.0
            rate_too_low = True

    taxable_rate = base_weekly_taxable / BASE_WEEKLY_HOURS
    stipend_rate = actual_weekly_stipend / BASE_WEEKLY_HOURS
    if rate_too_low:
        overtime_rate = max(overtime_rate, taxable_rate * OVERTIME_MULTIPLIER)

    # --- Scheduled hours ---
    regular_hours = min(BASE_WEEKLY_HOURS, hours)
    overtime_hours = max(0, hours - BASE_WEEKLY_HOURS)
    weekly_taxable = taxable_rate * regular_hours + overtime_rate * overtime_hours

    if hours >= FULL_STIPEND_MIN_HOURS:
        final_weekly_stipend = actual_weekly_stipend
    else:
        final_weekly_stipend = actual_weekly_stipend * hours / BASE_WEEKLY_HOURS

    weekly_gross = weekly_taxable + final_weekly_stipend

    # --- Contract totals ---
    contract_revenue = contract.bill_rate * hours * weeks
    total_gross = weekly_gross * weeks
    total_taxable = weekly_taxable * weeks
    total_stipend = final_weekly_stipend * weeks

    benefits_cost = payroll_taxes = workers_comp = 0.0
    if cost_model is not None:
        if contract.has_benefits:
            benefits_cost = cost_model.benefits_weekly_cost * weeks
        payroll_taxes = cost_model.payroll_tax_rate * total_taxable
        workers_comp = cost_model.workers_comp_weekly * weeks

    total_margin = contract_revenue - total_gross - benefits_cost - payroll_taxes - workers_comp

    return ScenarioResult(
        gross_margin_percent=round(margin * 100, 4),
        weekly=WeeklyPay(
            gross_pay=weekly_gross,
            taxable_pay=weekly_taxable,
            stipend_pay=final_weekly_stipend,
        ),
        hourly=HourlyRates(
            blended_rate=blended_rate,
            taxable_rate=taxable_rate,
            stipend_rate=stipend_rate,
            overtime_rate=overtime_rate,
        ),
        total=ContractTotals(
            contract_revenue=contract_revenue,
            contract_gross_pay=total_gross,
            gross_pay=total_gross,
            taxable_pay=total_taxable,
            stipend_pay=total_stipend,
        ),
        internal_breakdown=InternalBreakdown(
            total_contract_revenue=contract_revenue,
            total_contract_gross_pay=total_gross,
            benefits_cost=benefits_cost,
            payroll_taxes=payroll_taxes,
            workers_comp=workers_comp,
            total_margin=total_margin,
            weekly_margin=total_margin / weeks,
        ),
        minimum_wage_applied=minimum_wage_applied,
        rate_too_low=rate_too_low,
    )


class PayPackageCalculator:
    """
    Builds every margin scenario for a contract.

    Margin list, wage table and cost model are fixed at construction;
    the calculator holds no other state.
    """

    def __init__(self, rate_lookup: Optional[PerDiemLookup] = None,
                 margin_scenarios=MARGIN_SCENARIOS,
                 minimum_wages=STATE_MINIMUM_WAGES,
                 cost_model: Optional[EmployerCostModel] = None):
        self.rate_lookup = rate_lookup or PerDiemLookup()
        self.margin_scenarios = tuple(margin_scenarios)
        self.minimum_wages = MappingProxyType(dict(minimum_wages))
        self.cost_model = cost_model

    def calculate_packages(self, contract: ContractInput) -> PackageResult:
        """
        Looks up per-diem rates for the contract location, then builds all scenarios.
        Local contracts skip the lookup.
        """
        if contract.is_local_contract:
            rates = LOCAL_CONTRACT_RATES
        else:
            rates = self.rate_lookup.fetch_daily_rates(
                contract.city,
                contract.state,
                contract.zip_code,
                contract.month,
                contract.year,
            )
        return self.calculate_with_rates(contract, rates)

    def calculate_with_rates(self, contract: ContractInput, rates: DailyRates) -> PackageResult:
        """Builds all scenarios from already-known daily rates. No network."""
        minimum_wage = self.minimum_wage_for(contract.state)

        scenarios = [
            build_scenario(margin, contract, rates, minimum_wage, self.cost_model)
            for margin in self.margin_scenarios
        ]

        clamped = [s.gross_margin_percent for s in scenarios if s.rate_too_low]
        if clamped:
            logger.info(
                "Bill rate %.2f too low for margins %s in %s; stipend floored at 0",
                contract.bill_rate, clamped, contract.state,
            )

        return PackageResult(
            scenarios=scenarios,
            state_minimum_wage=minimum_wage,
            daily_rates=rates,
        )

    def minimum_wage_for(self, state_code: str) -> float:
        wage = resolve_minimum_wage(state_code, self.minimum_wages)
        if (state_code or "").strip().upper() not in self.minimum_wages:
            logger.debug("No minimum wage on file for %r; using federal floor", state_code)
        return wage

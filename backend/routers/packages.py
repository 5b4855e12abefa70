from fastapi import APIRouter, Depends

from ..config import settings
from ..package_calculator import PayPackageCalculator
from ..per_diem_lookup import PerDiemLookup
from ..schemas import ContractInput, EmployerCostModel, PackageResult

router = APIRouter(prefix="/packages", tags=["packages"])


def get_calculator() -> PayPackageCalculator:
    """Calculator wired from settings. Tests override this dependency."""
    cost_model = None
    if settings.MODEL_EMPLOYER_COSTS:
        cost_model = EmployerCostModel(
            benefits_weekly_cost=settings.BENEFITS_WEEKLY_COST,
            payroll_tax_rate=settings.PAYROLL_TAX_RATE,
            workers_comp_weekly=settings.WORKERS_COMP_WEEKLY,
        )
    return PayPackageCalculator(
        rate_lookup=PerDiemLookup(),
        margin_scenarios=settings.MARGIN_SCENARIOS,
        cost_model=cost_model,
    )


@router.post("/calculate", response_model=PackageResult)
def calculate_packages(contract: ContractInput,
                       calculator: PayPackageCalculator = Depends(get_calculator)):
    return calculator.calculate_packages(contract)


@router.get("/margins")
def list_margins(calculator: PayPackageCalculator = Depends(get_calculator)):
    return {
        "margins": list(calculator.margin_scenarios),
        "grossMarginPercents": [round(m * 100, 4) for m in calculator.margin_scenarios],
    }


@router.get("/minimum-wage/{state}")
def get_minimum_wage(state: str, calculator: PayPackageCalculator = Depends(get_calculator)):
    code = state.strip().upper()
    return {
        "state": code,
        "minimumWage": calculator.minimum_wage_for(code),
        "isFederalFloor": code not in calculator.minimum_wages,
    }

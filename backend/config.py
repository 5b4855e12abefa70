from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Pay Package Builder"
    LOG_LEVEL: str = "INFO"

    # GSA per-diem lookup
    GSA_API_URL: str = "https://api.gsa.gov/travel/perdiem/v2"
    GSA_API_KEY: str = ""
    PER_DIEM_PROXY_URL: str = ""  # when set, the proxy is called instead of GSA
    PER_DIEM_TIMEOUT_SECONDS: float = 10.0

    # Gross-margin targets, highest first
    MARGIN_SCENARIOS: List[float] = [0.40, 0.35, 0.30, 0.25]

    # Employer cost lines for the internal margin breakdown
    MODEL_EMPLOYER_COSTS: bool = False
    BENEFITS_WEEKLY_COST: float = 150.00
    PAYROLL_TAX_RATE: float = 0.0765
    WORKERS_COMP_WEEKLY: float = 25.00

    @field_validator("MARGIN_SCENARIOS")
    @classmethod
    def _margins_in_range(cls, value: List[float]) -> List[float]:
        if not value:
            raise ValueError("MARGIN_SCENARIOS must not be empty")
        for margin in value:
            if not 0.0 <= margin < 1.0:
                raise ValueError(f"margin {margin} must be in [0, 1)")
        return value

    class Config:
        env_file = ".env"


settings = Settings()

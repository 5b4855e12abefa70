# Pay package constants: margin targets, state minimum wages, GSA standard rates.
# Tables are read-only; pass replacements into PayPackageCalculator instead of editing them.

from types import MappingProxyType

# Gross-margin targets, in display order (highest margin first)
MARGIN_SCENARIOS = (0.40, 0.35, 0.30, 0.25)

# Hours used to normalize hourly rates and the overtime threshold
BASE_WEEKLY_HOURS = 40
OVERTIME_MULTIPLIER = 1.5

# Below this many scheduled hours the stipend is prorated by hours / 40
FULL_STIPEND_MIN_HOURS = 30

DAYS_PER_WEEK = 7

# GSA CONUS standard rate, used whenever a location-specific rate is unavailable
STANDARD_LODGING_RATE = 96.0
STANDARD_MEALS_RATE = 59.0

FEDERAL_MINIMUM_WAGE = 7.25

# State minimum wages ($/hr), 2024-2025
STATE_MINIMUM_WAGES = MappingProxyType({
    "AL": 7.25, "AK": 11.91, "AZ": 13.85, "AR": 11.00,
    "CA": 16.00, "CO": 14.42, "CT": 16.35, "DE": 15.00,
    "DC": 17.50, "FL": 13.00, "GA": 7.25, "HI": 14.00,
    "ID": 7.25, "IL": 15.00, "IN": 7.25, "IA": 7.25,
    "KS": 7.25, "KY": 7.25, "LA": 7.25, "ME": 14.65,
    "MD": 15.00, "MA": 15.00, "MI": 10.56, "MN": 11.13,
    "MS": 7.25, "MO": 13.75, "MT": 10.55, "NE": 13.50,
    "NV": 12.00, "NH": 7.25, "NJ": 15.49, "NM": 12.00,
    "NY": 15.50, "NC": 7.25, "ND": 7.25, "OH": 10.70,
    "OK": 7.25, "OR": 14.70, "PA": 7.25, "RI": 15.00,
    "SC": 7.25, "SD": 11.50, "TN": 7.25, "TX": 7.25,
    "UT": 7.25, "VT": 14.01, "VA": 12.41, "WA": 16.28,
    "WV": 8.75, "WI": 7.25, "WY": 7.25,
})

# GSA schedules are keyed by these abbreviations; index + 1 is the month number
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def resolve_minimum_wage(state_code, table=STATE_MINIMUM_WAGES) -> float:
    """State minimum wage for a 2-letter code. Unknown or blank codes get the federal floor."""
    code = (state_code or "").strip().upper()
    return float(table.get(code, FEDERAL_MINIMUM_WAGE))


def month_number(abbreviation: str) -> int:
    """'Jan' -> 1 ... 'Dec' -> 12. Returns 0 for anything else."""
    value = (abbreviation or "").strip().title()
    if value in MONTH_ABBREVIATIONS:
        return MONTH_ABBREVIATIONS.index(value) + 1
    return 0

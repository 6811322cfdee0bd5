"""Settings, series registry and policy tables."""

from .settings import Settings, SERIES_IDS, FRED_SERIES, SCORECARD_DEMO_KEY
from .policy import (
    FederalLoanRates,
    PovertyGuideline,
    FEDERAL_LOAN_RATES,
    POVERTY_GUIDELINES,
    CURRENT_LOAN_RATE_YEAR,
    CURRENT_POVERTY_GUIDELINE_YEAR,
    loan_rates_for,
    poverty_guideline_for,
)

__all__ = [
    "Settings",
    "SERIES_IDS",
    "FRED_SERIES",
    "SCORECARD_DEMO_KEY",
    "FederalLoanRates",
    "PovertyGuideline",
    "FEDERAL_LOAN_RATES",
    "POVERTY_GUIDELINES",
    "CURRENT_LOAN_RATE_YEAR",
    "CURRENT_POVERTY_GUIDELINE_YEAR",
    "loan_rates_for",
    "poverty_guideline_for",
]

"""Value objects returned by the data clients."""

from .economic import (
    InterestRate,
    DebtSnapshot,
    RateTrend,
    StudentLoanRateContext,
    Observation,
    SeriesMetadata,
    InflationSnapshot,
    EconomicIndicators,
    StudentLoanTotal,
    InflationAdjustment,
    PovertyContext,
    EconomicSummary,
)
from .schools import (
    SchoolRecord,
    SchoolSearchParams,
    SearchResponse,
    SchoolSuggestion,
    SchoolFinancialAid,
)

__all__ = [
    "InterestRate",
    "DebtSnapshot",
    "RateTrend",
    "StudentLoanRateContext",
    "Observation",
    "SeriesMetadata",
    "InflationSnapshot",
    "EconomicIndicators",
    "StudentLoanTotal",
    "InflationAdjustment",
    "PovertyContext",
    "EconomicSummary",
    "SchoolRecord",
    "SchoolSearchParams",
    "SearchResponse",
    "SchoolSuggestion",
    "SchoolFinancialAid",
]

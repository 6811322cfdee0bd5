"""Financial aid data clients: College Scorecard, FRED and U.S. Treasury."""

from finaid_data.config import Settings
from finaid_data.data import (
    TTLCache,
    FinAidDataError,
    UpstreamHTTPError,
    InsufficientDataError,
    TreasuryFetcher,
    FredFetcher,
    ScorecardFetcher,
    build_economic_summary,
)

__all__ = [
    "Settings",
    "TTLCache",
    "FinAidDataError",
    "UpstreamHTTPError",
    "InsufficientDataError",
    "TreasuryFetcher",
    "FredFetcher",
    "ScorecardFetcher",
    "build_economic_summary",
]

"""Data fetching and caching."""

from .cache import TTLCache
from .errors import FinAidDataError, UpstreamHTTPError, InsufficientDataError
from .treasury_fetcher import TreasuryFetcher
from .fred_fetcher import FredFetcher, available_series
from .scorecard_fetcher import ScorecardFetcher, normalize_school
from .summary import build_economic_summary

__all__ = [
    "TTLCache",
    "FinAidDataError",
    "UpstreamHTTPError",
    "InsufficientDataError",
    "TreasuryFetcher",
    "FredFetcher",
    "available_series",
    "ScorecardFetcher",
    "normalize_school",
    "build_economic_summary",
]

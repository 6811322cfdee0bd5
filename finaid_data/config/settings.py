"""Configuration settings for the data clients."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# FRED series registry - the series the clients know by name
SERIES_IDS: dict[str, str] = {
    "CPI": "CPIAUCSL",
    "FEDERAL_FUNDS_RATE": "FEDFUNDS",
    "UNEMPLOYMENT_RATE": "UNRATE",
    "MEDIAN_HOUSEHOLD_INCOME": "MEHOINUSA672N",
    "TOTAL_STUDENT_LOANS": "TOTALSL",
    "GDP": "GDP",
    "INFLATION_RATE": "FPCPITOTLZGUSA",
}

FRED_SERIES: dict[str, str] = {
    "CPIAUCSL": "Consumer Price Index for All Urban Consumers",
    "FEDFUNDS": "Federal Funds Effective Rate",
    "UNRATE": "Unemployment Rate",
    "MEHOINUSA672N": "Real Median Household Income",
    "TOTALSL": "Total Student Loans Outstanding",
    "GDP": "Gross Domestic Product",
    "FPCPITOTLZGUSA": "Inflation, consumer prices",
}

# Public api.data.gov key, rate limited, good enough for local development
SCORECARD_DEMO_KEY = "DEMO_KEY"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    """Application settings."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    scorecard_api_key: str = field(
        default_factory=lambda: os.getenv("COLLEGE_SCORECARD_API_KEY", SCORECARD_DEMO_KEY)
    )
    http_timeout: float = field(default_factory=lambda: _env_float("HTTP_TIMEOUT", 30.0))

    def has_fred(self) -> bool:
        """Check if a FRED API key is configured."""
        return bool(self.fred_api_key)

    def uses_scorecard_demo_key(self) -> bool:
        return self.scorecard_api_key == SCORECARD_DEMO_KEY

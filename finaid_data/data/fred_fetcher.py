"""FRED API fetcher for CPI, rates and student loan series."""

import concurrent.futures
import json
import logging
from datetime import date, datetime, timedelta, timezone

import httpx
import pandas as pd

from finaid_data.config import (
    Settings,
    SERIES_IDS,
    FRED_SERIES,
    CURRENT_POVERTY_GUIDELINE_YEAR,
    poverty_guideline_for,
)
from finaid_data.data.base import BaseFetcher
from finaid_data.data.cache import TTLCache
from finaid_data.data.errors import InsufficientDataError
from finaid_data.models import (
    EconomicIndicators,
    InflationAdjustment,
    InflationSnapshot,
    Observation,
    PovertyContext,
    SeriesMetadata,
    StudentLoanTotal,
)


logger = logging.getLogger(__name__)

# Series fetched together for the indicators snapshot, keyed by snapshot field
INDICATOR_SERIES: dict[str, str] = {
    "cpi": SERIES_IDS["CPI"],
    "federal_funds_rate": SERIES_IDS["FEDERAL_FUNDS_RATE"],
    "unemployment_rate": SERIES_IDS["UNEMPLOYMENT_RATE"],
    "total_student_loans": SERIES_IDS["TOTAL_STUDENT_LOANS"],
}

MIN_ADJUSTMENT_YEAR = 1900


def available_series() -> dict[str, str]:
    """Series IDs the clients know by name, with their titles."""
    return dict(FRED_SERIES)


def _percent_change(current: float, reference: float) -> float:
    return (current - reference) / reference * 100


def _to_metadata(series: dict) -> SeriesMetadata:
    return SeriesMetadata(
        id=series.get("id", ""),
        title=series.get("title", ""),
        observation_start=series.get("observation_start", ""),
        observation_end=series.get("observation_end", ""),
        frequency=series.get("frequency", ""),
        units=series.get("units", ""),
        notes=series.get("notes"),
    )


class FredFetcher(BaseFetcher):
    """Fetches series from the FRED API with in-memory caching."""

    BASE_URL = "https://api.stlouisfed.org/fred"
    SOURCE = "FRED"
    CACHE_TTL = timedelta(hours=6)

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        cache: TTLCache | None = None,
        **kwargs,
    ) -> None:
        super().__init__(settings, client, cache, **kwargs)
        if not self.settings.has_fred():
            logger.warning(
                "FRED_API_KEY not set. Get one at: "
                "https://fred.stlouisfed.org/docs/api/api_key.html"
            )

    def _params(self, **params) -> dict:
        return {"api_key": self.settings.fred_api_key, "file_type": "json", **params}

    def get_series_info(self, series_id: str) -> SeriesMetadata | None:
        """Fetch metadata for a series, or None if FRED has no such series."""
        cache_key = f"fred:series:{series_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        logger.info(f"Fetching FRED series info: {series_id}")
        data = self._get_json("/series", self._params(series_id=series_id))

        if not data.get("seriess"):
            return None

        info = _to_metadata(data["seriess"][0])
        self.cache.set(cache_key, info)
        return info

    def get_series_observations(
        self,
        series_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int | None = None,
        sort_order: str = "desc",
    ) -> list[Observation]:
        """
        Fetch observations for a series.

        FRED marks missing values with "."; those observations are dropped,
        so every returned Observation has a numeric value.

        Args:
            series_id: FRED series ID
            start_date: observation_start, YYYY-MM-DD
            end_date: observation_end, YYYY-MM-DD
            limit: Maximum number of observations
            sort_order: "asc" or "desc" by date

        Returns:
            List of observations in the requested order
        """
        options = {
            "start_date": start_date,
            "end_date": end_date,
            "limit": limit,
            "sort_order": sort_order,
        }
        cache_key = f"fred:observations:{series_id}:{json.dumps(options, sort_keys=True)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Returning cached FRED observations for {series_id}")
            return cached

        params = self._params(series_id=series_id, sort_order=sort_order)
        if start_date:
            params["observation_start"] = start_date
        if end_date:
            params["observation_end"] = end_date
        if limit:
            params["limit"] = limit

        logger.info(f"Fetching FRED observations for {series_id}")
        data = self._get_json("/series/observations", params)

        observations = []
        if data.get("observations"):
            df = pd.DataFrame(data["observations"])
            df["value"] = pd.to_numeric(df["value"], errors="coerce")
            df = df[["date", "value"]].dropna()
            observations = [
                Observation(date=row.date, value=float(row.value))
                for row in df.itertuples(index=False)
            ]

        self.cache.set(cache_key, observations)
        return observations

    def get_latest_observation(self, series_id: str) -> Observation | None:
        observations = self.get_series_observations(series_id, limit=1, sort_order="desc")
        return observations[0] if observations else None

    def get_inflation_data(self) -> InflationSnapshot:
        """
        Current CPI with month-over-month and year-over-year change.

        Uses the trailing 13 months of CPI. Year-over-year compares against
        the same calendar month one year earlier and is 0 when that month is
        missing from the window.

        Raises:
            InsufficientDataError: if fewer than 2 CPI observations come back
        """
        cache_key = "fred:inflation"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        today = pd.Timestamp(self.today())
        start = today - pd.DateOffset(months=13)
        observations = self.get_series_observations(
            SERIES_IDS["CPI"],
            start_date=start.strftime("%Y-%m-%d"),
            end_date=today.strftime("%Y-%m-%d"),
            sort_order="desc",
        )

        if len(observations) < 2:
            raise InsufficientDataError("Insufficient CPI data")

        current = observations[0]
        last_month = observations[1]
        last_year = _same_month_last_year(current, observations)

        year_over_year = 0.0
        if last_year is not None:
            year_over_year = _percent_change(current.value, last_year.value)

        result = InflationSnapshot(
            current_cpi=current.value,
            year_over_year_change=year_over_year,
            month_over_month_change=_percent_change(current.value, last_month.value),
            last_updated=current.date,
        )

        self.cache.set(cache_key, result)
        return result

    def get_economic_indicators(self) -> EconomicIndicators:
        """
        Latest CPI, fed funds rate, unemployment and student loan totals.

        The four series are fetched in parallel. A series that fails comes
        back as None; the snapshot itself does not fail.
        """
        cache_key = "fred:indicators"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        # create the shared client before fanning out
        self.client
        latest: dict[str, Observation | None] = {}

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(INDICATOR_SERIES)) as executor:
            futures = {
                field: executor.submit(self.get_latest_observation, series_id)
                for field, series_id in INDICATOR_SERIES.items()
            }
            for field, future in futures.items():
                try:
                    latest[field] = future.result()
                except Exception as e:
                    logger.warning(f"Indicator {INDICATOR_SERIES[field]} unavailable: {e}")
                    latest[field] = None

        result = EconomicIndicators(
            **latest,
            last_updated=datetime.now(timezone.utc).isoformat(),
        )

        self.cache.set(cache_key, result)
        return result

    def get_total_student_loans(self) -> StudentLoanTotal:
        """
        Total student loans outstanding. TOTALSL is reported in billions.

        Raises:
            InsufficientDataError: if the series has no observations
        """
        observation = self.get_latest_observation(SERIES_IDS["TOTAL_STUDENT_LOANS"])
        if observation is None:
            raise InsufficientDataError("Unable to fetch student loan data")

        return StudentLoanTotal(
            amount=observation.value,
            date=observation.date,
            formatted_amount=f"${observation.value:.1f} billion",
        )

    def get_cpi_history(self, years: int = 10) -> list[Observation]:
        """CPI observations over the trailing window, oldest first."""
        start = pd.Timestamp(self.today()) - pd.DateOffset(years=years)
        return self.get_series_observations(
            SERIES_IDS["CPI"],
            start_date=start.strftime("%Y-%m-%d"),
            sort_order="asc",
        )

    def adjust_for_inflation(
        self, amount: float, from_year: int, to_year: int | None = None
    ) -> float:
        """
        Scale an amount by the CPI ratio between two years.

        Uses the first and last CPI observations between Jan 1 of each year.
        With fewer than 2 observations the amount is returned unchanged.
        """
        if to_year is None:
            to_year = self.today().year

        observations = self.get_series_observations(
            SERIES_IDS["CPI"],
            start_date=f"{from_year}-01-01",
            end_date=f"{to_year}-01-01",
            sort_order="asc",
        )

        if len(observations) < 2:
            return amount

        from_cpi = observations[0].value
        to_cpi = observations[-1].value
        return amount * (to_cpi / from_cpi)

    def inflation_adjustment(
        self, amount: float, from_year: int, to_year: int | None = None
    ) -> InflationAdjustment:
        """
        Inflation-adjusted amount with the percentage change.

        Raises:
            ValueError: if amount is not positive or a year is outside
                1900 through the current year
        """
        current_year = self.today().year
        if to_year is None:
            to_year = current_year

        if amount <= 0:
            raise ValueError("amount must be positive")
        for label, year in (("from_year", from_year), ("to_year", to_year)):
            if not MIN_ADJUSTMENT_YEAR <= year <= current_year:
                raise ValueError(
                    f"{label} must be between {MIN_ADJUSTMENT_YEAR} and {current_year}"
                )

        adjusted = self.adjust_for_inflation(amount, from_year, to_year)
        return InflationAdjustment(
            original_amount=amount,
            from_year=from_year,
            to_year=to_year,
            adjusted_amount=adjusted,
            percentage_change=_percent_change(adjusted, amount),
        )

    def search_series(self, query: str, limit: int = 10) -> list[SeriesMetadata]:
        """Free-text series search. Not cached."""
        data = self._get_json(
            "/series/search", self._params(search_text=query, limit=limit)
        )
        return [_to_metadata(series) for series in data.get("seriess", [])]

    def get_poverty_context(
        self, guideline_year: int = CURRENT_POVERTY_GUIDELINE_YEAR
    ) -> PovertyContext:
        """
        Federal poverty guideline with a factor from live year-over-year CPI.

        Raises:
            ValueError: if guideline_year has no entry in POVERTY_GUIDELINES
        """
        guideline = poverty_guideline_for(guideline_year)
        inflation = self.get_inflation_data()

        return PovertyContext(
            federal_poverty_level=guideline.household_of_one,
            per_additional_person=guideline.per_additional_person,
            inflation_adjustment_factor=1 + inflation.year_over_year_change / 100,
            last_updated=inflation.last_updated,
            guideline_year=guideline_year,
        )


def _same_month_last_year(
    current: Observation, observations: list[Observation]
) -> Observation | None:
    current_date = date.fromisoformat(current.date)
    for obs in observations:
        obs_date = date.fromisoformat(obs.date)
        if obs_date.year == current_date.year - 1 and obs_date.month == current_date.month:
            return obs
    return None

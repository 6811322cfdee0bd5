"""U.S. Treasury Fiscal Data fetcher for interest rates and public debt.

The Fiscal Data API needs no API key.
"""

import json
import logging
from datetime import timedelta

import pandas as pd

from finaid_data.config import CURRENT_LOAN_RATE_YEAR, loan_rates_for
from finaid_data.data.base import BaseFetcher
from finaid_data.models import DebtSnapshot, InterestRate, RateTrend, StudentLoanRateContext


logger = logging.getLogger(__name__)

RATE_FIELDS = "record_date,security_type_desc,avg_interest_rate_amt"
DEBT_FIELDS = "record_date,debt_held_public_amt,intragov_hold_amt,tot_pub_debt_out_amt"


def _date_filters(start_date: str | None, end_date: str | None) -> list[str]:
    filters = []
    if start_date:
        filters.append(f"record_date:gte:{start_date}")
    if end_date:
        filters.append(f"record_date:lte:{end_date}")
    return filters


def _numeric_frame(rows: list[dict], columns: list[str]) -> pd.DataFrame:
    """Coerce upstream numeric strings, dropping rows that do not parse."""
    df = pd.DataFrame(rows)
    for column in columns:
        df[column] = pd.to_numeric(df[column], errors="coerce")
    return df.dropna(subset=columns)


class TreasuryFetcher(BaseFetcher):
    """Fetches average interest rates and debt data from Treasury Fiscal Data."""

    BASE_URL = "https://api.fiscaldata.treasury.gov/services/api/fiscal_service"
    SOURCE = "Treasury"
    CACHE_TTL = timedelta(hours=1)

    def get_interest_rates(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        security_type: str | None = None,
        limit: int | None = None,
        sort_order: str = "desc",
    ) -> list[InterestRate]:
        """
        Get average interest rates on Treasury securities.

        Args:
            start_date: Earliest record date, YYYY-MM-DD
            end_date: Latest record date, YYYY-MM-DD
            security_type: Exact security type description, e.g. "Treasury Notes"
            limit: Page size (default 100)
            sort_order: "asc" or "desc" by record date

        Returns:
            List of InterestRate rows in the requested order
        """
        options = {
            "start_date": start_date,
            "end_date": end_date,
            "security_type": security_type,
            "limit": limit,
            "sort_order": sort_order,
        }
        cache_key = f"treasury:rates:{json.dumps(options, sort_keys=True)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Returning cached Treasury interest rates")
            return cached

        filters = _date_filters(start_date, end_date)
        if security_type:
            filters.append(f"security_type_desc:eq:{security_type}")

        params = {
            "fields": RATE_FIELDS,
            "sort": "record_date" if sort_order == "asc" else "-record_date",
            "page[size]": limit or 100,
        }
        if filters:
            params["filter"] = ",".join(filters)

        logger.info("Fetching interest rates from Treasury API")
        data = self._get_json("/v2/accounting/od/avg_interest_rates", params)

        rates = []
        if data.get("data"):
            df = _numeric_frame(data["data"], ["avg_interest_rate_amt"])
            rates = [
                InterestRate(
                    record_date=row.record_date,
                    security_type_desc=row.security_type_desc,
                    avg_interest_rate_amt=float(row.avg_interest_rate_amt),
                )
                for row in df.itertuples(index=False)
            ]

        self.cache.set(cache_key, rates)
        return rates

    def get_latest_interest_rates(self) -> list[InterestRate]:
        """Most recent 20 rate rows, newest first."""
        return self.get_interest_rates(limit=20, sort_order="desc")

    def get_debt_data(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int | None = None,
    ) -> list[DebtSnapshot]:
        """Debt to the Penny rows, newest first (default 30 rows)."""
        options = {"start_date": start_date, "end_date": end_date, "limit": limit}
        cache_key = f"treasury:debt:{json.dumps(options, sort_keys=True)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Returning cached Treasury debt data")
            return cached

        params = {
            "fields": DEBT_FIELDS,
            "sort": "-record_date",
            "page[size]": limit or 30,
        }
        filters = _date_filters(start_date, end_date)
        if filters:
            params["filter"] = ",".join(filters)

        logger.info("Fetching debt data from Treasury API")
        data = self._get_json("/v2/accounting/od/debt_to_penny", params)

        debt = []
        if data.get("data"):
            amounts = ["debt_held_public_amt", "intragov_hold_amt", "tot_pub_debt_out_amt"]
            df = _numeric_frame(data["data"], amounts)
            debt = [
                DebtSnapshot(
                    record_date=row.record_date,
                    debt_held_by_public=float(row.debt_held_public_amt),
                    intragovernmental_holdings=float(row.intragov_hold_amt),
                    total_public_debt_outstanding=float(row.tot_pub_debt_out_amt),
                )
                for row in df.itertuples(index=False)
            ]

        self.cache.set(cache_key, debt)
        return debt

    def get_student_loan_rate_context(
        self, award_year: str = CURRENT_LOAN_RATE_YEAR
    ) -> StudentLoanRateContext:
        """
        Put live Treasury yields next to the fixed federal student loan rates.

        Federal rates come from the policy table, not from the market data.

        Raises:
            ValueError: if award_year has no entry in FEDERAL_LOAN_RATES
        """
        federal_rates = loan_rates_for(award_year)
        rates = self.get_latest_interest_rates()

        note = next(
            (r for r in rates if "treasury note" in r.security_type_desc.lower()), None
        )
        bond = next(
            (r for r in rates if "treasury bond" in r.security_type_desc.lower()), None
        )

        last_updated = None
        if note is not None:
            last_updated = note.record_date
        elif bond is not None:
            last_updated = bond.record_date

        return StudentLoanRateContext(
            treasury_note_rate=note.avg_interest_rate_amt if note else None,
            treasury_bond_rate=bond.avg_interest_rate_amt if bond else None,
            last_updated=last_updated,
            federal_student_loan_rates=federal_rates,
        )

    def get_interest_rate_trends(self, years: int = 5) -> list[RateTrend]:
        """
        Average rate per calendar year over the trailing window.

        Years without observations are absent rather than zero-filled.
        """
        start = pd.Timestamp(self.today()) - pd.DateOffset(years=years)
        rates = self.get_interest_rates(
            start_date=start.strftime("%Y-%m-%d"),
            limit=1000,
            sort_order="asc",
        )
        if not rates:
            return []

        df = pd.DataFrame(
            {
                "year": pd.to_datetime([r.record_date for r in rates]).year,
                "rate": [r.avg_interest_rate_amt for r in rates],
            }
        )
        yearly = df.groupby("year")["rate"].mean().sort_index()

        return [RateTrend(year=int(year), avg_rate=float(avg)) for year, avg in yearly.items()]

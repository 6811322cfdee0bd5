"""Combined economic snapshot across FRED and Treasury."""

import concurrent.futures
import logging
from datetime import datetime, timezone

from finaid_data.data.fred_fetcher import FredFetcher
from finaid_data.data.treasury_fetcher import TreasuryFetcher
from finaid_data.models import EconomicSummary


logger = logging.getLogger(__name__)


def build_economic_summary(fred: FredFetcher, treasury: TreasuryFetcher) -> EconomicSummary:
    """
    Run the four summary lookups in parallel.

    Each section that raises is logged and left as None, so the summary
    is returned with whatever is available.
    """
    lookups = {
        "economic_indicators": fred.get_economic_indicators,
        "student_loan_rates": treasury.get_student_loan_rate_context,
        "inflation": fred.get_inflation_data,
        "total_student_loans": fred.get_total_student_loans,
    }
    # create the shared clients before fanning out
    fred.client
    treasury.client
    sections = {}

    with concurrent.futures.ThreadPoolExecutor(max_workers=len(lookups)) as executor:
        futures = {name: executor.submit(lookup) for name, lookup in lookups.items()}
        for name, future in futures.items():
            try:
                sections[name] = future.result()
            except Exception as e:
                logger.warning(f"Summary section {name} unavailable: {e}")
                sections[name] = None

    return EconomicSummary(
        **sections,
        last_updated=datetime.now(timezone.utc).isoformat(),
    )

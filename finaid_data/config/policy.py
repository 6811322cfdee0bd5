"""Statutory constants that change on a legislative or annual cycle.

Federal student loan rates are fixed each award year (July 1 - June 30)
from the May 10-year Treasury note auction plus a statutory add-on. Poverty
guidelines are published by HHS each January. Neither is market data, so
they are kept here as versioned tables instead of being derived. Add a new
row when a new year is published and move the CURRENT_* pointer.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FederalLoanRates:
    """Fixed federal Direct Loan interest rates for one award year (percent)."""

    direct_subsidized: float
    direct_unsubsidized: float
    direct_unsubsidized_grad: float
    direct_plus: float
    effective_date: str

    def to_dict(self) -> dict:
        return {
            "directSubsidized": self.direct_subsidized,
            "directUnsubsidized": self.direct_unsubsidized,
            "directUnsubsidizedGrad": self.direct_unsubsidized_grad,
            "directPLUS": self.direct_plus,
            "effectiveDate": self.effective_date,
        }


@dataclass(frozen=True)
class PovertyGuideline:
    """HHS poverty guideline for the 48 contiguous states and DC (dollars)."""

    household_of_one: int
    per_additional_person: int


FEDERAL_LOAN_RATES: dict[str, FederalLoanRates] = {
    "2024-2025": FederalLoanRates(
        direct_subsidized=6.53,
        direct_unsubsidized=6.53,
        direct_unsubsidized_grad=8.08,
        direct_plus=9.08,
        effective_date="2024-07-01",
    ),
    "2025-2026": FederalLoanRates(
        direct_subsidized=6.39,
        direct_unsubsidized=6.39,
        direct_unsubsidized_grad=7.94,
        direct_plus=8.94,
        effective_date="2025-07-01",
    ),
}

POVERTY_GUIDELINES: dict[int, PovertyGuideline] = {
    2024: PovertyGuideline(household_of_one=15060, per_additional_person=5380),
    2025: PovertyGuideline(household_of_one=15650, per_additional_person=5500),
}

CURRENT_LOAN_RATE_YEAR = "2024-2025"
CURRENT_POVERTY_GUIDELINE_YEAR = 2024


def loan_rates_for(award_year: str) -> FederalLoanRates:
    """Federal loan rates for an award year such as "2024-2025"."""
    try:
        return FEDERAL_LOAN_RATES[award_year]
    except KeyError:
        known = ", ".join(sorted(FEDERAL_LOAN_RATES))
        raise ValueError(f"No federal loan rates for award year {award_year} (known: {known})") from None


def poverty_guideline_for(year: int) -> PovertyGuideline:
    try:
        return POVERTY_GUIDELINES[year]
    except KeyError:
        known = ", ".join(str(y) for y in sorted(POVERTY_GUIDELINES))
        raise ValueError(f"No poverty guideline for {year} (known: {known})") from None

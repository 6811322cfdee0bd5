"""Data models for Treasury and FRED data."""

from dataclasses import dataclass

from finaid_data.config.policy import FederalLoanRates


@dataclass
class InterestRate:
    """Average interest rate for one Treasury security type on one date."""

    record_date: str
    security_type_desc: str
    avg_interest_rate_amt: float

    def to_dict(self) -> dict:
        return {
            "recordDate": self.record_date,
            "securityTypeDesc": self.security_type_desc,
            "avgInterestRateAmt": self.avg_interest_rate_amt,
        }


@dataclass
class DebtSnapshot:
    """Debt to the Penny row, amounts in dollars."""

    record_date: str
    debt_held_by_public: float
    intragovernmental_holdings: float
    total_public_debt_outstanding: float

    def to_dict(self) -> dict:
        return {
            "recordDate": self.record_date,
            "debtHeldByPublic": self.debt_held_by_public,
            "intragovernmentalHoldings": self.intragovernmental_holdings,
            "totalPublicDebtOutstanding": self.total_public_debt_outstanding,
        }


@dataclass
class RateTrend:
    year: int
    avg_rate: float

    def to_dict(self) -> dict:
        return {"year": self.year, "avgRate": self.avg_rate}


@dataclass
class StudentLoanRateContext:
    """Live Treasury yields next to the fixed federal loan rates."""

    treasury_note_rate: float | None
    treasury_bond_rate: float | None
    last_updated: str | None
    federal_student_loan_rates: FederalLoanRates

    def to_dict(self) -> dict:
        return {
            "treasuryNoteRate": self.treasury_note_rate,
            "treasuryBondRate": self.treasury_bond_rate,
            "lastUpdated": self.last_updated,
            "federalStudentLoanRates": self.federal_student_loan_rates.to_dict(),
        }


@dataclass
class Observation:
    """Single observation from a FRED series. Missing values never leave the fetcher."""

    date: str
    value: float

    def to_dict(self) -> dict:
        return {"date": self.date, "value": self.value}


@dataclass
class SeriesMetadata:
    """Metadata for a FRED series."""

    id: str
    title: str
    observation_start: str
    observation_end: str
    frequency: str
    units: str
    notes: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "observationStart": self.observation_start,
            "observationEnd": self.observation_end,
            "frequency": self.frequency,
            "units": self.units,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data


@dataclass
class InflationSnapshot:
    """CPI level with month-over-month and year-over-year change in percent."""

    current_cpi: float
    year_over_year_change: float
    month_over_month_change: float
    last_updated: str
    base_year: int = 1982

    def to_dict(self) -> dict:
        return {
            "currentCPI": self.current_cpi,
            "yearOverYearChange": self.year_over_year_change,
            "monthOverMonthChange": self.month_over_month_change,
            "baseYear": self.base_year,
            "lastUpdated": self.last_updated,
        }


@dataclass
class EconomicIndicators:
    """Latest readings for the student-loan relevant series. Any may be None."""

    cpi: Observation | None
    federal_funds_rate: Observation | None
    unemployment_rate: Observation | None
    total_student_loans: Observation | None
    last_updated: str

    def to_dict(self) -> dict:
        def obs(o: Observation | None) -> dict | None:
            return o.to_dict() if o is not None else None

        return {
            "cpi": obs(self.cpi),
            "federalFundsRate": obs(self.federal_funds_rate),
            "unemploymentRate": obs(self.unemployment_rate),
            "totalStudentLoans": obs(self.total_student_loans),
            "lastUpdated": self.last_updated,
        }


@dataclass
class StudentLoanTotal:
    amount: float  # billions of dollars
    date: str
    formatted_amount: str

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "date": self.date,
            "formattedAmount": self.formatted_amount,
        }


@dataclass
class InflationAdjustment:
    original_amount: float
    from_year: int
    to_year: int
    adjusted_amount: float
    percentage_change: float

    def to_dict(self) -> dict:
        return {
            "originalAmount": self.original_amount,
            "fromYear": self.from_year,
            "toYear": self.to_year,
            "adjustedAmount": self.adjusted_amount,
            "percentageChange": self.percentage_change,
        }


@dataclass
class PovertyContext:
    """Poverty guideline with a live inflation adjustment factor."""

    federal_poverty_level: int
    per_additional_person: int
    inflation_adjustment_factor: float
    last_updated: str
    guideline_year: int = 2024

    def to_dict(self) -> dict:
        return {
            f"federalPovertyLevel{self.guideline_year}": self.federal_poverty_level,
            "perAdditionalPerson": self.per_additional_person,
            "inflationAdjustmentFactor": self.inflation_adjustment_factor,
            "lastUpdated": self.last_updated,
        }


@dataclass
class EconomicSummary:
    """Cross-source snapshot. Each section is None when its lookup failed."""

    economic_indicators: EconomicIndicators | None
    student_loan_rates: StudentLoanRateContext | None
    inflation: InflationSnapshot | None
    total_student_loans: StudentLoanTotal | None
    last_updated: str

    def to_dict(self) -> dict:
        def section(value) -> dict | None:
            return value.to_dict() if value is not None else None

        return {
            "economicIndicators": section(self.economic_indicators),
            "studentLoanRates": section(self.student_loan_rates),
            "inflation": section(self.inflation),
            "totalStudentLoans": section(self.total_student_loans),
            "lastUpdated": self.last_updated,
        }

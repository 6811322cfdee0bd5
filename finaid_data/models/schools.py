"""Data models for College Scorecard schools."""

from dataclasses import dataclass, field


@dataclass
class SchoolRecord:
    """Normalized school. Missing upstream numbers are 0, missing strings ''."""

    id: int
    name: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    website: str = ""
    ownership: str = "public"  # public, private-nonprofit, private-for-profit
    student_size: int = 0
    in_state_tuition: float = 0
    out_of_state_tuition: float = 0
    avg_net_price: float = 0
    pell_grant_rate: float = 0
    federal_loan_rate: float = 0
    median_debt: float = 0
    monthly_payment: float = 0
    admission_rate: float = 0
    graduation_rate: float = 0
    median_earnings: float = 0
    latitude: float | None = None
    longitude: float | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "website": self.website,
            "ownership": self.ownership,
            "studentSize": self.student_size,
            "inStateTuition": self.in_state_tuition,
            "outOfStateTuition": self.out_of_state_tuition,
            "avgNetPrice": self.avg_net_price,
            "pellGrantRate": self.pell_grant_rate,
            "federalLoanRate": self.federal_loan_rate,
            "medianDebt": self.median_debt,
            "monthlyPayment": self.monthly_payment,
            "admissionRate": self.admission_rate,
            "graduationRate": self.graduation_rate,
            "medianEarnings": self.median_earnings,
        }
        if self.latitude is not None:
            data["latitude"] = self.latitude
        if self.longitude is not None:
            data["longitude"] = self.longitude
        return data


@dataclass
class SchoolSearchParams:
    """Optional filters for a school search.

    ownership and degree_type take a single upstream code or a list of them.
    page is 0-indexed.
    """

    query: str | None = None
    state: str | None = None
    city: str | None = None
    zip: str | None = None
    distance: int | None = None
    ownership: int | list[int] | None = None
    degree_type: int | list[int] | None = None
    min_student_size: int | None = None
    max_student_size: int | None = None
    page: int | None = None
    per_page: int | None = None
    sort_by: str | None = None
    sort_order: str | None = None


@dataclass
class SearchResponse:
    total: int
    page: int
    per_page: int
    results: list[SchoolRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "metadata": {"total": self.total, "page": self.page, "perPage": self.per_page},
            "results": [school.to_dict() for school in self.results],
        }


@dataclass
class SchoolSuggestion:
    id: int
    name: str
    city: str
    state: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "city": self.city, "state": self.state}


@dataclass
class SchoolFinancialAid:
    """Aid statistics projected out of a SchoolRecord."""

    pell_grant_rate: float
    federal_loan_rate: float
    median_debt: float
    monthly_payment: float
    avg_net_price: float

    @classmethod
    def from_school(cls, school: SchoolRecord) -> "SchoolFinancialAid":
        return cls(
            pell_grant_rate=school.pell_grant_rate,
            federal_loan_rate=school.federal_loan_rate,
            median_debt=school.median_debt,
            monthly_payment=school.monthly_payment,
            avg_net_price=school.avg_net_price,
        )

    def to_dict(self) -> dict:
        return {
            "pellGrantRate": self.pell_grant_rate,
            "federalLoanRate": self.federal_loan_rate,
            "medianDebt": self.median_debt,
            "monthlyPayment": self.monthly_payment,
            "avgNetPrice": self.avg_net_price,
        }

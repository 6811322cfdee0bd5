"""College Scorecard fetcher for school search and aid statistics."""

import json
import logging
from dataclasses import asdict, replace
from datetime import timedelta

import httpx

from finaid_data.config import Settings
from finaid_data.data.base import BaseFetcher
from finaid_data.data.cache import TTLCache
from finaid_data.models import (
    SchoolFinancialAid,
    SchoolRecord,
    SchoolSearchParams,
    SchoolSuggestion,
    SearchResponse,
)


logger = logging.getLogger(__name__)

# Upstream ownership codes
OWNERSHIP_TYPES: dict[int, str] = {
    1: "public",
    2: "private-nonprofit",
    3: "private-for-profit",
}

# Dotted upstream field -> (SchoolRecord attribute, default when missing)
SCHOOL_FIELD_MAP: dict[str, tuple[str, object]] = {
    "school.name": ("name", ""),
    "school.city": ("city", ""),
    "school.state": ("state", ""),
    "school.zip": ("zip", ""),
    "school.school_url": ("website", ""),
    "latest.student.size": ("student_size", 0),
    "latest.cost.tuition.in_state": ("in_state_tuition", 0),
    "latest.cost.tuition.out_of_state": ("out_of_state_tuition", 0),
    "latest.cost.avg_net_price.overall": ("avg_net_price", 0),
    "latest.aid.pell_grant_rate": ("pell_grant_rate", 0),
    "latest.aid.federal_loan_rate": ("federal_loan_rate", 0),
    "latest.aid.median_debt.completers.overall": ("median_debt", 0),
    "latest.aid.median_debt.completers.monthly_payments": ("monthly_payment", 0),
    "latest.admissions.admission_rate.overall": ("admission_rate", 0),
    "latest.completion.rate_suppressed.overall": ("graduation_rate", 0),
    "latest.earnings.10_yrs_after_entry.median": ("median_earnings", 0),
}

STANDARD_FIELDS = ",".join(
    [
        "id",
        "school.ownership",
        "school.degrees_awarded.predominant",
        *SCHOOL_FIELD_MAP,
        "location.lat",
        "location.lon",
    ]
)

AUTOCOMPLETE_FIELDS = "id,school.name,school.city,school.state"
MIN_AUTOCOMPLETE_LENGTH = 3


def normalize_school(raw: dict) -> SchoolRecord:
    """Map a flattened upstream result onto a SchoolRecord.

    Unknown ownership codes fall back to public.
    """
    values = {
        attr: raw.get(key) or default for key, (attr, default) in SCHOOL_FIELD_MAP.items()
    }
    return SchoolRecord(
        id=raw.get("id") or 0,
        ownership=OWNERSHIP_TYPES.get(raw.get("school.ownership"), "public"),
        latitude=raw.get("location.lat"),
        longitude=raw.get("location.lon"),
        **values,
    )


def _codes(value: int | list[int]) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class ScorecardFetcher(BaseFetcher):
    """Fetches schools from the College Scorecard API."""

    BASE_URL = "https://api.data.gov/ed/collegescorecard/v1"
    SOURCE = "College Scorecard"
    CACHE_TTL = timedelta(hours=24)

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        cache: TTLCache | None = None,
        **kwargs,
    ) -> None:
        super().__init__(settings, client, cache, **kwargs)
        if self.settings.uses_scorecard_demo_key():
            logger.warning("COLLEGE_SCORECARD_API_KEY not set, using rate-limited DEMO_KEY")

    def _schools(self, params: dict) -> dict:
        return self._get_json(
            "/schools.json", {"api_key": self.settings.scorecard_api_key, **params}
        )

    def search_schools(self, params: SchoolSearchParams | None = None) -> SearchResponse:
        """
        Search schools with optional filters.

        Args:
            params: Filters, sort and 0-indexed pagination (default 20 per page)

        Returns:
            SearchResponse with normalized results
        """
        params = params or SchoolSearchParams()
        cache_key = f"schools:search:{json.dumps(asdict(params), sort_keys=True)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Returning cached school search results")
            return cached

        query = {
            "_fields": STANDARD_FIELDS,
            "_per_page": params.per_page or 20,
            "_page": params.page or 0,
        }

        if params.query:
            query["school.name"] = params.query
        if params.state:
            query["school.state"] = params.state
        if params.city:
            query["school.city"] = params.city
        if params.zip and params.distance:
            query["zip"] = params.zip
            query["distance"] = f"{params.distance}mi"
        if params.ownership:
            query["school.ownership"] = _codes(params.ownership)
        if params.degree_type:
            query["school.degrees_awarded.predominant"] = _codes(params.degree_type)
        if params.min_student_size or params.max_student_size:
            low = params.min_student_size or ""
            high = params.max_student_size or ""
            query["latest.student.size__range"] = f"{low}..{high}"
        if params.sort_by:
            direction = "desc" if params.sort_order == "desc" else "asc"
            query["_sort"] = f"{params.sort_by}:{direction}"

        logger.info("Fetching schools from College Scorecard API")
        data = self._schools(query)

        metadata = data.get("metadata") or {}
        result = SearchResponse(
            total=metadata.get("total") or 0,
            page=metadata.get("page") or 0,
            per_page=metadata.get("per_page") or 20,
            results=[normalize_school(raw) for raw in data.get("results") or []],
        )

        self.cache.set(cache_key, result)
        return result

    def get_school_by_id(self, school_id: int) -> SchoolRecord | None:
        cache_key = f"schools:id:{school_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Returning cached school: {school_id}")
            return cached

        logger.info(f"Fetching school {school_id} from College Scorecard API")
        data = self._schools({"id": school_id, "_fields": STANDARD_FIELDS})

        if not data.get("results"):
            return None

        school = normalize_school(data["results"][0])
        self.cache.set(cache_key, school)
        return school

    def get_schools_near_zip(
        self,
        zip_code: str,
        distance_miles: int = 50,
        params: SchoolSearchParams | None = None,
    ) -> SearchResponse:
        return self.search_schools(
            replace(params or SchoolSearchParams(), zip=zip_code, distance=distance_miles)
        )

    def get_schools_by_state(
        self, state: str, params: SchoolSearchParams | None = None
    ) -> SearchResponse:
        return self.search_schools(
            replace(params or SchoolSearchParams(), state=state.upper())
        )

    def autocomplete_schools(self, query: str, limit: int = 10) -> list[SchoolSuggestion]:
        """Name suggestions. Queries shorter than 3 characters return [] without a request."""
        if not query or len(query) < MIN_AUTOCOMPLETE_LENGTH:
            return []

        cache_key = f"schools:autocomplete:{query.lower()}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        data = self._schools(
            {"school.name": query, "_fields": AUTOCOMPLETE_FIELDS, "_per_page": limit}
        )

        suggestions = [
            SchoolSuggestion(
                id=raw.get("id") or 0,
                name=raw.get("school.name") or "",
                city=raw.get("school.city") or "",
                state=raw.get("school.state") or "",
            )
            for raw in data.get("results") or []
        ]

        self.cache.set(cache_key, suggestions)
        return suggestions

    def get_school_financial_aid(self, school_id: int) -> SchoolFinancialAid | None:
        school = self.get_school_by_id(school_id)
        if school is None:
            return None
        return SchoolFinancialAid.from_school(school)

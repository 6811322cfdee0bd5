from datetime import timedelta

import pytest

from finaid_data.data import ScorecardFetcher, TTLCache, UpstreamHTTPError, normalize_school
from finaid_data.models import SchoolSearchParams


SCHOOLS_PATH = "/ed/collegescorecard/v1/schools.json"

RAW_SCHOOL = {
    "id": 110635,
    "school.name": "University of California-Berkeley",
    "school.city": "Berkeley",
    "school.state": "CA",
    "school.zip": "94720-1500",
    "school.school_url": "www.berkeley.edu/",
    "school.ownership": 1,
    "school.degrees_awarded.predominant": 3,
    "latest.student.size": 32831,
    "latest.cost.tuition.in_state": 14312,
    "latest.cost.tuition.out_of_state": 44066,
    "latest.cost.avg_net_price.overall": 16355,
    "latest.aid.pell_grant_rate": 0.2718,
    "latest.aid.federal_loan_rate": 0.1717,
    "latest.aid.median_debt.completers.overall": 13000,
    "latest.aid.median_debt.completers.monthly_payments": 138.3,
    "latest.admissions.admission_rate.overall": 0.1137,
    "latest.completion.rate_suppressed.overall": 0.9256,
    "latest.earnings.10_yrs_after_entry.median": 88215,
    "location.lat": 37.871899,
    "location.lon": -122.25854,
}


def _fetcher(upstream, settings) -> ScorecardFetcher:
    return ScorecardFetcher(settings, client=upstream.client())


def _page(*schools: dict, total: int | None = None) -> dict:
    return {
        "metadata": {"total": total if total is not None else len(schools), "page": 0, "per_page": 20},
        "results": list(schools),
    }


def test_normalize_full_record() -> None:
    school = normalize_school(RAW_SCHOOL)

    assert school.id == 110635
    assert school.name == "University of California-Berkeley"
    assert school.website == "www.berkeley.edu/"
    assert school.ownership == "public"
    assert school.student_size == 32831
    assert school.monthly_payment == 138.3
    assert school.graduation_rate == 0.9256
    assert school.median_earnings == 88215
    assert school.latitude == 37.871899
    assert school.to_dict()["inStateTuition"] == 14312


def test_normalize_defaults_missing_fields() -> None:
    school = normalize_school({"id": 1, "school.name": "Tiny College", "latest.student.size": None})

    assert school.city == ""
    assert school.zip == ""
    assert school.student_size == 0
    assert school.avg_net_price == 0
    assert school.median_debt == 0
    assert school.latitude is None
    data = school.to_dict()
    assert "latitude" not in data
    assert None not in data.values()
    assert not any(key.startswith(("school.", "latest.")) for key in data)


@pytest.mark.parametrize("code, expected", [(1, "public"), (2, "private-nonprofit"), (3, "private-for-profit")])
def test_ownership_codes(code, expected) -> None:
    assert normalize_school({"id": 1, "school.ownership": code}).ownership == expected


@pytest.mark.parametrize("code", [0, 4, 99, -1, None])
def test_unknown_ownership_falls_back_to_public(code) -> None:
    assert normalize_school({"id": 1, "school.ownership": code}).ownership == "public"


def test_search_builds_upstream_query(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())

    _fetcher(upstream, settings).search_schools(
        SchoolSearchParams(
            query="state university",
            state="OH",
            city="Columbus",
            zip="43210",
            distance=25,
            ownership=[1, 2],
            degree_type=3,
            min_student_size=1000,
            sort_by="latest.student.size",
            sort_order="desc",
        )
    )

    params = upstream.last_params()
    assert params["api_key"] == "scorecard-test-key"
    assert params["school.name"] == "state university"
    assert params["school.state"] == "OH"
    assert params["school.city"] == "Columbus"
    assert params["zip"] == "43210"
    assert params["distance"] == "25mi"
    assert params["school.ownership"] == "1,2"
    assert params["school.degrees_awarded.predominant"] == "3"
    assert params["latest.student.size__range"] == "1000.."
    assert params["_sort"] == "latest.student.size:desc"
    assert params["_page"] == "0"
    assert params["_per_page"] == "20"
    assert "school.name" in params["_fields"].split(",")
    assert "latest.aid.pell_grant_rate" in params["_fields"].split(",")


def test_search_without_filters(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())

    _fetcher(upstream, settings).search_schools()

    params = upstream.last_params()
    assert set(params.keys()) == {"api_key", "_fields", "_per_page", "_page"}


def test_search_size_range_with_only_max(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    _fetcher(upstream, settings).search_schools(SchoolSearchParams(max_student_size=5000))
    assert upstream.last_params()["latest.student.size__range"] == "..5000"


def test_search_zip_needs_distance(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    _fetcher(upstream, settings).search_schools(SchoolSearchParams(zip="43210"))
    assert "zip" not in upstream.last_params()


def test_search_sort_defaults_to_ascending(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    _fetcher(upstream, settings).search_schools(SchoolSearchParams(sort_by="school.name"))
    assert upstream.last_params()["_sort"] == "school.name:asc"


def test_search_response(upstream, settings) -> None:
    upstream.add(
        SCHOOLS_PATH,
        {"metadata": {"total": 812, "page": 2, "per_page": 5}, "results": [RAW_SCHOOL]},
    )

    response = _fetcher(upstream, settings).search_schools(SchoolSearchParams(page=2, per_page=5))

    assert response.total == 812
    assert response.page == 2
    assert response.per_page == 5
    assert response.results[0].name == "University of California-Berkeley"
    assert response.to_dict()["metadata"] == {"total": 812, "page": 2, "perPage": 5}


def test_search_response_without_metadata(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, {})

    response = _fetcher(upstream, settings).search_schools()

    assert response.total == 0
    assert response.page == 0
    assert response.per_page == 20
    assert response.results == []


def test_search_is_cached_by_params(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page(RAW_SCHOOL))
    scorecard = _fetcher(upstream, settings)

    scorecard.search_schools(SchoolSearchParams(state="CA"))
    scorecard.search_schools(SchoolSearchParams(state="CA"))
    assert len(upstream.requests) == 1

    scorecard.search_schools(SchoolSearchParams(state="CA", page=1))
    assert len(upstream.requests) == 2


def test_search_error_carries_status(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, {"error": {"code": "OVER_RATE_LIMIT"}}, status_code=429)

    with pytest.raises(UpstreamHTTPError) as excinfo:
        _fetcher(upstream, settings).search_schools()

    assert excinfo.value.status_code == 429
    assert "OVER_RATE_LIMIT" in excinfo.value.body


def test_school_by_id(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page(RAW_SCHOOL))
    scorecard = _fetcher(upstream, settings)

    school = scorecard.get_school_by_id(110635)
    assert school.city == "Berkeley"
    assert upstream.last_params()["id"] == "110635"

    assert scorecard.get_school_by_id(110635) is school
    assert len(upstream.requests) == 1


def test_school_by_id_not_found(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    assert _fetcher(upstream, settings).get_school_by_id(1) is None


def test_schools_near_zip(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())

    _fetcher(upstream, settings).get_schools_near_zip(
        "94720", 25, SchoolSearchParams(ownership=2, zip="00000")
    )

    params = upstream.last_params()
    assert params["zip"] == "94720"
    assert params["distance"] == "25mi"
    assert params["school.ownership"] == "2"


def test_schools_near_zip_default_distance(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    _fetcher(upstream, settings).get_schools_near_zip("94720")
    assert upstream.last_params()["distance"] == "50mi"


def test_schools_by_state_uppercases(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    _fetcher(upstream, settings).get_schools_by_state("ca", SchoolSearchParams(per_page=5))

    params = upstream.last_params()
    assert params["school.state"] == "CA"
    assert params["_per_page"] == "5"


def test_autocomplete_short_query_makes_no_request(upstream, settings) -> None:
    scorecard = _fetcher(upstream, settings)

    assert scorecard.autocomplete_schools("ab", 10) == []
    assert scorecard.autocomplete_schools("", 10) == []
    assert upstream.requests == []


def test_autocomplete(upstream, settings) -> None:
    upstream.add(
        SCHOOLS_PATH,
        {"results": [{"id": 110635, "school.name": "University of California-Berkeley",
                      "school.city": "Berkeley", "school.state": "CA"}]},
    )
    scorecard = _fetcher(upstream, settings)

    suggestions = scorecard.autocomplete_schools("abc", 10)

    assert len(upstream.requests) == 1
    params = upstream.last_params()
    assert params["_fields"] == "id,school.name,school.city,school.state"
    assert params["_per_page"] == "10"
    assert params["school.name"] == "abc"
    assert suggestions[0].to_dict() == {
        "id": 110635,
        "name": "University of California-Berkeley",
        "city": "Berkeley",
        "state": "CA",
    }


def test_autocomplete_cached_case_insensitively(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, {"results": []})
    scorecard = _fetcher(upstream, settings)

    scorecard.autocomplete_schools("Berk")
    scorecard.autocomplete_schools("berk")
    assert len(upstream.requests) == 1


def test_school_financial_aid(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page(RAW_SCHOOL))

    aid = _fetcher(upstream, settings).get_school_financial_aid(110635)

    assert aid.to_dict() == {
        "pellGrantRate": 0.2718,
        "federalLoanRate": 0.1717,
        "medianDebt": 13000,
        "monthlyPayment": 138.3,
        "avgNetPrice": 16355,
    }


def test_school_financial_aid_missing_school(upstream, settings) -> None:
    upstream.add(SCHOOLS_PATH, _page())
    assert _fetcher(upstream, settings).get_school_financial_aid(42) is None


def test_default_cache_holds_for_a_day(upstream, settings) -> None:
    assert ScorecardFetcher(settings, client=upstream.client()).cache.ttl == timedelta(hours=24)


def test_search_refetched_once_cache_expires(upstream, settings, clock) -> None:
    upstream.add(SCHOOLS_PATH, _page(RAW_SCHOOL))
    scorecard = ScorecardFetcher(
        settings,
        client=upstream.client(),
        cache=TTLCache(ScorecardFetcher.CACHE_TTL, clock=clock),
    )

    scorecard.search_schools(SchoolSearchParams(state="CA"))
    clock.advance(ScorecardFetcher.CACHE_TTL.total_seconds() - 1)
    scorecard.search_schools(SchoolSearchParams(state="CA"))
    assert len(upstream.requests) == 1

    clock.advance(1)
    scorecard.search_schools(SchoolSearchParams(state="CA"))
    assert len(upstream.requests) == 2

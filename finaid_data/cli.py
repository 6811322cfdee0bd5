"""Command line access to the data clients. Prints JSON to stdout."""

import argparse
import json
import logging
import sys

import httpx

from finaid_data.config import Settings, CURRENT_LOAN_RATE_YEAR, CURRENT_POVERTY_GUIDELINE_YEAR
from finaid_data.data import (
    FinAidDataError,
    FredFetcher,
    ScorecardFetcher,
    TreasuryFetcher,
    available_series,
    build_economic_summary,
)
from finaid_data.models import SchoolSearchParams


def _jsonable(value):
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def _rates(args, settings):
    with TreasuryFetcher(settings) as treasury:
        return treasury.get_interest_rates(
            start_date=args.start_date,
            end_date=args.end_date,
            security_type=args.security_type,
            limit=args.limit,
            sort_order="asc" if args.asc else "desc",
        )


def _debt(args, settings):
    with TreasuryFetcher(settings) as treasury:
        return treasury.get_debt_data(args.start_date, args.end_date, args.limit)


def _trends(args, settings):
    with TreasuryFetcher(settings) as treasury:
        return treasury.get_interest_rate_trends(args.years)


def _loan_rates(args, settings):
    with TreasuryFetcher(settings) as treasury:
        return treasury.get_student_loan_rate_context(args.award_year)


def _series(args, settings):
    with FredFetcher(settings) as fred:
        if args.info:
            return fred.get_series_info(args.series_id)
        return fred.get_series_observations(
            args.series_id,
            start_date=args.start_date,
            end_date=args.end_date,
            limit=args.limit,
        )


def _inflation(args, settings):
    with FredFetcher(settings) as fred:
        return fred.get_inflation_data()


def _indicators(args, settings):
    with FredFetcher(settings) as fred:
        return fred.get_economic_indicators()


def _student_loans(args, settings):
    with FredFetcher(settings) as fred:
        return fred.get_total_student_loans()


def _cpi_history(args, settings):
    with FredFetcher(settings) as fred:
        return fred.get_cpi_history(args.years)


def _adjust(args, settings):
    with FredFetcher(settings) as fred:
        return fred.inflation_adjustment(args.amount, args.from_year, args.to_year)


def _poverty(args, settings):
    with FredFetcher(settings) as fred:
        return fred.get_poverty_context(args.year)


def _search_series(args, settings):
    with FredFetcher(settings) as fred:
        return fred.search_series(args.query, args.limit)


def _schools(args, settings):
    params = SchoolSearchParams(
        query=args.query,
        state=args.state,
        city=args.city,
        zip=args.zip,
        distance=args.distance,
        ownership=args.ownership,
        degree_type=args.degree_type,
        min_student_size=args.min_size,
        max_student_size=args.max_size,
        page=args.page,
        per_page=args.per_page,
        sort_by=args.sort_by,
        sort_order="desc" if args.desc else "asc",
    )
    with ScorecardFetcher(settings) as scorecard:
        return scorecard.search_schools(params)


def _school(args, settings):
    with ScorecardFetcher(settings) as scorecard:
        return scorecard.get_school_by_id(args.school_id)


def _autocomplete(args, settings):
    with ScorecardFetcher(settings) as scorecard:
        return scorecard.autocomplete_schools(args.query, args.limit)


def _financial_aid(args, settings):
    with ScorecardFetcher(settings) as scorecard:
        return scorecard.get_school_financial_aid(args.school_id)


def _summary(args, settings):
    with FredFetcher(settings) as fred, TreasuryFetcher(settings) as treasury:
        return build_economic_summary(fred, treasury)


def _available_series(args, settings):
    return available_series()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finaid-data",
        description="Query College Scorecard, FRED and Treasury data",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("rates", help="Treasury average interest rates")
    p.add_argument("--start-date", help="YYYY-MM-DD")
    p.add_argument("--end-date", help="YYYY-MM-DD")
    p.add_argument("--security-type", help='e.g. "Treasury Notes"')
    p.add_argument("--limit", type=int)
    p.add_argument("--asc", action="store_true", help="Oldest first")
    p.set_defaults(func=_rates)

    p = sub.add_parser("debt", help="Treasury debt to the penny")
    p.add_argument("--start-date", help="YYYY-MM-DD")
    p.add_argument("--end-date", help="YYYY-MM-DD")
    p.add_argument("--limit", type=int)
    p.set_defaults(func=_debt)

    p = sub.add_parser("trends", help="Yearly average Treasury rates")
    p.add_argument("--years", type=int, default=5)
    p.set_defaults(func=_trends)

    p = sub.add_parser("loan-rates", help="Student loan rate context")
    p.add_argument("--award-year", default=CURRENT_LOAN_RATE_YEAR)
    p.set_defaults(func=_loan_rates)

    p = sub.add_parser("series", help="Observations for any FRED series")
    p.add_argument("series_id")
    p.add_argument("--start-date", help="YYYY-MM-DD")
    p.add_argument("--end-date", help="YYYY-MM-DD")
    p.add_argument("--limit", type=int)
    p.add_argument("--info", action="store_true", help="Show series metadata instead")
    p.set_defaults(func=_series)

    p = sub.add_parser("inflation", help="Current CPI and inflation")
    p.set_defaults(func=_inflation)

    p = sub.add_parser("indicators", help="Latest economic indicators")
    p.set_defaults(func=_indicators)

    p = sub.add_parser("student-loans", help="Total student loans outstanding")
    p.set_defaults(func=_student_loans)

    p = sub.add_parser("cpi-history", help="CPI over the trailing years")
    p.add_argument("--years", type=int, default=10)
    p.set_defaults(func=_cpi_history)

    p = sub.add_parser("adjust", help="Adjust a dollar amount for inflation")
    p.add_argument("amount", type=float)
    p.add_argument("from_year", type=int)
    p.add_argument("to_year", type=int, nargs="?")
    p.set_defaults(func=_adjust)

    p = sub.add_parser("poverty", help="Poverty guideline with inflation factor")
    p.add_argument("--year", type=int, default=CURRENT_POVERTY_GUIDELINE_YEAR)
    p.set_defaults(func=_poverty)

    p = sub.add_parser("search-series", help="Search FRED series by text")
    p.add_argument("query")
    p.add_argument("--limit", type=int, default=10)
    p.set_defaults(func=_search_series)

    p = sub.add_parser("schools", help="Search schools")
    p.add_argument("--query", help="School name")
    p.add_argument("--state")
    p.add_argument("--city")
    p.add_argument("--zip")
    p.add_argument("--distance", type=int, help="Miles from --zip")
    p.add_argument("--ownership", type=int, nargs="+", help="1=public 2=nonprofit 3=for-profit")
    p.add_argument("--degree-type", type=int, nargs="+")
    p.add_argument("--min-size", type=int)
    p.add_argument("--max-size", type=int)
    p.add_argument("--page", type=int)
    p.add_argument("--per-page", type=int)
    p.add_argument("--sort-by")
    p.add_argument("--desc", action="store_true")
    p.set_defaults(func=_schools)

    p = sub.add_parser("school", help="One school by ID")
    p.add_argument("school_id", type=int)
    p.set_defaults(func=_school)

    p = sub.add_parser("autocomplete", help="School name suggestions")
    p.add_argument("query")
    p.add_argument("--limit", type=int, default=10)
    p.set_defaults(func=_autocomplete)

    p = sub.add_parser("financial-aid", help="Aid statistics for one school")
    p.add_argument("school_id", type=int)
    p.set_defaults(func=_financial_aid)

    p = sub.add_parser("summary", help="Combined economic summary")
    p.set_defaults(func=_summary)

    p = sub.add_parser("available-series", help="Known FRED series IDs")
    p.set_defaults(func=_available_series)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # httpx logs full request URLs, API keys included
    logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        result = args.func(args, Settings())
    except (FinAidDataError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except httpx.HTTPError as e:
        print(f"Network error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(_jsonable(result), indent=2))


if __name__ == "__main__":
    main()

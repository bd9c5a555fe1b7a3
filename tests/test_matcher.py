from datetime import date

from date_ranges import DateRange, resolve_option
from matcher import match_index, match_range
from models import DEFAULT_OPTIONS, OptionDefinition

TODAY = date(2024, 3, 15)

THIS_MONTH = OptionDefinition(key="this_month", label="This Month")
LAST_MONTH = OptionDefinition(key="last_month", label="Last Month")


def test_resolved_range_matches_its_option() -> None:
    catalog = (THIS_MONTH, LAST_MONTH)
    rng = resolve_option(THIS_MONTH, today=TODAY)

    assert rng == DateRange(date(2024, 3, 1), date(2024, 3, 15))
    assert match_range(rng, catalog, today=TODAY) is THIS_MONTH
    assert match_range(resolve_option(LAST_MONTH, today=TODAY), catalog, today=TODAY) is LAST_MONTH


def test_unmatched_range_returns_none() -> None:
    rng = DateRange(date(2024, 3, 5), date(2024, 3, 10))

    assert match_range(rng, (THIS_MONTH, LAST_MONTH), today=TODAY) is None
    assert match_index(rng, (THIS_MONTH, LAST_MONTH), today=TODAY) is None


def test_first_match_wins() -> None:
    month_to_date = OptionDefinition(key="month_to_date", label="Month To Date")
    rng = DateRange(date(2024, 3, 1), TODAY)

    assert match_range(rng, (THIS_MONTH, month_to_date), today=TODAY) is THIS_MONTH
    assert match_range(rng, (month_to_date, THIS_MONTH), today=TODAY) is month_to_date


def test_custom_options_are_never_matched() -> None:
    custom = OptionDefinition(key="custom", label="Custom Range")
    today_option = OptionDefinition(key="single_date", label="Today")

    assert match_index(DateRange(TODAY, TODAY), (custom,), today=TODAY) is None
    assert match_index(DateRange(TODAY, TODAY), (custom, today_option), today=TODAY) == 1


def test_reversed_input_is_normalized() -> None:
    rng = DateRange(date(2024, 2, 29), date(2024, 2, 1))

    assert match_range(rng, (THIS_MONTH, LAST_MONTH), today=TODAY) is LAST_MONTH


def test_incomplete_input_returns_none() -> None:
    assert match_index(DateRange(date(2024, 3, 1), None), (THIS_MONTH,), today=TODAY) is None


def test_callback_options_match_their_own_range() -> None:
    q1 = OptionDefinition(
        key="custom",
        label="Q1",
        resolver=lambda: DateRange(date(2024, 1, 1), date(2024, 3, 31)),
    )
    fiscal = OptionDefinition(
        key="single_date",
        label="Fiscal Q1",
        resolver=lambda: DateRange(date(2024, 1, 1), date(2024, 3, 31)),
    )
    rng = DateRange(date(2024, 1, 1), date(2024, 3, 31))

    assert match_range(rng, (q1, fiscal), today=TODAY) is fiscal


def test_default_catalog_round_trips_to_first_equal_option() -> None:
    for idx, option in enumerate(DEFAULT_OPTIONS):
        if option.is_custom:
            continue
        rng = resolve_option(option, today=TODAY)
        found = match_index(rng, DEFAULT_OPTIONS, today=TODAY)

        assert found is not None
        assert found <= idx
        assert resolve_option(DEFAULT_OPTIONS[found], today=TODAY) == rng


def test_leading_custom_entry_does_not_claim_today() -> None:
    custom = OptionDefinition(key="custom", label="Custom Range")
    today_option = OptionDefinition(key="single_date", label="Today")
    catalog = (custom, today_option)

    assert match_range(DateRange(TODAY, TODAY), catalog, today=TODAY) is today_option
    assert match_range(DateRange(TODAY, TODAY), (custom,), today=TODAY) is None

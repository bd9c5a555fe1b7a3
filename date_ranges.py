#!/usr/bin/env python3
"""Date range resolution for quick-select options."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from models import OptionDefinition

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class DateRange:
    start: Optional[date]
    end: Optional[date]

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def normalized(self) -> "DateRange":
        """Return a copy with the earlier day as start and time-of-day dropped."""
        start = to_date(self.start) if self.start is not None else None
        end = to_date(self.end) if self.end is not None else None
        if start is not None and end is not None and end < start:
            start, end = end, start
        return DateRange(start=start, end=end)

    def same_days(self, other: "DateRange") -> bool:
        return self.normalized() == other.normalized()


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _start_of_month(day: date) -> date:
    return day.replace(day=1)


def _first_of_next_month(year: int, month: int) -> date:
    if month == 12:
        return date(year + 1, 1, 1)
    return date(year, month + 1, 1)


def days_in_month(year: int, month: int) -> int:
    """Day number of the last day of the month, taken from the day before the next 1st."""
    return (_first_of_next_month(year, month) - timedelta(days=1)).day


def _previous_month(day: date) -> tuple[int, int]:
    if day.month == 1:
        return day.year - 1, 12
    return day.year, day.month - 1


def resolve_date_range(
    kind: str,
    *,
    date_diff: int = 0,
    today: Optional[DateLike] = None,
) -> DateRange:
    today = to_date(today or date.today())

    if kind == "date_diff":
        shifted = today + timedelta(days=date_diff)
        return DateRange(shifted, today).normalized()

    if kind == "last_month":
        year, month = _previous_month(today)
        start = date(year, month, 1)
        end = date(year, month, days_in_month(year, month))
        return DateRange(start, end)

    if kind in ("this_month", "month_to_date"):
        return DateRange(_start_of_month(today), today)

    if kind == "year_to_date":
        return DateRange(today.replace(month=1, day=1), today)

    # single_date, custom and anything unrecognised
    target = today + timedelta(days=date_diff)
    return DateRange(target, target)


def resolve_option(
    option: "OptionDefinition",
    *,
    today: Optional[DateLike] = None,
) -> DateRange:
    today = to_date(today or date.today())

    if option.resolver is not None:
        custom = option.resolver()
        if custom is not None and custom.start is not None and custom.end is not None:
            return DateRange(to_date(custom.start), to_date(custom.end))
        logger.debug("Resolver for %r returned an incomplete range, using key %s", option.label, option.key)

    rng = resolve_date_range(option.key, date_diff=option.date_diff, today=today)
    logger.debug("Resolved %r to %s..%s", option.label, rng.start, rng.end)
    return rng


__all__ = [
    "DateRange",
    "DateLike",
    "days_in_month",
    "resolve_date_range",
    "resolve_option",
    "to_date",
]

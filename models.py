#!/usr/bin/env python3
"""Option catalog models and validation helpers for datepick."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Literal, Optional, Sequence, Tuple

from date_ranges import DateRange

OptionKey = Literal[
    "date_diff",
    "last_month",
    "this_month",
    "year_to_date",
    "month_to_date",
    "single_date",
    "custom",
]
OPTION_KEYS: Sequence[OptionKey] = (
    "date_diff",
    "last_month",
    "this_month",
    "year_to_date",
    "month_to_date",
    "single_date",
    "custom",
)
CUSTOM_KEY: OptionKey = "custom"

RangeCallback = Callable[[], Optional[DateRange]]

DATE_FMT = "%Y-%m-%d"


@dataclass(frozen=True)
class OptionDefinition:
    key: OptionKey
    label: str
    date_diff: int = 0
    resolver: Optional[RangeCallback] = None

    @property
    def is_custom(self) -> bool:
        return self.key == CUSTOM_KEY

    def with_updated(
        self,
        *,
        key: Optional[OptionKey] = None,
        label: Optional[str] = None,
        date_diff: Optional[int] = None,
        resolver: Optional[RangeCallback] = None,
    ) -> "OptionDefinition":
        """Copy with the given fields replaced; ``None`` keeps the current value,
        so a resolver is cleared by building a new ``OptionDefinition`` instead."""
        return OptionDefinition(
            key=key if key is not None else self.key,
            label=label if label is not None else self.label,
            date_diff=date_diff if date_diff is not None else self.date_diff,
            resolver=resolver if resolver is not None else self.resolver,
        )


OptionCatalog = Tuple[OptionDefinition, ...]


DEFAULT_OPTIONS: OptionCatalog = (
    OptionDefinition(key="single_date", label="Today", date_diff=0),
    OptionDefinition(key="single_date", label="Yesterday", date_diff=-1),
    OptionDefinition(key="date_diff", label="Last 7 Days", date_diff=-7),
    OptionDefinition(key="date_diff", label="Last 30 Days", date_diff=-30),
    OptionDefinition(key="this_month", label="This Month"),
    OptionDefinition(key="last_month", label="Last Month"),
    OptionDefinition(key="month_to_date", label="Month To Date"),
    OptionDefinition(key="year_to_date", label="Year To Date"),
    OptionDefinition(key="custom", label="Custom Range"),
)


class ValidationError(Exception):
    pass


def parse_date(value: str) -> date:
    value = value.strip()

    # Accept YYYY-MM-DD as well as full ISO-8601 datetimes
    candidate = value[:-1] if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(candidate).date()
    except ValueError:
        pass

    try:
        return datetime.strptime(value, DATE_FMT).date()
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date format: '{value}'. Expected YYYY-MM-DD"
        ) from exc


def _normalize_key(raw_key: object | None) -> OptionKey:
    if raw_key is None:
        raise ValidationError("Missing 'key' field")
    key = str(raw_key).strip().lower().replace("-", "_")
    if key not in OPTION_KEYS:
        valid = ", ".join(OPTION_KEYS)
        raise ValidationError(f"Invalid option key '{key}'. Expected one of: {valid}")
    return key  # type: ignore[return-value]


def _coerce_date_diff(value: object) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationError("'date_diff' must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return 0
        try:
            return int(candidate)
        except ValueError as exc:
            raise ValidationError("'date_diff' must be an integer") from exc
    raise ValidationError("'date_diff' must be an integer")


def normalize_option_payload(data: dict) -> OptionDefinition:
    if not isinstance(data, dict):
        raise ValidationError("Option entry must be an object")
    key = _normalize_key(data.get("key"))
    label = str(data.get("label") or "").strip()
    if not label:
        raise ValidationError("'label' cannot be empty")
    date_diff = _coerce_date_diff(data.get("date_diff"))
    return OptionDefinition(key=key, label=label, date_diff=date_diff)


def option_to_jsonable(option: OptionDefinition) -> dict[str, Any]:
    return {
        "key": option.key,
        "label": option.label,
        "date_diff": option.date_diff,
    }


def find_option(catalog: Sequence[OptionDefinition], label: str) -> int:
    """Index of the first option whose label matches, ignoring case."""
    needle = label.strip().lower()
    for idx, option in enumerate(catalog):
        if option.label.lower() == needle:
            return idx
    raise ValidationError(f"Unknown option '{label}'")


__all__ = [
    "OptionDefinition",
    "OptionCatalog",
    "OptionKey",
    "OPTION_KEYS",
    "CUSTOM_KEY",
    "DEFAULT_OPTIONS",
    "RangeCallback",
    "ValidationError",
    "normalize_option_payload",
    "option_to_jsonable",
    "find_option",
    "parse_date",
    "DATE_FMT",
]

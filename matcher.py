#!/usr/bin/env python3
"""Inverse lookup from a concrete date range to a catalog option."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from date_ranges import DateLike, DateRange, resolve_option, to_date
from models import OptionDefinition

logger = logging.getLogger(__name__)


def match_index(
    rng: DateRange,
    catalog: Sequence[OptionDefinition],
    *,
    today: Optional[DateLike] = None,
) -> Optional[int]:
    """Return the index of the first option that resolves to ``rng``.

    Custom options are skipped since they carry no range of their own. The
    older picker resolved them as "today", which let a leading custom entry
    claim single-day ranges; skipping them is intentional.
    ``today`` is sampled once so every option is resolved against the same day.
    """
    target = rng.normalized()
    if target.start is None or target.end is None:
        return None

    today = to_date(today or date.today())
    for idx, option in enumerate(catalog):
        if option.is_custom:
            continue
        if resolve_option(option, today=today).same_days(target):
            logger.debug("Range %s..%s matched %r", target.start, target.end, option.label)
            return idx
    return None


def match_range(
    rng: DateRange,
    catalog: Sequence[OptionDefinition],
    *,
    today: Optional[DateLike] = None,
) -> Optional[OptionDefinition]:
    idx = match_index(rng, catalog, today=today)
    if idx is None:
        return None
    return catalog[idx]


__all__ = ["match_index", "match_range"]

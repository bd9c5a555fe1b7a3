#!/usr/bin/env python3
"""Selection state container for datepick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from date_ranges import DateRange
from models import OptionDefinition

SelectionMode = Literal["none", "option", "custom"]


@dataclass
class SelectionState:
    mode: SelectionMode = "none"
    selected_index: Optional[int] = None
    range: Optional[DateRange] = None
    # Option that produced ``range``, kept while the custom editor is open
    applied_index: Optional[int] = None

    # Custom range editing
    custom_view_open: bool = False

    def clear_selection(self) -> None:
        self.selected_index = None

    def select(self, index: int) -> None:
        # A single index keeps at most one option selected
        self.selected_index = index

    def apply(self, rng: DateRange, index: Optional[int]) -> None:
        self.range = rng
        self.applied_index = index


@dataclass(frozen=True)
class SelectedDateEvent:
    range: DateRange
    selected_option: Optional[OptionDefinition] = None


__all__ = ["SelectionState", "SelectionMode", "SelectedDateEvent"]

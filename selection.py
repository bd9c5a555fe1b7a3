#!/usr/bin/env python3
"""Selection state machine for the date range picker."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence, Union

from config import Config
from date_ranges import DateLike, DateRange, resolve_option, to_date
from matcher import match_index
from models import DEFAULT_OPTIONS, OptionCatalog, OptionDefinition, ValidationError, find_option
from state import SelectedDateEvent, SelectionState

logger = logging.getLogger(__name__)

SelectionListener = Callable[[SelectedDateEvent], None]
OptionsListener = Callable[[OptionCatalog], None]
DateFormatter = Callable[[date, str], str]
OptionChoice = Union[int, str, OptionDefinition]


def _strftime(day: date, fmt: str) -> str:
    return day.strftime(fmt)


class DateRangePicker:
    """Owns the option catalog, the current selection and change notifications.

    The catalog is immutable; which option is selected lives in
    ``SelectionState.selected_index`` so at most one option is ever selected.
    Calls are expected from a single thread (UI event dispatch).
    """

    def __init__(
        self,
        catalog: Optional[Sequence[OptionDefinition]] = None,
        *,
        settings: Optional[Config] = None,
        clock: Callable[[], date] = date.today,
        formatter: Optional[DateFormatter] = None,
    ) -> None:
        self.settings = settings or Config()
        self._clock = clock
        self._formatter = formatter or _strftime
        self._catalog = self._build_catalog(catalog)
        self.state = SelectionState()
        self._listeners: List[SelectionListener] = []
        self._options_listeners: List[OptionsListener] = []

    def _build_catalog(self, catalog: Optional[Sequence[OptionDefinition]]) -> OptionCatalog:
        if catalog:
            return tuple(catalog)
        if self.settings.options:
            return tuple(self.settings.options)
        if self.settings.show_default_options:
            return DEFAULT_OPTIONS
        return ()

    # Listeners -----------------------------------------------------------

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def on_options(self, listener: OptionsListener) -> None:
        self._options_listeners.append(listener)

    def _emit(self, rng: DateRange) -> SelectedDateEvent:
        event = SelectedDateEvent(range=rng, selected_option=self.selected_option)
        for listener in list(self._listeners):
            listener(event)
        return event

    # Read-only views -----------------------------------------------------

    @property
    def options(self) -> OptionCatalog:
        return self._catalog

    @property
    def selected_option(self) -> Optional[OptionDefinition]:
        idx = self.state.selected_index
        if idx is None:
            return None
        return self._catalog[idx]

    @property
    def selected_range(self) -> Optional[DateRange]:
        return self.state.range

    def is_selected(self, option: OptionChoice) -> bool:
        return self.state.selected_index == self._index_of(option)

    @property
    def applied_option(self) -> Optional[OptionDefinition]:
        """Option whose dates are currently applied, which can differ from the
        selected one while the custom editor is open."""
        idx = self.state.applied_index
        if idx is None:
            return None
        return self._catalog[idx]

    @property
    def label(self) -> str:
        option = self.applied_option
        if option is not None and self.settings.show_range_label_on_input:
            return option.label
        return self.format_range(self.state.range)

    def format_range(self, rng: Optional[DateRange]) -> str:
        if rng is None or rng.start is None or rng.end is None:
            return ""
        fmt = self.settings.date_format
        return f"{self._formatter(rng.start, fmt)} - {self._formatter(rng.end, fmt)}"

    # Transitions ---------------------------------------------------------

    def _today(self, today: Optional[DateLike]) -> date:
        return to_date(today or self._clock())

    def _index_of(self, choice: OptionChoice) -> int:
        if isinstance(choice, OptionDefinition):
            for idx, option in enumerate(self._catalog):
                if option is choice:
                    return idx
            for idx, option in enumerate(self._catalog):
                if option == choice:
                    return idx
            raise ValidationError(f"Option '{choice.label}' is not in the catalog")
        if isinstance(choice, str):
            return find_option(self._catalog, choice)
        if not 0 <= choice < len(self._catalog):
            raise ValidationError(f"Option index {choice} out of range")
        return choice

    def _adopt_match(self, rng: DateRange, today: date) -> None:
        self.state.clear_selection()
        idx = match_index(rng, self._catalog, today=today)
        self.state.apply(rng, idx)
        if idx is None:
            self.state.mode = "none"
            return
        self.state.select(idx)
        self.state.mode = "option"

    def initialize(
        self,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        *,
        today: Optional[DateLike] = None,
    ) -> Optional[str]:
        """Adopt the initial dates and label them from the catalog when they match.

        Returns the matched option label, if any. The option list is
        published to ``on_options`` listeners; no selection event is emitted.
        """
        for listener in list(self._options_listeners):
            listener(self._catalog)

        if start is None:
            return None

        now = self._today(today)
        self._adopt_match(DateRange(start, end if end is not None else now).normalized(), now)
        option = self.selected_option
        logger.debug("Initialized with %s, label %r", self.state.range, option.label if option else None)
        return option.label if option else None

    def select_option(
        self,
        choice: OptionChoice,
        *,
        today: Optional[DateLike] = None,
    ) -> Optional[SelectedDateEvent]:
        idx = self._index_of(choice)
        option = self._catalog[idx]
        self.state.clear_selection()
        self.state.select(idx)

        if option.is_custom:
            self.state.mode = "custom"
            self.state.custom_view_open = True
            logger.debug("Custom range editing opened via %r", option.label)
            return None

        self.state.mode = "option"
        rng = resolve_option(option, today=self._today(today)).normalized()
        self.state.apply(rng, idx)
        logger.debug("Selected %r -> %s", option.label, rng)
        return self._emit(rng)

    def open_custom_range(self) -> None:
        self.state.mode = "custom"
        self.state.custom_view_open = True

    def toggle_custom_range_view(self) -> bool:
        self.state.custom_view_open = not self.state.custom_view_open
        return self.state.custom_view_open

    def confirm_custom_range(
        self,
        start: Optional[DateLike],
        end: Optional[DateLike],
        *,
        today: Optional[DateLike] = None,
    ) -> SelectedDateEvent:
        now = self._today(today)
        rng = DateRange(
            start if start is not None else now,
            end if end is not None else now,
        ).normalized()
        self.state.custom_view_open = False
        self._adopt_match(rng, now)
        if self.state.mode == "none":
            # Kept as a plain range without an option
            self.state.mode = "custom"
        return self._emit(rng)

    def set_dates(
        self,
        start: DateLike,
        end: Optional[DateLike] = None,
        *,
        today: Optional[DateLike] = None,
    ) -> SelectedDateEvent:
        """Apply dates set programmatically rather than through an option."""
        now = self._today(today)
        rng = DateRange(start, end if end is not None else now).normalized()
        if self.settings.rematch_on_change:
            self._adopt_match(rng, now)
        else:
            self.state.apply(rng, None)
            self.state.clear_selection()
            self.state.mode = "none"
        return self._emit(rng)


__all__ = ["DateRangePicker", "SelectionListener", "OptionsListener", "DateFormatter"]

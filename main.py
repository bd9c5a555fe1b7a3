#!/usr/bin/env python3
"""Thin entrypoint for datepick."""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Sequence

from config import Config, load_config
from date_ranges import resolve_option
from help_content import HELP_LINES
from models import ValidationError, parse_date
from selection import DateRangePicker
from state import SelectedDateEvent
from store import StorageError, append_history, entry_from_event, load_history

try:
    from _version import __version__
except Exception:  # pragma: no cover - fallback for source runs
    __version__ = "0.0.0"

logger = logging.getLogger(__name__)

VALUE_FLAGS = {
    "-o": "option",
    "-s": "start",
    "-e": "end",
    "-t": "today",
    "-c": "config",
}
SWITCHES = {
    "-l": "list",
    "-H": "history",
    "-h": "help",
    "-v": "version",
    "-d": "debug",
    "-n": "no_history",
}


def _print_help() -> None:
    print("\n".join(HELP_LINES))


def parse_args(argv: Sequence[str]) -> tuple[dict[str, str], set[str]]:
    values: dict[str, str] = {}
    switches: set[str] = set()

    idx = 0
    while idx < len(argv):
        arg = argv[idx]
        if arg in SWITCHES:
            switches.add(SWITCHES[arg])
            idx += 1
            continue
        if arg in VALUE_FLAGS:
            idx += 1
            if idx >= len(argv):
                raise ValidationError(f"{arg} requires a value")
            values[VALUE_FLAGS[arg]] = argv[idx]
            idx += 1
            continue
        raise ValidationError(f"Unknown flag '{arg}'")

    if "end" in values and "start" not in values:
        raise ValidationError("-e requires -s")
    if "option" in values and "start" in values:
        raise ValidationError("Use either -o or -s/-e, not both")
    return values, switches


def _print_options(picker: DateRangePicker, today: date) -> None:
    width = max((len(option.label) for option in picker.options), default=0)
    for option in picker.options:
        if option.is_custom:
            print(f"{option.label:<{width}}  (custom)")
            continue
        rng = resolve_option(option, today=today)
        print(f"{option.label:<{width}}  {picker.format_range(rng.normalized())}")


def _print_selection(picker: DateRangePicker, event: SelectedDateEvent) -> None:
    formatted = picker.format_range(event.range)
    label = picker.label
    if label and label != formatted:
        print(f"{label}: {formatted}")
    else:
        print(formatted)


def _print_history(config: Config) -> None:
    entries = load_history(config.history_path)
    if not entries:
        print("No selections recorded yet.")
        return
    for entry in reversed(entries):
        when = entry.selected_at.strftime("%Y-%m-%d %H:%M")
        start = entry.start.strftime(config.date_format)
        end = entry.end.strftime(config.date_format)
        suffix = f"  {entry.label}" if entry.label else ""
        print(f"{when}  {start} - {end}{suffix}")


def _run(values: dict[str, str], switches: set[str]) -> int:
    config_path = Path(values["config"]).expanduser() if "config" in values else None
    config = load_config(config_path)
    today = parse_date(values["today"]) if "today" in values else date.today()

    picker = DateRangePicker(settings=config, clock=lambda: today)
    picker.initialize()

    if "history" in switches:
        _print_history(config)
        return 0

    if "list" in switches:
        _print_options(picker, today)
        return 0

    event: SelectedDateEvent | None = None
    if "option" in values:
        event = picker.select_option(values["option"])
        if event is None:
            print("Custom ranges need explicit dates: use -s/-e", file=sys.stderr)
            return 1
    elif "start" in values:
        start = parse_date(values["start"])
        end = parse_date(values["end"]) if "end" in values else None
        picker.open_custom_range()
        event = picker.confirm_custom_range(start, end)

    if event is None:
        _print_help()
        return 0

    _print_selection(picker, event)
    if "no_history" not in switches:
        append_history(config.history_path, entry_from_event(event))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        values, switches = parse_args(argv)
    except ValidationError as exc:
        print(str(exc))
        return 1

    logging.basicConfig(
        level=logging.DEBUG if "debug" in switches else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if "version" in switches:
        print(__version__)
        return 0

    if "help" in switches:
        _print_help()
        return 0

    try:
        return _run(values, switches)
    except ValidationError as exc:
        print(str(exc))
        return 1
    except StorageError as exc:
        logger.debug("History storage failed", exc_info=True)
        print(f"Storage error: {exc}")
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)

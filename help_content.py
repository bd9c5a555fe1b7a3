"""Help text for the datepick command line."""

from __future__ import annotations

HELP_LINES: tuple[str, ...] = (
    "datepick - resolve quick-select date ranges and name concrete ones",
    "",
    "Usage:",
    "  datepick -l                         List options with their current ranges",
    '  datepick -o "<label>"               Resolve an option (e.g. "Last Month")',
    "  datepick -s <YYYY-MM-DD> [-e <YYYY-MM-DD>]",
    "                                      Name a concrete range, end defaults to today",
    "  datepick -H                         Show recent selections",
    "  datepick -h                         Show this help",
    "  datepick -v                         Show installed version",
    "",
    "Modifiers:",
    "  -t <YYYY-MM-DD>   treat this day as today",
    "  -c <path>         read config from path instead of the XDG location",
    "  -n                do not record the selection in history",
    "  -d                debug logging",
)

__all__ = ["HELP_LINES"]

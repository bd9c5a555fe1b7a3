#!/usr/bin/env python3
"""PyArrow-backed history of confirmed date range selections."""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from paths import ensure_dir
from state import SelectedDateEvent

DEFAULT_HISTORY_LIMIT = 50

_SCHEMA = pa.schema(
    [
        ("selected_at", pa.timestamp("us")),
        ("start", pa.date32()),
        ("end", pa.date32()),
        ("label", pa.string()),
    ]
)


class StorageError(Exception):
    pass


@dataclass(frozen=True)
class HistoryEntry:
    selected_at: datetime
    start: date
    end: date
    label: Optional[str] = None


def entry_from_event(event: SelectedDateEvent, *, at: Optional[datetime] = None) -> HistoryEntry:
    rng = event.range.normalized()
    if rng.start is None or rng.end is None:
        raise StorageError("Cannot record a selection without both dates")
    option = event.selected_option
    return HistoryEntry(
        selected_at=at or datetime.now(),
        start=rng.start,
        end=rng.end,
        label=option.label if option is not None else None,
    )


def _entries_to_table(entries: List[HistoryEntry]) -> pa.Table:
    return pa.Table.from_pydict(
        {
            "selected_at": [e.selected_at for e in entries],
            "start": [e.start for e in entries],
            "end": [e.end for e in entries],
            "label": [e.label for e in entries],
        },
        schema=_SCHEMA,
    )


def _table_to_entries(table: pa.Table) -> List[HistoryEntry]:
    if not table.schema.equals(_SCHEMA):
        raise StorageError("Parquet schema mismatch for selection history")
    rows = zip(
        table.column("selected_at").to_pylist(),
        table.column("start").to_pylist(),
        table.column("end").to_pylist(),
        table.column("label").to_pylist(),
    )
    entries = [
        HistoryEntry(selected_at=at, start=start, end=end, label=label)
        for at, start, end, label in rows
    ]
    entries.sort(key=lambda e: e.selected_at)
    return entries


def load_history(path: Path) -> List[HistoryEntry]:
    if not path.exists():
        return []
    try:
        table = pq.read_table(path)
        return _table_to_entries(table)
    except StorageError:
        raise
    except Exception as exc:
        raise StorageError(f"Failed to read history from {path}: {exc}") from exc


def _write_atomic(path: Path, table: pa.Table) -> None:
    ensure_dir(path.parent)
    with tempfile.NamedTemporaryFile(dir=str(path.parent), delete=False) as tmp:
        tmp_path = Path(tmp.name)
    try:
        pq.write_table(table, tmp_path)
        tmp_path.replace(path)
    except Exception as exc:
        raise StorageError(f"Failed to write history to {path}: {exc}") from exc
    finally:
        if tmp_path.exists():
            try:
                os.remove(tmp_path)
            except OSError:
                pass


def save_history(path: Path, entries: Iterable[HistoryEntry], *, limit: int = DEFAULT_HISTORY_LIMIT) -> List[HistoryEntry]:
    ordered = sorted(entries, key=lambda e: e.selected_at)
    if limit > 0:
        ordered = ordered[-limit:]
    _write_atomic(path, _entries_to_table(ordered))
    return ordered


def append_history(path: Path, entry: HistoryEntry, *, limit: int = DEFAULT_HISTORY_LIMIT) -> List[HistoryEntry]:
    """Append an entry, keeping only the newest ``limit`` selections."""
    entries = load_history(path)
    entries.append(entry)
    return save_history(path, entries, limit=limit)


__all__ = [
    "HistoryEntry",
    "StorageError",
    "append_history",
    "entry_from_event",
    "load_history",
    "save_history",
    "DEFAULT_HISTORY_LIMIT",
]

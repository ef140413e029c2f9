from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from networth_core.domain.models import (
    CalendarMonth,
    DistributionSlice,
    MonthNote,
    NetWorthPoint,
    TimeSeriesStore,
)
from networth_core.io._csv import read_table

logger = logging.getLogger(__name__)


def load_series(csv_path: str | Path) -> List[NetWorthPoint]:
    df = read_table(csv_path, {"month", "value"})
    return [
        NetWorthPoint(month=CalendarMonth.parse(row["month"]), value=float(row["value"]))
        for _, row in df.iterrows()
    ]


def load_notes(csv_path: str | Path) -> List[MonthNote]:
    df = read_table(csv_path, {"month", "note"})
    notes: List[MonthNote] = []
    for _, row in df.iterrows():
        if not row["note"].strip():
            logger.warning("Skipping empty note for %s", row["month"])
            continue
        notes.append(MonthNote(month=CalendarMonth.parse(row["month"]), text=row["note"].strip()))
    return notes


def load_distribution(csv_path: str | Path) -> List[DistributionSlice]:
    df = read_table(csv_path, {"name", "value"})
    return [DistributionSlice(name=row["name"], value=float(row["value"])) for _, row in df.iterrows()]


def load_store(series_path: str | Path, notes_path: Optional[str | Path] = None) -> TimeSeriesStore:
    """
    Builds the store from CSV files. Out-of-order or duplicate months raise
    ValidationError; missing months are only logged.
    """
    notes = load_notes(notes_path) if notes_path else []
    store = TimeSeriesStore(points=load_series(series_path), notes=notes)
    missing = store.gaps()
    if missing:
        logger.warning(
            "Series has %d missing month(s): %s",
            len(missing),
            ", ".join(str(m) for m in missing),
        )
    return store

"""Series loading for the bar chart race.

Turns long-form ``timestamp, label, magnitude`` rows into an ordered tuple of
immutable :class:`Snapshot` objects. Malformed rows are dropped per row and
never abort loading.
"""

import logging
import math
import numbers
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

COLUMNS = ["timestamp", "label", "magnitude"]

DEFAULT_SERIES_CSV = os.path.join(
    os.path.dirname(__file__), "datasets", "brand_output.csv"
)


@dataclass(frozen=True)
class Snapshot:
    """One point in time: every label's magnitude at ``timestamp``."""

    timestamp: int | float
    entries: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))


Series = tuple[Snapshot, ...]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _clean_label(value) -> str | None:
    if pd.isna(value):
        return None
    label = str(value).strip()
    return label or None


def _ordinal(value: float) -> int | float:
    return int(value) if float(value).is_integer() else float(value)


def is_valid_magnitude(value) -> bool:
    """True for finite, non-negative numbers (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value >= 0


def series_from_frame(df: pd.DataFrame) -> Series:
    """Group a long-form frame into snapshots.

    The first three columns are read as timestamp, label and magnitude,
    whatever their header says. Timestamps keep first-seen order while
    grouping, then the series is sorted ascending (stable). A label repeated
    within one timestamp keeps its last value.

    Args:
        df: Frame with at least three columns.

    Returns:
        Tuple of snapshots, possibly empty.
    """
    if df.shape[1] < len(COLUMNS) or df.empty:
        return ()
    df = df.iloc[:, : len(COLUMNS)].copy()
    df.columns = COLUMNS

    labels = df["label"].map(_clean_label)
    timestamps = pd.to_numeric(df["timestamp"].map(_strip), errors="coerce")
    magnitudes = pd.to_numeric(df["magnitude"].map(_strip), errors="coerce")
    valid = (
        labels.notna()
        & timestamps.notna()
        & np.isfinite(magnitudes)
        & (magnitudes >= 0)
    )
    dropped = int((~valid).sum())
    if dropped:
        logger.debug("series: dropped %s malformed rows", dropped)

    grouped: dict[int | float, dict[str, float]] = {}
    for ts, label, value in zip(
        timestamps[valid], labels[valid], magnitudes[valid]
    ):
        grouped.setdefault(_ordinal(ts), {})[str(label)] = float(value)

    ordered = sorted(grouped.items(), key=lambda item: item[0])
    return tuple(Snapshot(ts, entries) for ts, entries in ordered)


def series_from_records(rows: Iterable[tuple]) -> Series:
    """Build a series from ``(timestamp, label, magnitude)`` tuples."""
    return series_from_frame(pd.DataFrame(list(rows), columns=COLUMNS))


def load_series(source=DEFAULT_SERIES_CSV) -> Series:
    """Read a ``timestamp,label,magnitude`` CSV (path or buffer) into a series.

    The header row is skipped and columns are taken by position.
    """
    df = pd.read_csv(source, dtype=str, keep_default_na=False, na_values=[""])
    series = series_from_frame(df)
    logger.info(
        "series: loaded %s snapshots from %s rows",
        len(series),
        len(df),
    )
    return series

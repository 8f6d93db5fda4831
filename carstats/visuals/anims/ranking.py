"""Ranking of one tick's entries with jitter-tolerant, stable tie-breaking."""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Mapping


@dataclass(frozen=True)
class RankedEntry:
    """A visible bar for one tick.

    ``previous_magnitude`` and ``previous_rank`` are the interpolation source:
    0 and None for a bar entering the top-N this tick.
    """

    label: str
    magnitude: float
    rank: int
    previous_magnitude: float = 0.0
    previous_rank: int | None = None

    @property
    def entering(self) -> bool:
        return self.previous_rank is None

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "magnitude": self.magnitude,
            "rank": self.rank,
            "previous_magnitude": self.previous_magnitude,
            "previous_rank": self.previous_rank,
        }


def rank_entries(
    entries: Iterable[tuple[str, float]],
    last_rank: Mapping[str, int],
    top_n: int,
    jitter_fraction: float = 0.002,
    last_magnitudes: Mapping[str, float] | None = None,
) -> tuple[RankedEntry, ...]:
    """Sort entries descending and keep the top ``top_n``.

    Two magnitudes closer than ``jitter_fraction`` of the tick's maximum are
    tied; ties keep the order of the previous tick's ranks, and labels that
    were not visible before rank as ``top_n`` (behind every seen label).
    Fully tied unseen labels keep their input order.

    Args:
        entries: ``(label, magnitude)`` pairs for the tick.
        last_rank: Previous tick's label -> rank.
        top_n: Visible item cap.
        jitter_fraction: Tie tolerance relative to the tick's max magnitude.
        last_magnitudes: Previous tick's label -> magnitude, used as the
            interpolation source.

    Returns:
        Ranked entries, ranks ``0..k-1`` with ``k = min(top_n, len(entries))``.
    """
    entries = list(entries)
    last_magnitudes = last_magnitudes or {}
    max_value = max((value for _, value in entries), default=0.0)
    jitter = max_value * jitter_fraction

    def compare(a: tuple[str, float], b: tuple[str, float]) -> int:
        diff = b[1] - a[1]
        if abs(diff) < jitter:
            return last_rank.get(a[0], top_n) - last_rank.get(b[0], top_n)
        return -1 if diff < 0 else (1 if diff > 0 else 0)

    ordered = sorted(entries, key=cmp_to_key(compare))[: max(0, top_n)]
    return tuple(
        RankedEntry(
            label=label,
            magnitude=value,
            rank=rank,
            previous_magnitude=last_magnitudes.get(label, 0.0),
            previous_rank=last_rank.get(label),
        )
        for rank, (label, value) in enumerate(ordered)
    )

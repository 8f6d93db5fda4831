"""State containers used by the ranked-series animator.

``PlaybackState`` is the control state machine; ``AnimationState`` is the
memory carried from one tick to the next (tie-break ranks, previous values,
current axis max) so that transitions start where the last tick ended.
"""

from dataclasses import dataclass

from carstats.visuals.anims.layout import Layout
from carstats.visuals.anims.ranking import RankedEntry


@dataclass
class PlaybackState:
    """Where playback is and whether the timer should be running."""

    current_tick_index: int = 0
    running: bool = False
    paused: bool = False

    def to_dict(self) -> dict:
        return {
            "current_tick_index": self.current_tick_index,
            "running": self.running,
            "paused": self.paused,
        }


class AnimationState:
    """Holds per-tick memory for bar transitions.

    Reset on every ``start()``; read and written on every rendered tick.
    """

    def __init__(self) -> None:
        self.last_rank: dict[str, int]
        self.last_magnitudes: dict[str, float]
        self.last_entries: tuple[RankedEntry, ...]
        self.last_timestamp: int | float | None
        self.last_layout: Layout | None
        self.axis_max: float
        self.reset()

    def reset(self) -> None:
        self.last_rank = {}
        self.last_magnitudes = {}
        self.last_entries = ()
        self.last_timestamp = None
        self.last_layout = None
        self.axis_max = 0.0

    def remember(
        self,
        entries: tuple[RankedEntry, ...],
        timestamp: int | float,
        layout: Layout,
    ) -> None:
        self.last_entries = entries
        self.last_rank = {entry.label: entry.rank for entry in entries}
        self.last_magnitudes = {entry.label: entry.magnitude for entry in entries}
        self.last_timestamp = timestamp
        self.last_layout = layout

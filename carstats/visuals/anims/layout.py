"""Vertical band layout for the ranked bars."""

from dataclasses import dataclass

from carstats.visuals.core import constants


@dataclass(frozen=True)
class Layout:
    """Rows of the drawing area, measured from its top edge.

    Attributes:
        height: Height actually used by the bars.
        band_count: Number of rows.
        band_height: Height of one bar.
        step: Distance between the tops of two consecutive rows.
    """

    height: float
    band_count: int
    band_height: float
    step: float

    def row_y(self, rank: int) -> float:
        return rank * self.step

    @property
    def exit_y(self) -> float:
        """Just below the visible rows; bars enter from and exit to here."""
        return self.height + self.band_height

    def to_dict(self) -> dict:
        return {
            "height": self.height,
            "band_count": self.band_count,
            "band_height": self.band_height,
            "step": self.step,
        }


def compute_layout(
    visible_count: int,
    height: float = constants.inner_height,
    limit_bar_stretch: bool = constants.limit_bar_stretch,
    max_bar_height: float = constants.max_bar_height,
    min_bar_gap: float = constants.min_bar_gap,
    padding: float = constants.band_padding,
) -> Layout:
    """Lay out ``visible_count`` rows over ``height``.

    By default rows fill the whole height with ``padding`` as the inner gap
    ratio. With ``limit_bar_stretch`` and few rows, the area shrinks to exactly
    ``n * max_bar_height + (n - 1) * min_bar_gap``, anchored at the top.
    """
    n = max(0, visible_count)
    if limit_bar_stretch and n > 0:
        desired = n * max_bar_height + (n - 1) * min_bar_gap
        if desired < height:
            return Layout(
                height=desired,
                band_count=n,
                band_height=max_bar_height,
                step=max_bar_height + min_bar_gap,
            )
    step = height / max(1, n - padding)
    return Layout(
        height=height, band_count=n, band_height=step * (1 - padding), step=step
    )

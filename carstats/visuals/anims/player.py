"""Interactive bar chart race player.

A matplotlib window with playback buttons. The animator ticks on the canvas
timer (GUI event loop, single-threaded); a second, faster timer redraws the
current plan's transition.

Run with ``python -m carstats.visuals.anims.player [series.csv]``.
"""

import logging
import sys
import time

import matplotlib.pyplot as plt
from matplotlib.widgets import Button

from carstats.data.series import load_series
from carstats.visuals.anims.animator import AnimatorConfig, RankedSeriesAnimator, RenderPlan
from carstats.visuals.anims.transitions import frame_at
from carstats.visuals.core import constants
from carstats.visuals.core.colors import OrdinalColors
from carstats.visuals.plots.create_bar_plot import draw_frame, new_race_figure

logger = logging.getLogger(__name__)

FRAME_MS = 40

# (animator method, label, button x)
CONTROLS = (
    ("start", "Start", 0.02),
    ("pause", "Pause", 0.14),
    ("rewind", "-5", 0.26),
    ("step_backward", "-1", 0.36),
    ("step_forward", "+1", 0.46),
    ("resume", "Resume", 0.56),
)


class CanvasInterval:
    """Interval backed by the figure canvas timer."""

    def __init__(self, canvas, callback, interval_ms: float) -> None:
        self._timer = canvas.new_timer(interval=int(interval_ms))
        self._timer.add_callback(callback)
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()


class RacePlayer:
    """Binds a ``RankedSeriesAnimator`` to a matplotlib figure and buttons."""

    def __init__(self, series, config: AnimatorConfig | None = None) -> None:
        self.fig, self.ax, self.timestamp_text = new_race_figure(
            title="Brand output over time"
        )
        self.fig.subplots_adjust(bottom=0.2)
        self.animator = RankedSeriesAnimator(
            series,
            config,
            interval_factory=lambda cb, ms: CanvasInterval(self.fig.canvas, cb, ms),
            on_render=self._on_render,
        )
        self.colors = OrdinalColors(self.animator.labels)
        self.plan: RenderPlan | None = None
        self.plan_started = 0.0

        self.buttons: dict[str, Button] = {}
        for name, label, x in CONTROLS:
            button_ax = self.fig.add_axes([x, 0.015, 0.09, 0.05])
            button = Button(button_ax, label)
            button.on_clicked(lambda _event, name=name: self.control(name))
            self.buttons[name] = button

        self.redraw_timer = self.fig.canvas.new_timer(interval=FRAME_MS)
        self.redraw_timer.add_callback(self.redraw)
        self.redraw_timer.start()
        self.fig.canvas.mpl_connect("close_event", lambda _event: self.close())
        self.refresh_controls()

    def _on_render(self, plan: RenderPlan) -> None:
        self.plan = plan
        self.plan_started = time.monotonic()

    def control(self, name: str) -> bool:
        """Invoke an animator control by name if it is currently legal."""
        if not self.animator.available_controls().get(name):
            return False
        done = getattr(self.animator, name)()
        self.refresh_controls()
        self.redraw()
        return done

    def refresh_controls(self) -> None:
        available = self.animator.available_controls()
        for name, button in self.buttons.items():
            enabled = available.get(name, False)
            button.label.set_color("#111111" if enabled else "#A9A9A9")
            button.ax.set_facecolor("#FFFFFF" if enabled else "#E5E5E5")

    def redraw(self) -> None:
        if self.plan is None:
            return
        duration = self.plan.duration_ms / 1000
        elapsed = time.monotonic() - self.plan_started
        progress = 1.0 if not duration else min(1.0, elapsed / duration)
        draw_frame(self.ax, frame_at(self.plan, progress), self.colors, self.timestamp_text)
        self.refresh_controls()
        self.fig.canvas.draw_idle()

    def close(self) -> None:
        self.redraw_timer.stop()
        self.animator.close()


def main(argv=None) -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    argv = sys.argv[1:] if argv is None else argv
    series = load_series(argv[0]) if argv else load_series()
    RacePlayer(series, AnimatorConfig(tick_ms=constants.tick_ms))
    plt.show()


if __name__ == "__main__":
    main()

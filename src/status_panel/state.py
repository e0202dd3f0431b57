"""
AppState for the status panel event loop.

The state record is owned by the EventLoop and mutated only by its
dispatch step. Renderers receive a frozen snapshot via AppState.snapshot().
"""

from dataclasses import dataclass
from enum import Enum


class GaugeColor(Enum):
    """Which of the two configured colors fills the gauge."""

    PRIMARY = "primary"
    ALTERNATE = "alternate"

    def toggled(self) -> "GaugeColor":
        """Return the other color."""
        if self is GaugeColor.PRIMARY:
            return GaugeColor.ALTERNATE
        return GaugeColor.PRIMARY


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """
    Clamp value into [low, high].

    Args:
        value: Value to clamp
        low: Lower bound (default 0.0)
        high: Upper bound (default 1.0)

    Returns:
        value limited to the closed range
    """
    return max(low, min(high, value))


@dataclass
class AppState:
    """
    Mutable UI state for the progress screens.

    Attributes:
        running: False once the quit key has been handled
        gauge_color: Current gauge fill color
        progress: Gauge fill ratio, always within [0.0, 1.0]
    """

    running: bool = True
    gauge_color: GaugeColor = GaugeColor.PRIMARY
    progress: float = 0.0

    def __post_init__(self) -> None:
        self.progress = clamp(self.progress)

    def snapshot(self) -> "StateView":
        """
        Take an immutable copy for rendering.

        Returns:
            StateView with the current field values
        """
        return StateView(
            running=self.running,
            gauge_color=self.gauge_color,
            progress=self.progress,
        )


@dataclass(frozen=True)
class StateView:
    """Read-only view of AppState handed to render functions."""

    running: bool
    gauge_color: GaugeColor
    progress: float
"""
Render functions for the status panel screens.

This module maps state to Rich renderables and never mutates state:
- render(): "Process overview" screen with the progress gauge
- render_titles(): bordered panel with left/middle/right titles
- Gauge: horizontal fill-ratio bar with a centered label
- TitledPanel: panel whose top border carries three aligned titles

Layout structure of render():
+----------------------------------------------------------+
|                    Process overview         (ratio=1)    |
+- Background processes -----------------------------------+
| Gauge (3 rows fixed)                                     |
|                                             (ratio=4)    |
+------------------------------ q: quit | c: change color -+
"""

from __future__ import annotations

from collections.abc import Mapping

from rich import box
from rich.align import Align
from rich.console import Console, ConsoleOptions, RenderableType, RenderResult
from rich.layout import Layout
from rich.panel import Panel
from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from status_panel.state import GaugeColor, StateView

SCREEN_TITLE = "Process overview"
PANEL_TITLE = "Background processes"
KEY_HINT = "q: quit | c: change color"
GAUGE_HEIGHT = 3

DEFAULT_COLORS: Mapping[GaugeColor, str] = {
    GaugeColor.PRIMARY: "green",
    GaugeColor.ALTERNATE: "magenta",
}


def format_label(progress: float) -> str:
    """
    Format progress as a percentage with two decimals.

    Args:
        progress: Fill ratio in [0.0, 1.0]

    Returns:
        Label like "50.00%"
    """
    return f"{progress * 100:.2f}%"


class Gauge:
    """
    Horizontal gauge filling ratio of the available width.

    Filled cells use the gauge color as background; the label is drawn
    centered on the middle row, inverted where it overlaps the fill.
    """

    def __init__(
        self, ratio: float, label: str, color: str, height: int = GAUGE_HEIGHT
    ) -> None:
        self.ratio = ratio
        self.label = label
        self.color = color
        self.height = height

    def filled_cells(self, width: int) -> int:
        """Number of filled cells for a gauge of the given width."""
        return int(width * self.ratio)

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        width = options.max_width
        filled = self.filled_cells(width)
        fill_style = Style(color="black", bgcolor=self.color)
        empty_style = Style(color=self.color)

        label_row = self.height // 2
        label = self.label[:width]
        start = (width - len(label)) // 2

        for row in range(self.height):
            cells = [" "] * width
            if row == label_row:
                cells[start : start + len(label)] = label
            line = "".join(cells)
            if filled:
                yield Segment(line[:filled], fill_style)
            if filled < width:
                yield Segment(line[filled:], empty_style)
            yield Segment.line()


def create_layout() -> Layout:
    """
    Create the overview layout structure.

    Returns a Layout with two named regions:
    - header: top 20%, screen title
    - body: bottom 80%, process panel

    Returns:
        Layout with 2 named regions
    """
    layout = Layout(name="root")
    layout.split_column(
        Layout(name="header", ratio=1),
        Layout(name="body", ratio=4),
    )
    return layout


def render(
    state: StateView, colors: Mapping[GaugeColor, str] | None = None
) -> Layout:
    """
    Render the process overview screen for a state snapshot.

    Args:
        state: Snapshot to draw
        colors: Mapping from GaugeColor to a Rich color name

    Returns:
        Layout ready to hand to Live.update()
    """
    palette = colors if colors is not None else DEFAULT_COLORS
    layout = create_layout()

    layout["header"].update(
        Align.center(Text(SCREEN_TITLE, style="bold"), vertical="middle")
    )

    gauge = Gauge(
        ratio=state.progress,
        label=format_label(state.progress),
        color=palette[state.gauge_color],
    )
    layout["body"].update(
        Panel(
            gauge,
            title=f"[bold]{PANEL_TITLE}[/bold]",
            subtitle=f"[dim]{KEY_HINT}[/dim]",
            subtitle_align="center",
            box=box.SQUARE,
            padding=(0, 1),
        )
    )
    return layout


def compose_titles(left: str, middle: str, right: str, width: int, fill: str) -> str:
    """
    Lay out three titles across width cells.

    Left is flush left, middle is centered, right is flush right; gaps are
    filled with fill. When the titles do not fit, they are joined with a
    single fill character and truncated to width.

    Args:
        left: Left-aligned title
        middle: Centered title
        right: Right-aligned title
        width: Total cells available
        fill: Single character used between titles

    Returns:
        String of exactly width characters (or shorter if width < 0)
    """
    if width <= 0:
        return ""

    middle_start = (width - len(middle)) // 2
    right_start = width - len(right)
    if len(left) < middle_start and middle_start + len(middle) < right_start:
        cells = [fill] * width
        cells[0 : len(left)] = left
        cells[middle_start : middle_start + len(middle)] = middle
        cells[right_start:] = right
        return "".join(cells)

    joined = fill.join(t for t in (left, middle, right) if t)
    return joined[:width].ljust(width, fill)


class TitledPanel:
    """
    Bordered panel with three titles on its top border.

    Rich panels carry a single title, so the three titles are composed into
    one string sized to the render width.
    """

    def __init__(
        self,
        renderable: RenderableType,
        left: str,
        middle: str,
        right: str,
        box_style: box.Box = box.SQUARE,
    ) -> None:
        self.renderable = renderable
        self.left = left
        self.middle = middle
        self.right = right
        self.box_style = box_style

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        # Panel keeps 2 border cells and pads the title with 1 space per side
        title_width = options.max_width - 6
        title = compose_titles(
            self.left, self.middle, self.right, title_width, self.box_style.top
        )
        yield Panel(
            self.renderable,
            title=Text(title) if title else None,
            title_align="left",
            box=self.box_style,
            padding=0,
        )


def render_titles(view: object = None) -> TitledPanel:
    """
    Render the titles screen.

    The screen is static; view is accepted so the function fits
    Terminal.draw() like render().

    Returns:
        Panel with "Left Title", "Middle Title", "Right Title" on its border
        and "Hello" centered inside
    """
    return TitledPanel(
        Align.center(Text("Hello")),
        left="Left Title",
        middle="Middle Title",
        right="Right Title",
    )

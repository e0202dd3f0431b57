"""
Terminal wrapper over Rich Live.

Terminal owns the alternate screen for the duration of a run:
- initialize(): enter Live(screen=True) with an initial renderable
- draw(): render a state snapshot and refresh immediately
- restore(): leave the alternate screen

Any Rich or OS failure is re-raised as TerminalError so the CLI can
report it after the screen is restored.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from rich.console import Console, RenderableType
from rich.live import Live

from status_panel.exceptions import TerminalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Terminal:
    """
    Full-screen terminal renderer.

    Uses auto_refresh=False: the screen changes only when draw() is called.

    Example:
        with Terminal(console) as terminal:
            terminal.draw(render, state.snapshot())
    """

    def __init__(
        self,
        console: Console | None = None,
        initial: RenderableType = "",
        screen: bool = True,
    ) -> None:
        """
        Initialize terminal.

        Args:
            console: Rich Console to draw on (creates default if None)
            initial: Renderable shown before the first draw
            screen: Use the alternate screen (default True)
        """
        self.console = console if console is not None else Console()
        self._initial = initial
        self._screen = screen
        self._live: Live | None = None
        self.draw_count = 0

    def initialize(self) -> Terminal:
        """
        Enter the alternate screen.

        Raises:
            TerminalError: If the terminal cannot be set up
        """
        live = Live(
            self._initial,
            console=self.console,
            auto_refresh=False,
            screen=self._screen,
            transient=True,
        )
        try:
            live.start(refresh=True)
        except Exception as e:
            raise TerminalError("initialize", e) from e
        self._live = live
        logger.debug("terminal initialized (screen=%s)", self._screen)
        return self

    def draw(self, render_fn: Callable[[T], RenderableType], view: T) -> None:
        """
        Render view with render_fn and refresh the screen.

        Args:
            render_fn: Pure function from view to a renderable
            view: Immutable state snapshot

        Raises:
            TerminalError: If called before initialize() or rendering fails
        """
        if self._live is None:
            raise TerminalError("draw", RuntimeError("terminal not initialized"))
        try:
            self._live.update(render_fn(view), refresh=True)
        except Exception as e:
            raise TerminalError("draw", e) from e
        self.draw_count += 1

    def restore(self) -> None:
        """
        Leave the alternate screen. Safe to call more than once.

        Raises:
            TerminalError: If the terminal cannot be restored
        """
        live, self._live = self._live, None
        if live is None:
            return
        try:
            live.stop()
        except Exception as e:
            raise TerminalError("restore", e) from e
        logger.debug("terminal restored after %d draws", self.draw_count)

    def __enter__(self) -> Terminal:
        return self.initialize()

    def __exit__(self, *exc_info: object) -> None:
        self.restore()

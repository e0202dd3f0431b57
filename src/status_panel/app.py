"""
EventLoop and screen runners for the status panel.

This module provides:
- dispatch(): apply one event to AppState
- EventLoop: single consumer of the event channel, owner of AppState
- run_progress(): progress screen with input and timer producers
- run_gauge(): progress screen with a fixed gauge, input producer only
- run_titles(): titles screen, exits on any key

All state mutation happens in dispatch() on the thread running the loop.
Producers only put events on the channel, so no locks are needed.
"""

from __future__ import annotations

import functools
import logging
import queue
import threading
from collections.abc import Mapping
from typing import Callable, Protocol

from rich.console import RenderableType

from status_panel.config import Settings
from status_panel.events import Event, Fatal, KeyPress, ProgressTick
from status_panel.exceptions import ProducerError
from status_panel.layout import render, render_titles
from status_panel.producers import InputProducer, KeySource, ProgressProducer
from status_panel.state import AppState, GaugeColor, StateView, clamp

logger = logging.getLogger(__name__)

QUIT_KEY = "q"
COLOR_KEY = "c"


class Renderer(Protocol):
    """The drawing side of Terminal, as seen by the loop."""

    def draw(
        self, render_fn: Callable[..., RenderableType], view: object
    ) -> None: ...


def dispatch(state: AppState, event: Event) -> None:
    """
    Apply a single event to state.

    - KeyPress("q"): stop running
    - KeyPress("c"): toggle gauge color
    - other KeyPress: no change
    - ProgressTick(v): progress = clamp(v)
    - Fatal(reason): raise ProducerError

    Args:
        state: State to mutate
        event: Event taken from the channel

    Raises:
        ProducerError: On a Fatal event
        TypeError: On anything that is not an Event
    """
    if isinstance(event, KeyPress):
        if event.code == QUIT_KEY:
            logger.debug("quit requested")
            state.running = False
        elif event.code == COLOR_KEY:
            state.gauge_color = state.gauge_color.toggled()
            logger.debug("gauge color -> %s", state.gauge_color.value)
    elif isinstance(event, ProgressTick):
        state.progress = clamp(event.value)
    elif isinstance(event, Fatal):
        raise ProducerError(event.reason)
    else:
        raise TypeError(f"unexpected event: {event!r}")


class EventLoop:
    """
    Consumes events until the quit key and redraws after each one.

    Example:
        loop = EventLoop(terminal, channel, render)
        final_state = loop.run()
    """

    def __init__(
        self,
        terminal: Renderer,
        channel: queue.SimpleQueue,
        render_fn: Callable[[StateView], RenderableType],
        state: AppState | None = None,
    ) -> None:
        """
        Initialize event loop.

        Args:
            terminal: Renderer receiving one draw() per event
            channel: Queue filled by producers
            render_fn: Pure function from StateView to a renderable
            state: Initial state (defaults to AppState())
        """
        self.state = state if state is not None else AppState()
        self._terminal = terminal
        self._channel = channel
        self._render_fn = render_fn

    def run(self) -> AppState:
        """
        Run until the state stops running.

        Blocks on the channel with no timeout.

        Returns:
            Final state

        Raises:
            ProducerError: If a producer reported a failure
            TerminalError: If drawing fails
        """
        while self.state.running:
            event = self._channel.get()
            dispatch(self.state, event)
            self._terminal.draw(self._render_fn, self.state.snapshot())
        return self.state


def gauge_colors(settings: Settings) -> Mapping[GaugeColor, str]:
    """Map GaugeColor values to the configured Rich colors."""
    return {
        GaugeColor.PRIMARY: settings.primary_color,
        GaugeColor.ALTERNATE: settings.alternate_color,
    }


def _run_with_producers(
    terminal: Renderer,
    settings: Settings,
    state: AppState,
    start_producers: Callable[[queue.SimpleQueue, threading.Event], list],
) -> AppState:
    channel: queue.SimpleQueue = queue.SimpleQueue()
    stop = threading.Event()
    producers = start_producers(channel, stop)
    started = []

    loop = EventLoop(
        terminal,
        channel,
        functools.partial(render, colors=gauge_colors(settings)),
        state=state,
    )
    try:
        for producer in producers:
            producer.start()
            started.append(producer)
        return loop.run()
    finally:
        stop.set()
        for producer in started:
            if not producer.join(settings.join_timeout):
                logger.warning(
                    "%s did not stop within %.1fs",
                    producer.name,
                    settings.join_timeout,
                )


def run_progress(
    terminal: Renderer, source: KeySource, settings: Settings | None = None
) -> AppState:
    """
    Run the progress screen until "q".

    Args:
        terminal: Initialized terminal
        source: Key source for the input producer
        settings: Tick and color settings (defaults to Settings())

    Returns:
        Final state
    """
    settings = settings if settings is not None else Settings()

    def start(channel: queue.SimpleQueue, stop: threading.Event) -> list:
        return [
            InputProducer(source, channel, stop, settings.key_poll_interval),
            ProgressProducer(
                channel, stop, settings.tick_interval, settings.tick_step
            ),
        ]

    return _run_with_producers(terminal, settings, AppState(), start)


def run_gauge(
    terminal: Renderer,
    source: KeySource,
    progress: float = 0.0,
    settings: Settings | None = None,
) -> AppState:
    """
    Run the progress screen with a fixed gauge until "q".

    Args:
        terminal: Initialized terminal
        source: Key source for the input producer
        progress: Gauge value, clamped to [0.0, 1.0]
        settings: Color settings (defaults to Settings())

    Returns:
        Final state
    """
    settings = settings if settings is not None else Settings()

    def start(channel: queue.SimpleQueue, stop: threading.Event) -> list:
        return [InputProducer(source, channel, stop, settings.key_poll_interval)]

    return _run_with_producers(
        terminal, settings, AppState(progress=progress), start
    )


def run_titles(
    terminal: Renderer, source: KeySource, poll_interval: float = 0.1
) -> str:
    """
    Draw the titles screen until any key is pressed.

    Redraws after every poll so a resized terminal is picked up.

    Returns:
        The key that ended the screen

    Raises:
        ProducerError: If the key source cannot be read
    """
    while True:
        terminal.draw(render_titles, None)
        try:
            key = source.poll_event(poll_interval)
        except (OSError, EOFError) as e:
            logger.error("keyboard read failed: %s", e)
            raise ProducerError(f"keyboard: {e}") from e
        if key is not None:
            return key

"""
Event producers feeding the EventLoop channel.

This module provides the two background threads of the progress screen:
- InputProducer: forwards every key press from a key source as KeyPress
- ProgressProducer: emits ProgressTick on a fixed period

Both producers:
- Only put events on the channel, never touch AppState
- Stop when their shared stop token (threading.Event) is set
- Report failures as a Fatal event instead of dying silently
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Protocol

from status_panel.events import Event, Fatal, KeyPress, ProgressTick

logger = logging.getLogger(__name__)

Channel = queue.SimpleQueue


class KeySource(Protocol):
    """Anything that can be polled for a key with a timeout."""

    def poll_event(self, timeout: float) -> str | None: ...


def advance(value: float, step: float) -> float:
    """
    Add step to value, clamped at 1.0.

    The sum is rounded to 10 decimal places so that repeated float
    steps (e.g. 100 x 0.01) land exactly on 1.0.

    Args:
        value: Current accumulated progress
        step: Increment per tick

    Returns:
        New progress value, never above 1.0
    """
    return min(1.0, round(value + step, 10))


class _ProducerThread:
    """Shared start/join plumbing for producers."""

    name = "producer"

    def __init__(self, channel: Channel, stop: threading.Event) -> None:
        self._channel = channel
        self._stop = stop
        self._thread = threading.Thread(
            target=self._guarded_run, name=self.name, daemon=True
        )

    def start(self) -> None:
        """Start the producer thread."""
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for the thread to finish.

        Args:
            timeout: Seconds to wait, or None to wait forever

        Returns:
            True if the thread has exited
        """
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _guarded_run(self) -> None:
        logger.debug("%s started", self.name)
        try:
            self.run()
        except Exception as e:
            logger.exception("%s failed", self.name)
            self._channel.put(Fatal(reason=f"{self.name}: {e}"))
        else:
            logger.debug("%s stopped", self.name)

    def run(self) -> None:
        raise NotImplementedError


class InputProducer(_ProducerThread):
    """
    Forwards key presses to the channel.

    Example:
        producer = InputProducer(source, channel, stop)
        producer.start()
        ...
        stop.set()
        producer.join(1.0)
    """

    name = "input-producer"

    def __init__(
        self,
        source: KeySource,
        channel: Channel,
        stop: threading.Event,
        poll_interval: float = 0.1,
    ) -> None:
        """
        Initialize input producer.

        Args:
            source: Key source polled for input
            channel: Queue shared with the EventLoop
            stop: Token that ends the producer when set
            poll_interval: Seconds per poll, bounds shutdown latency
        """
        super().__init__(channel, stop)
        self._source = source
        self._poll_interval = poll_interval

    def run(self) -> None:
        while not self._stop.is_set():
            key = self._source.poll_event(self._poll_interval)
            if key is None:
                continue
            self._channel.put(KeyPress(code=key))


class ProgressProducer(_ProducerThread):
    """
    Emits the accumulated progress every interval.

    Keeps emitting 1.0 after the accumulator saturates; only the stop
    token ends it.
    """

    name = "progress-producer"

    def __init__(
        self,
        channel: Channel,
        stop: threading.Event,
        interval: float = 0.1,
        step: float = 0.01,
    ) -> None:
        """
        Initialize progress producer.

        Args:
            channel: Queue shared with the EventLoop
            stop: Token that ends the producer when set
            interval: Seconds between ticks (default 0.1)
            step: Progress added per tick (default 0.01)
        """
        super().__init__(channel, stop)
        self._interval = interval
        self._step = step
        self.value = 0.0

    def tick(self) -> Event:
        """
        Advance the accumulator by one step.

        Returns:
            ProgressTick carrying the new absolute value
        """
        self.value = advance(self.value, self._step)
        return ProgressTick(value=self.value)

    def run(self) -> None:
        # wait() doubles as the timer and returns True once stop is set
        while not self._stop.wait(self._interval):
            self._channel.put(self.tick())

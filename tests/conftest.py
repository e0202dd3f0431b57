"""Shared fakes for status panel tests."""

import time
from collections.abc import Iterable

import pytest


class FakeTerminal:
    """Records every draw() instead of rendering to a screen."""

    def __init__(self):
        self.draws = []

    def draw(self, render_fn, view):
        # Render eagerly so a broken render function fails the test
        render_fn(view)
        self.draws.append(view)


class ScriptedKeySource:
    """
    Key source replaying a script.

    None entries simulate a poll timeout; an exception instance is raised
    when reached. After the script ends every poll times out.
    """

    def __init__(self, script: Iterable):
        self._script = list(script)
        self.polls = 0

    def poll_event(self, timeout: float):
        self.polls += 1
        if not self._script:
            time.sleep(timeout)
            return None
        item = self._script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if item is None:
            time.sleep(timeout)
        return item


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def key_source():
    """Factory for ScriptedKeySource."""
    return ScriptedKeySource

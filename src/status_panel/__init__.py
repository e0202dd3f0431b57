"""
Terminal status panel demos.

This package provides the building blocks for the status panel screens:
- AppState, GaugeColor: UI state owned by the event loop
- KeyPress, ProgressTick, Fatal: events carried on the channel
- InputProducer, ProgressProducer: background event threads
- EventLoop, dispatch: single consumer that mutates state and redraws
- render, render_titles: pure state-to-renderable functions
- Terminal: Rich Live wrapper for the alternate screen
- KeyboardSource: cbreak-mode key reader
- Settings: environment configuration
"""

from status_panel.app import EventLoop, dispatch, run_gauge, run_progress, run_titles
from status_panel.config import Settings
from status_panel.events import Event, Fatal, KeyPress, ProgressTick
from status_panel.exceptions import ProducerError, StatusPanelError, TerminalError
from status_panel.keyboard import KeyboardSource
from status_panel.layout import format_label, render, render_titles
from status_panel.producers import InputProducer, ProgressProducer, advance
from status_panel.state import AppState, GaugeColor, StateView, clamp
from status_panel.terminal import Terminal

__all__ = [
    "AppState",
    "Event",
    "EventLoop",
    "Fatal",
    "GaugeColor",
    "InputProducer",
    "KeyPress",
    "KeyboardSource",
    "ProducerError",
    "ProgressProducer",
    "ProgressTick",
    "Settings",
    "StateView",
    "StatusPanelError",
    "Terminal",
    "TerminalError",
    "advance",
    "clamp",
    "dispatch",
    "format_label",
    "render",
    "render_titles",
    "run_gauge",
    "run_progress",
    "run_titles",
]

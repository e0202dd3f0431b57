"""
Tests for run_progress(), run_gauge() and run_titles().

Real producer threads run against a FakeTerminal and a scripted key
source, with fast tick settings.
"""

import threading

import pytest

from status_panel.app import gauge_colors, run_gauge, run_progress, run_titles
from status_panel.config import Settings
from status_panel.exceptions import ProducerError
from status_panel.producers import ProgressProducer
from status_panel.state import GaugeColor


@pytest.fixture
def settings():
    return Settings(
        tick_interval_ms=1,
        tick_step=0.01,
        key_poll_interval=0.01,
        join_timeout=2.0,
        primary_color="blue",
        alternate_color="red",
    )


class TestGaugeColors:
    """Tests for gauge_colors()."""

    def test_maps_settings(self, settings):
        """Both enum values map to configured colors."""
        assert gauge_colors(settings) == {
            GaugeColor.PRIMARY: "blue",
            GaugeColor.ALTERNATE: "red",
        }


class TestRunProgress:
    """Tests for the progress screen runner."""

    def test_runs_until_quit(self, terminal, key_source, settings):
        """Ticks advance progress; 'c' toggles; 'q' ends the run."""
        source = key_source([None] * 5 + ["c", None, "q"])

        state = run_progress(terminal, source, settings)

        assert state.running is False
        assert state.gauge_color is GaugeColor.ALTERNATE
        assert 0.0 <= state.progress <= 1.0
        assert len(terminal.draws) >= 2
        assert terminal.draws[-1].running is False

    def test_progress_only_grows(self, terminal, key_source, settings):
        """Drawn progress values never decrease."""
        source = key_source([None] * 10 + ["q"])

        run_progress(terminal, source, settings)

        values = [view.progress for view in terminal.draws]
        assert values == sorted(values)

    def test_input_failure_raises(self, terminal, key_source, settings):
        """A failing key source ends the run with ProducerError."""
        source = key_source([None, OSError("read failed")])

        with pytest.raises(ProducerError, match="read failed"):
            run_progress(terminal, source, settings)


class TestRunGauge:
    """Tests for the fixed gauge runner."""

    def test_fixed_progress(self, terminal, key_source, settings):
        """Progress stays at the seeded value; one draw per key."""
        source = key_source(["x", "c", "q"])

        state = run_gauge(terminal, source, 0.3, settings)

        assert state.progress == 0.3
        assert state.gauge_color is GaugeColor.ALTERNATE
        assert len(terminal.draws) == 3

    def test_seed_is_clamped(self, terminal, key_source, settings):
        """Out-of-range seeds are clamped."""
        state = run_gauge(terminal, key_source(["q"]), 4.0, settings)
        assert state.progress == 1.0


class TestRunTitles:
    """Tests for the titles runner."""

    def test_any_key_exits(self, terminal, key_source):
        """The first key ends the screen after one draw per poll."""
        source = key_source([None, None, "z"])

        key = run_titles(terminal, source, poll_interval=0.001)

        assert key == "z"
        assert len(terminal.draws) == 3

    def test_read_failure_raises(self, terminal, key_source):
        """A failing key source ends the screen with ProducerError."""
        source = key_source([None, OSError("stdin gone")])

        with pytest.raises(ProducerError, match="stdin gone"):
            run_titles(terminal, source, poll_interval=0.001)
        assert len(terminal.draws) == 2


class TestProducerStartFailure:
    """Tests for producer cleanup when startup fails."""

    def test_started_producers_are_stopped(
        self, terminal, key_source, settings, monkeypatch
    ):
        """If a later producer fails to start, earlier ones are stopped."""

        def fail_start(self):
            raise RuntimeError("can't start new thread")

        monkeypatch.setattr(ProgressProducer, "start", fail_start)

        with pytest.raises(RuntimeError):
            run_progress(terminal, key_source([]), settings)

        alive = [t.name for t in threading.enumerate() if t.is_alive()]
        assert "input-producer" not in alive

"""Tests for AppState, GaugeColor and clamp."""

import dataclasses

import pytest

from status_panel.state import AppState, GaugeColor, clamp


class TestClamp:
    """Tests for clamp()."""

    @pytest.mark.parametrize(
        "value, expected",
        [(-0.5, 0.0), (0.0, 0.0), (0.42, 0.42), (1.0, 1.0), (7.0, 1.0)],
    )
    def test_clamps_into_unit_range(self, value, expected):
        """Values outside [0, 1] are pulled to the nearest bound."""
        assert clamp(value) == expected

    def test_custom_bounds(self):
        """Bounds can be overridden."""
        assert clamp(15, 0, 10) == 10


class TestGaugeColor:
    """Tests for GaugeColor.toggled()."""

    def test_toggle_switches_between_two_colors(self):
        """PRIMARY and ALTERNATE swap."""
        assert GaugeColor.PRIMARY.toggled() is GaugeColor.ALTERNATE
        assert GaugeColor.ALTERNATE.toggled() is GaugeColor.PRIMARY

    def test_toggle_twice_is_identity(self):
        """Toggling twice returns the original color."""
        for color in GaugeColor:
            assert color.toggled().toggled() is color


class TestAppState:
    """Tests for AppState defaults and snapshots."""

    def test_initial_state(self):
        """New state is running, primary color, zero progress."""
        state = AppState()
        assert state.running is True
        assert state.gauge_color is GaugeColor.PRIMARY
        assert state.progress == 0.0

    def test_initial_progress_is_clamped(self):
        """Seeded progress is clamped on construction."""
        assert AppState(progress=3.0).progress == 1.0
        assert AppState(progress=-1.0).progress == 0.0

    def test_snapshot_is_frozen_copy(self):
        """Snapshot reflects current values and cannot be mutated."""
        state = AppState(progress=0.25)
        view = state.snapshot()
        state.progress = 0.75

        assert view.progress == 0.25
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.progress = 0.5

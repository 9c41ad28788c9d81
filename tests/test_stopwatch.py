"""Tests for services.stopwatch."""

from __future__ import annotations

import pytest

from services.stopwatch import (
    IDLE, MANUAL, RUNNING, STOPWATCH,
    Stopwatch, TrackerState, minutes_from_seconds, round_half_up, split_minutes,
)


# ---- rounding ----


@pytest.mark.parametrize("seconds, minutes", [
    (1, 1),
    (29, 1),
    (60, 1),
    (89, 1),
    (90, 2),      # 1.5 rounds up
    (150, 3),     # 2.5 rounds up, not to even
    (3600, 60),
])
def test_minutes_from_seconds(seconds, minutes):
    assert minutes_from_seconds(seconds) == minutes


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round(2.5) == 2


def test_split_minutes():
    assert split_minutes(90) == (1, 30)
    assert split_minutes(59) == (0, 59)
    assert split_minutes(120) == (2, 0)


# ---- Stopwatch ----


@pytest.mark.parametrize("n", [0, 1, 59, 61, 754])
def test_elapsed_matches_wait(t0, later, n):
    sw = Stopwatch()
    sw.start(t0)
    assert sw.state == RUNNING
    elapsed = sw.stop(later(n))
    assert abs(elapsed - n) <= 1
    assert sw.elapsed_seconds == elapsed


def test_tick_recomputes_from_start(t0, later):
    sw = Stopwatch()
    sw.start(t0)
    assert sw.tick(later(1)) == 1
    assert sw.tick(later(2.7)) == 2
    assert sw.tick(later(10)) == 10


def test_stop_freezes_without_reset(t0, later):
    sw = Stopwatch()
    sw.start(t0)
    sw.stop(later(42))
    assert sw.state == IDLE
    assert sw.elapsed_seconds == 42
    assert sw.tick(later(500)) == 42


def test_start_while_running_is_noop(t0, later):
    sw = Stopwatch()
    sw.start(t0)
    sw.start(later(30))
    assert sw.tick(later(60)) == 60


def test_reset():
    sw = Stopwatch(state=RUNNING, elapsed_seconds=12)
    sw.reset()
    assert sw.state == IDLE
    assert sw.elapsed_seconds == 0
    assert sw.started_at is None


# ---- TrackerState ----


def test_toggle_starts_and_pauses(t0, later):
    ts = TrackerState()
    ts.toggle(t0)
    assert ts.stopwatch.running
    ts.toggle(later(5))
    assert not ts.stopwatch.running
    assert ts.stopwatch.elapsed_seconds == 5


def test_switch_mode_stops_and_resets(t0, later):
    ts = TrackerState()
    ts.toggle(t0)
    ts.stopwatch.tick(later(30))
    ts.switch_mode()
    assert ts.mode == MANUAL
    assert not ts.stopwatch.running
    assert ts.stopwatch.elapsed_seconds == 0
    ts.switch_mode()
    assert ts.mode == STOPWATCH


def test_begin_edit_prefills_manual_fields():
    ts = TrackerState()
    entry = {"id": "e1", "goal_id": "g1", "duration_minutes": 135, "notes": "deep work", "date": "2024-03-06"}
    prefill = ts.begin_edit(entry)
    assert ts.manual
    assert ts.editing is entry
    assert prefill == {"goal_id": "g1", "notes": "deep work", "hours": 2, "minutes": 15}


def test_leaving_manual_mode_drops_edit():
    ts = TrackerState()
    ts.begin_edit({"id": "e1", "goal_id": "g1", "duration_minutes": 30})
    ts.switch_mode()
    assert ts.editing is None

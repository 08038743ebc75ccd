#!/usr/bin/env python3
"""Tests for the Magic tool state machine."""

import pytest

from magic_pencil.config.settings import PencilConfig
from magic_pencil.core.mode_resolver import Cooldown, ModeResolver
from magic_pencil.core.modes import MAGIC_CATEGORIES, Category, MagicState, ToolMode
from magic_pencil.gestures.shape_detector import GestureKind
from synthetic_paths import circle_path, rectangle_path, sawtooth_path, shifted


def draw(resolver, path):
    """Feed every sample after the first; returns the per-sample reports."""
    return [resolver.add_sample(sample) for sample in path[1:]]


def transitions(reports):
    """(time, state) for every sample where the Magic state changed."""
    changes = []
    previous = None
    for t, report in reports:
        state = report['current_magic_state']
        if previous is not None and state != previous:
            changes.append((t, state))
        previous = state
    return changes


@pytest.mark.parametrize("pressure,expected", [
    (0.9, MagicState.HIGH),
    (0.7, MagicState.HIGH),
    (0.69, MagicState.MEDIUM),
    (0.5, MagicState.MEDIUM),
    (0.0, MagicState.MEDIUM),
])
def test_pressure_first_stroke_start(pressure, expected):
    resolver = ModeResolver()
    path = circle_path()
    assert resolver.begin_stroke(ToolMode.MAGIC, pressure, path[0]) == expected


def test_circle_mid_stroke_switches_to_high():
    resolver = ModeResolver()
    path = circle_path()

    assert resolver.begin_stroke(ToolMode.MAGIC, 0.3, path[0]) == MagicState.MEDIUM
    reports = draw(resolver, path)

    assert any(r['gesture'] == GestureKind.CIRCLE for r in reports)
    assert resolver.state == MagicState.HIGH
    assert resolver.end_stroke() == Category.HIGH


@pytest.mark.parametrize("count", [16, 20, 24, 28, 32, 40])
@pytest.mark.parametrize("pressure", [0.3, 0.9])
def test_circle_wins_at_any_sampling_density(count, pressure):
    """Sparse circles also satisfy the square test; the circle must still win."""
    resolver = ModeResolver()
    path = circle_path(count=count)

    resolver.begin_stroke(ToolMode.MAGIC, pressure, path[0])
    reports = draw(resolver, path)

    assert all(r['gesture'] != GestureKind.SQUARE for r in reports)
    assert resolver.state == MagicState.HIGH
    assert resolver.end_stroke() == Category.HIGH


def test_rectangle_from_hard_press_switches_to_medium():
    resolver = ModeResolver()
    path = rectangle_path()

    assert resolver.begin_stroke(ToolMode.MAGIC, 0.9, path[0]) == MagicState.HIGH
    reports = draw(resolver, path)

    assert [r['gesture'] for r in reports if r['gesture'] != GestureKind.NONE] == [GestureKind.SQUARE]
    assert resolver.end_stroke() == Category.MEDIUM


def test_sparse_circle_after_zigzag_switches_low_to_high():
    resolver = ModeResolver()
    zigzag = sawtooth_path()

    resolver.begin_stroke(ToolMode.MAGIC, 0.3, zigzag[0])
    for sample in zigzag[1:]:
        resolver.add_sample(sample)
        if resolver.state == MagicState.LOW:
            break
    seed = resolver.window.last

    # Loop back through the point where the zig-zag was recognized
    circle = circle_path(cx=seed.x - 50, cy=seed.y, count=16, t0=seed.t + 1.0)
    draw(resolver, [seed] + circle)

    assert resolver.state == MagicState.HIGH


def test_zigzag_mid_stroke_switches_to_low():
    resolver = ModeResolver()
    path = sawtooth_path()

    resolver.begin_stroke(ToolMode.MAGIC, 0.9, path[0])
    draw(resolver, path)

    assert resolver.state == MagicState.LOW
    assert resolver.end_stroke() == Category.LOW


def test_transition_resets_window_to_current_sample():
    resolver = ModeResolver()
    path = sawtooth_path()

    resolver.begin_stroke(ToolMode.MAGIC, 0.3, path[0])
    for sample in path[1:]:
        report = resolver.add_sample(sample)
        if report['gesture'] == GestureKind.ZIGZAG:
            assert resolver.window.snapshot() == (sample,)
            break
    else:
        pytest.fail("zig-zag never detected")


def test_gesture_matching_current_state_changes_nothing():
    resolver = ModeResolver()
    path = circle_path()

    resolver.begin_stroke(ToolMode.MAGIC, 0.9, path[0])
    draw(resolver, path)

    assert resolver.state == MagicState.HIGH
    assert resolver.cooldown.started_at is None


def test_no_two_transitions_within_cooldown():
    config = PencilConfig()
    resolver = ModeResolver(config=config)

    zigzag = sawtooth_path(t0=0.0, dt=0.01)
    resolver.begin_stroke(ToolMode.MAGIC, 0.3, zigzag[0])
    reports = [(s.t, resolver.add_sample(s)) for s in zigzag[1:]]
    assert resolver.state == MagicState.LOW
    switched_at = transitions(reports)[0][0]

    # A full circle drawn while the cooldown is still running
    end = zigzag[-1]
    quick_circle = circle_path(cx=end.x - 50, cy=end.y, t0=end.t + 0.01, dt=0.005)
    assert quick_circle[-1].t < switched_at + config.GESTURE_COOLDOWN / 1000.0
    reports += [(s.t, resolver.add_sample(s)) for s in quick_circle]
    assert resolver.state == MagicState.LOW

    # The same circle drawn again once the cooldown is over
    late_circle = shifted(quick_circle, t0=2.0)
    reports += [(s.t, resolver.add_sample(s)) for s in late_circle]
    assert resolver.state == MagicState.HIGH

    changes = transitions(reports)
    assert [state for _, state in changes] == [MagicState.LOW, MagicState.HIGH]
    for (t1, _), (t2, _) in zip(changes, changes[1:]):
        assert (t2 - t1) * 1000 >= config.GESTURE_COOLDOWN


def test_cooldown_does_not_leak_into_next_stroke():
    resolver = ModeResolver()

    zigzag = sawtooth_path(t0=0.0, dt=0.01)
    resolver.begin_stroke(ToolMode.MAGIC, 0.3, zigzag[0])
    draw(resolver, zigzag)
    assert resolver.state == MagicState.LOW
    resolver.end_stroke()

    circle = circle_path(t0=zigzag[-1].t + 0.05, dt=0.005)
    resolver.begin_stroke(ToolMode.MAGIC, 0.3, circle[0])
    draw(resolver, circle)
    assert resolver.state == MagicState.HIGH


def test_state_persists_between_strokes():
    resolver = ModeResolver()
    path = sawtooth_path()

    resolver.begin_stroke(ToolMode.MAGIC, 0.3, path[0])
    draw(resolver, path)
    resolver.end_stroke()

    assert resolver.state == MagicState.LOW
    assert resolver.tool is None


def test_non_magic_tools_pass_through():
    resolver = ModeResolver()
    path = circle_path()

    resolver.begin_stroke(ToolMode.LOW, 0.9, path[0])
    reports = draw(resolver, path)

    assert all(r['gesture'] == GestureKind.NONE for r in reports)
    assert resolver.state == MagicState.IDLE
    assert resolver.end_stroke() == Category.LOW


@pytest.mark.parametrize("tool", [ToolMode.ERASER, ToolMode.PAN])
def test_non_recording_tools_have_no_category(tool):
    resolver = ModeResolver()
    resolver.begin_stroke(tool, 0.5, circle_path()[0])
    assert resolver.end_stroke() is None


def test_idle_maps_to_neutral():
    assert MAGIC_CATEGORIES[MagicState.IDLE] == Category.NEUTRAL
    assert ModeResolver().state == MagicState.IDLE


def test_window_stays_bounded_during_long_stroke():
    config = PencilConfig()
    resolver = ModeResolver(config=config)
    path = circle_path(count=400, gap=0.01)

    resolver.begin_stroke(ToolMode.MAGIC, 0.9, path[0])
    for report in draw(resolver, path):
        assert report['window_size'] <= config.WINDOW_SIZE
        assert len(resolver.window) <= config.WINDOW_SIZE


def test_reset_returns_to_idle():
    resolver = ModeResolver()
    resolver.begin_stroke(ToolMode.MAGIC, 0.9, circle_path()[0])
    resolver.reset()

    assert resolver.state == MagicState.IDLE
    assert len(resolver.window) == 0


def test_cooldown_lifecycle():
    cooldown = Cooldown(500)
    assert not cooldown.is_active(0.0)

    cooldown.start(1.0)
    assert cooldown.is_active(1.2)
    assert not cooldown.is_active(1.5)

    # Querying never changes the deadline
    assert cooldown.started_at == 1.0
    assert cooldown.is_active(1.2)

    cooldown.start(2.0)
    cooldown.cancel()
    assert not cooldown.is_active(2.1)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))

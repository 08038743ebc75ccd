#!/usr/bin/env python3
"""Tests for the evdev pen tablet reader, driven with synthetic event batches."""

import pytest

evdev = pytest.importorskip("evdev")
from evdev import ecodes  # noqa: E402

from magic_pencil import PencilListener  # noqa: E402
from magic_pencil.core.modes import Category, MagicState, ToolMode  # noqa: E402
from magic_pencil.device.device_manager import DeviceManager  # noqa: E402
from magic_pencil.device.pen_reader import PenEventReader  # noqa: E402
from magic_pencil.utils.logger import PencilLogger  # noqa: E402


class FakeEvent:
    def __init__(self, type, code, value, sec=0.0):
        self.type = type
        self.code = code
        self.value = value
        self.sec = sec

    def timestamp(self):
        return self.sec


class FakeDevice:
    name = "Fake Pen Tablet"

    def __init__(self, caps):
        self.caps = caps

    def capabilities(self):
        return self.caps


def batch(t, *events):
    """One SYN_REPORT-terminated frame at time ``t``."""
    frame = [FakeEvent(etype, code, value, t) for etype, code, value in events]
    frame.append(FakeEvent(ecodes.EV_SYN, ecodes.SYN_REPORT, 0, t))
    return frame


def touch(value):
    return ecodes.EV_KEY, ecodes.BTN_TOUCH, value


def move(x=None, y=None):
    events = []
    if x is not None:
        events.append((ecodes.EV_ABS, ecodes.ABS_X, x))
    if y is not None:
        events.append((ecodes.EV_ABS, ecodes.ABS_Y, y))
    return events


def pressure(value):
    return ecodes.EV_ABS, ecodes.ABS_PRESSURE, value


@pytest.fixture
def listener():
    return PencilListener(logger=PencilLogger(enabled=False))


@pytest.fixture
def reader(listener):
    manager = DeviceManager()
    manager.pressure_max = 1000
    return PenEventReader(listener, manager)


def test_pen_stroke_becomes_annotation(reader, listener):
    listener.active_tool = ToolMode.LOW

    reader.process_event_batch(batch(0.0, touch(1), *move(100, 200), pressure(800)))
    assert listener.is_drawing
    assert listener.stroke_tool == ToolMode.LOW

    reader.process_event_batch(batch(0.01, *move(x=110), pressure(400)))
    reader.process_event_batch(batch(0.02, touch(0)))

    (annotation,) = listener.annotations
    assert annotation.category == Category.LOW
    assert annotation.anchor == (110.0, 200.0)
    assert annotation.pressure == pytest.approx(0.4)
    assert not listener.is_drawing


def test_pen_pressure_drives_magic_state(reader, listener):
    reader.process_event_batch(batch(0.0, touch(1), *move(10, 10), pressure(900)))
    assert listener.magic_state == MagicState.HIGH
    reader.process_event_batch(batch(0.01, touch(0)))

    reader.process_event_batch(batch(1.0, touch(1), *move(10, 10), pressure(300)))
    assert listener.magic_state == MagicState.MEDIUM


def test_rubber_end_erases(reader, listener):
    listener.active_tool = ToolMode.HIGH
    reader.process_event_batch(batch(
        0.0, (ecodes.EV_KEY, ecodes.BTN_TOOL_RUBBER, 1), touch(1), *move(5, 5), pressure(500)
    ))
    assert listener.stroke_tool == ToolMode.ERASER

    reader.process_event_batch(batch(0.01, touch(0)))
    assert listener.annotations == ()


def test_moves_before_contact_are_ignored(reader, listener):
    reader.process_event_batch(batch(0.0, *move(50, 50)))
    assert not listener.is_drawing
    assert listener.annotations == ()


def test_tablet_without_pressure(listener):
    reader = PenEventReader(listener, DeviceManager())
    reader.process_event_batch(batch(0.0, touch(1), *move(1, 1), pressure(700)))
    reader.process_event_batch(batch(0.01, touch(0)))

    assert listener.annotations[0].pressure == 0.5


def test_stop_finishes_open_stroke(reader, listener):
    listener.active_tool = ToolMode.MEDIUM
    reader.process_event_batch(batch(0.0, touch(1), *move(1, 1)))
    reader.stop()

    assert [a.category for a in listener.annotations] == [Category.MEDIUM]


def test_viewport_maps_tablet_range_onto_canvas(reader, listener):
    reader.device_manager.x_max = 2047
    reader.device_manager.y_max = 1535
    reader.configure_viewport()

    listener.active_tool = ToolMode.NEUTRAL
    reader.process_event_batch(batch(0.0, touch(1), *move(1024, 768)))
    reader.process_event_batch(batch(0.01, touch(0)))

    assert listener.annotations[0].anchor == pytest.approx((512.0, 384.0))


def test_device_manager_adopts_pen_tablet():
    caps = {
        ecodes.EV_KEY: [ecodes.BTN_TOUCH, ecodes.BTN_TOOL_PEN],
        ecodes.EV_ABS: [
            (ecodes.ABS_X, evdev.AbsInfo(0, 0, 4095, 0, 0, 0)),
            (ecodes.ABS_Y, evdev.AbsInfo(0, 0, 2047, 0, 0, 0)),
            (ecodes.ABS_PRESSURE, evdev.AbsInfo(0, 0, 2047, 0, 0, 0)),
        ],
    }
    manager = DeviceManager()
    device = FakeDevice(caps)

    assert manager.configure(device)
    info = manager.get_device_info()
    assert info['device'] is device
    assert (info['width'], info['height'], info['pressure_max']) == (4096, 2048, 2047)


def test_device_manager_accepts_tablet_without_pressure_axis():
    caps = {
        ecodes.EV_KEY: [ecodes.BTN_TOUCH, ecodes.BTN_TOOL_PEN],
        ecodes.EV_ABS: [
            (ecodes.ABS_X, evdev.AbsInfo(0, 0, 1023, 0, 0, 0)),
            (ecodes.ABS_Y, evdev.AbsInfo(0, 0, 767, 0, 0, 0)),
        ],
    }
    manager = DeviceManager()

    assert manager.configure(FakeDevice(caps))
    assert manager.get_device_info()['pressure_max'] == 0


def test_device_manager_rejects_mouse():
    caps = {ecodes.EV_KEY: [ecodes.BTN_LEFT], ecodes.EV_REL: [ecodes.REL_X, ecodes.REL_Y]}
    manager = DeviceManager()
    assert not manager.configure(FakeDevice(caps))
    assert manager.device is None


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))

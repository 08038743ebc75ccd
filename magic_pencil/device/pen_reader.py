"""
Reads pen tablet events and replays them as stroke events on a PencilListener.
"""

import logging
import threading
from typing import Optional

from evdev import ecodes

from ..core.listener import PencilListener
from .device_manager import DeviceManager

logger = logging.getLogger(__name__)

# Twist reported for the eraser end of a stylus
RUBBER_TWIST = 180


class PenEventReader:
    """Translates evdev pen events into stroke start / move / end calls."""

    def __init__(self, listener: PencilListener, device_manager: Optional[DeviceManager] = None):
        self.listener = listener
        self.device_manager = device_manager or DeviceManager()

        self.running = False
        self.thread = None

        # Pen state accumulated between SYN_REPORTs
        self.x = 0
        self.y = 0
        self.pressure = None
        self.rubber = False
        self.touching = False
        self.pending_down = False
        self.pending_up = False
        self.moved = False

    def start(self) -> bool:
        """Find a pen device and start reading it in a background thread."""
        device = self.device_manager.device or self.device_manager.find_device()
        if not device:
            return False

        self.configure_viewport()
        self.running = True
        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop reading; a stroke still in progress is finished."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1)
        self.listener.stroke_cancelled()

    def configure_viewport(self):
        """Map the tablet's coordinate range onto the listener's canvas."""
        info = self.device_manager.get_device_info()
        self.listener.stream.set_viewport(info['x_min'], info['y_min'], info['width'], info['height'])

    def _event_loop(self):
        """Main event processing loop."""
        try:
            event_batch = []
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break

                event_batch.append(event)

                if event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
                    self.process_event_batch(event_batch)
                    event_batch = []

        except OSError as e:
            logger.error(f"Error in event loop: {e}")
        finally:
            self.running = False

    def process_event_batch(self, event_batch):
        """Apply one SYN_REPORT-terminated batch of events to the listener."""
        timestamp = None
        for ev in event_batch:
            timestamp = ev.timestamp()
            if ev.type == ecodes.EV_ABS:
                self._handle_abs_event(ev)
            elif ev.type == ecodes.EV_KEY:
                self._handle_key_event(ev)

        with self.listener.state_lock:
            self._dispatch(timestamp)

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate and pressure events."""
        if ev.code == ecodes.ABS_X:
            self.x = ev.value
            self.moved = True
        elif ev.code == ecodes.ABS_Y:
            self.y = ev.value
            self.moved = True
        elif ev.code == ecodes.ABS_PRESSURE:
            pressure_max = self.device_manager.pressure_max
            self.pressure = ev.value / pressure_max if pressure_max > 0 else None

    def _handle_key_event(self, ev):
        """Handle contact and tool buttons."""
        if ev.code == ecodes.BTN_TOUCH:
            if ev.value:
                self.pending_down = True
            else:
                self.pending_up = True
        elif ev.code == ecodes.BTN_TOOL_RUBBER:
            self.rubber = bool(ev.value)

    def _dispatch(self, timestamp: Optional[float]):
        position = (self.x, self.y)

        if self.pending_down and not self.touching:
            self.touching = True
            self.listener.stroke_start(
                position, 'pen', self.pressure,
                twist=RUBBER_TWIST if self.rubber else 0, t=timestamp
            )
        elif self.touching and self.moved:
            self.listener.stroke_move(position, self.pressure, t=timestamp)

        if self.pending_up and self.touching:
            self.touching = False
            self.listener.stroke_end()

        self.pending_down = False
        self.pending_up = False
        self.moved = False

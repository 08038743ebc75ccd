"""
Device management for pen tablet discovery and initialization.
"""

import evdev
from evdev import ecodes
import logging

logger = logging.getLogger(__name__)


class DeviceManager:
    """Manages pen tablet device discovery and initialization."""

    def __init__(self):
        self.device = None
        self.x_min = 0
        self.x_max = 1023  # Default
        self.y_min = 0
        self.y_max = 767   # Default
        self.pressure_max = 0  # 0 means the device reports no pressure

    def find_device(self):
        """Find and configure the first device that looks like a pen tablet."""
        devices = [evdev.InputDevice(path) for path in evdev.list_devices()]

        for device in devices:
            if self.configure(device):
                return device

        logger.error("No pen tablet device found")
        return None

    def configure(self, device) -> bool:
        """Adopt ``device`` if it reports absolute X/Y and a pen tool."""
        caps = device.capabilities()
        if ecodes.EV_ABS not in caps or ecodes.EV_KEY not in caps:
            return False

        if ecodes.BTN_TOOL_PEN not in caps.get(ecodes.EV_KEY, []):
            return False

        abs_info = {code: info for code, info in caps.get(ecodes.EV_ABS, [])}
        if ecodes.ABS_X not in abs_info or ecodes.ABS_Y not in abs_info:
            return False

        self.x_min = abs_info[ecodes.ABS_X].min
        self.x_max = abs_info[ecodes.ABS_X].max
        self.y_min = abs_info[ecodes.ABS_Y].min
        self.y_max = abs_info[ecodes.ABS_Y].max
        # Pressure axis is optional, pressure_max stays 0 without it
        if ecodes.ABS_PRESSURE in abs_info:
            self.pressure_max = abs_info[ecodes.ABS_PRESSURE].max

        self.device = device
        logger.info(f"Found pen tablet: {device.name}")
        logger.info(f"Tablet range: {self.x_max - self.x_min + 1}x{self.y_max - self.y_min + 1}, "
                    f"pressure levels: {self.pressure_max}")
        return True

    def get_device_info(self):
        """Get device and coordinate range information."""
        return {
            'device': self.device,
            'x_min': self.x_min,
            'y_min': self.y_min,
            'width': self.x_max - self.x_min + 1,
            'height': self.y_max - self.y_min + 1,
            'pressure_max': self.pressure_max,
        }

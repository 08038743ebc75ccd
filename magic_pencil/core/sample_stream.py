"""
Conversion of raw pointer positions into canvas-space samples.
"""

import time
from typing import Callable, Optional, Tuple

from ..config.settings import PencilConfig
from ..utils.gesture_utils import Sample


class SampleStream:
    """Maps display coordinates onto the annotation canvas and stamps samples."""

    def __init__(self, canvas_width: int = PencilConfig.CANVAS_WIDTH,
                 canvas_height: int = PencilConfig.CANVAS_HEIGHT,
                 clock: Callable[[], float] = time.time):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.clock = clock

        # Display rectangle the canvas is shown in: left, top, width, height
        self.viewport = (0.0, 0.0, float(canvas_width), float(canvas_height))

    def set_viewport(self, left: float, top: float, width: float, height: float):
        """Set the on-screen rectangle the canvas is displayed in."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must have a positive size, got {width}x{height}")
        self.viewport = (float(left), float(top), float(width), float(height))

    def to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        """Convert a display position into canvas coordinates."""
        left, top, width, height = self.viewport
        scale_x = self.canvas_width / width
        scale_y = self.canvas_height / height
        return (x - left) * scale_x, (y - top) * scale_y

    def sample(self, position: Tuple[float, float], t: Optional[float] = None) -> Sample:
        """Build the canvas-space sample for a display position."""
        cx, cy = self.to_canvas(*position)
        return Sample(cx, cy, self.clock() if t is None else t)

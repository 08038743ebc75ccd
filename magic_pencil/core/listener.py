"""
Main pencil listener that coordinates stroke tracking, gesture resolution and annotation recording.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..config.settings import PencilConfig
from ..gestures.shape_detector import GestureClassifier
from ..utils.logger import PencilLogger
from .annotations import Annotation, AnnotationRecorder, AnnotationsCallback
from .mode_resolver import ModeResolver
from .modes import MagicState, ToolMode
from .sample_stream import SampleStream
from .stroke_window import StrokeWindow

logger = logging.getLogger(__name__)

DebugCallback = Callable[[Dict[str, Any]], None]


class PencilListener:
    """
    Stroke lifecycle controller.

    Receives pointer events one at a time (start, move, end or cancel), feeds
    the samples through the stroke window and the Magic mode resolver, and
    records one annotation per finished stroke.
    """

    def __init__(self, on_annotations_change: Optional[AnnotationsCallback] = None,
                 on_debug: Optional[DebugCallback] = None,
                 config: Optional[PencilConfig] = None,
                 logger: Optional[PencilLogger] = None,
                 clock: Callable[[], float] = time.time):
        self.config = config or PencilConfig()
        self.logger = logger or PencilLogger()
        self.on_debug = on_debug

        self.stream = SampleStream(self.config.CANVAS_WIDTH, self.config.CANVAS_HEIGHT, clock)
        self.window = StrokeWindow(self.config.WINDOW_SIZE)
        self.resolver = ModeResolver(
            self.window, GestureClassifier(self.config), self.config, self.logger
        )
        self.recorder = AnnotationRecorder(on_annotations_change, self.logger, clock)

        # State management
        self._active_tool = ToolMode.MAGIC
        self.is_drawing = False
        self.stroke_tool = None
        self.last_position = None
        self.current_pressure = self.config.DEFAULT_PRESSURE

        # Device readers deliver events from their own thread
        self.state_lock = threading.RLock()

    @property
    def active_tool(self) -> ToolMode:
        return self._active_tool

    @active_tool.setter
    def active_tool(self, tool: Union[ToolMode, str]):
        with self.state_lock:
            self._active_tool = ToolMode(tool)

    @property
    def magic_state(self) -> MagicState:
        return self.resolver.state

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return self.recorder.annotations.snapshot()

    def stroke_start(self, position: Tuple[float, float], pointer_kind: str = 'mouse',
                     pressure: Optional[float] = None, twist: Optional[float] = None,
                     t: Optional[float] = None) -> bool:
        """
        Handle pointer-down.

        Args:
            position: Display position of the pointer
            pointer_kind: 'mouse', 'touch' or 'pen'
            pressure: Reported pressure in [0, 1], None when the device has none
            twist: Stylus twist in degrees; a flipped stylus erases for this stroke
            t: Capture time in seconds, defaults to now

        Returns:
            True when a stroke was started
        """
        with self.state_lock:
            if self.is_drawing:
                # A missed pointer-up must not leave the previous stroke dangling
                logger.warning("Stroke start while drawing, finishing previous stroke")
                self._finish_stroke()

            tool = self._active_tool
            if tool == ToolMode.PAN:
                return False

            if (pointer_kind == 'pen' and twist is not None
                    and abs(twist) > self.config.ERASER_TWIST_THRESHOLD):
                tool = ToolMode.ERASER

            pressure = self._normalize_pressure(pressure)
            sample = self.stream.sample(position, t)

            self.is_drawing = True
            self.stroke_tool = tool
            self.current_pressure = pressure
            self.last_position = (sample.x, sample.y)

            state = self.resolver.begin_stroke(tool, pressure, sample)
            self.logger.log_stroke_start(
                tool.value, pressure, self.last_position,
                state.value if tool == ToolMode.MAGIC else None
            )
            self._publish(self.resolver.report())
            return True

    def stroke_move(self, position: Tuple[float, float], pressure: Optional[float] = None,
                    t: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """Handle pointer-move; returns the per-sample diagnostic report."""
        with self.state_lock:
            if not self.is_drawing:
                return None

            sample = self.stream.sample(position, t)
            self.current_pressure = self._normalize_pressure(pressure)
            self.last_position = (sample.x, sample.y)

            report = self.resolver.add_sample(sample)
            self._publish(report)
            return report

    def stroke_end(self) -> Optional[Annotation]:
        """Handle pointer-up; returns the recorded annotation, if any."""
        with self.state_lock:
            if not self.is_drawing:
                return None
            return self._finish_stroke()

    def stroke_cancelled(self) -> Optional[Annotation]:
        """Handle pointer-leave exactly like pointer-up."""
        return self.stroke_end()

    def clear_all(self):
        """Remove every annotation."""
        with self.state_lock:
            self.recorder.clear_all()

    def _finish_stroke(self) -> Optional[Annotation]:
        category = self.resolver.end_stroke()
        annotation = self.recorder.record_stroke(
            self.stroke_tool, category, self.current_pressure, self.last_position
        )

        self.is_drawing = False
        self.stroke_tool = None
        self.current_pressure = self.config.DEFAULT_PRESSURE
        return annotation

    def _normalize_pressure(self, pressure: Optional[float]) -> float:
        # Devices without pressure report nothing or zero
        if not pressure:
            return self.config.DEFAULT_PRESSURE
        return max(0.0, min(1.0, float(pressure)))

    def _publish(self, report: Dict[str, Any]):
        if self.on_debug:
            self.on_debug(report)

"""
Magic tool state machine.

Turns the stroke-start pressure and the gestures recognized while drawing into
the category the stroke will be recorded with. The Magic state survives
between strokes; only this resolver changes it.

Stroke start uses the pressure-first policy: a hard press starts the stroke
as High, anything lighter as Medium. A recognized gesture switches the state
immediately, clears the stroke window and opens a cooldown during which
further gesture results are ignored.
"""

from typing import Any, Dict, Optional

from ..config.settings import PencilConfig
from ..gestures.shape_detector import GestureClassifier, GestureKind
from ..utils.gesture_utils import Sample
from ..utils.logger import PencilLogger
from .modes import MAGIC_CATEGORIES, TOOL_CATEGORIES, Category, MagicState, ToolMode
from .stroke_window import StrokeWindow

GESTURE_STATES = {
    GestureKind.CIRCLE: MagicState.HIGH,
    GestureKind.SQUARE: MagicState.MEDIUM,
    GestureKind.ZIGZAG: MagicState.LOW,
}


class Cooldown:
    """Suppression interval measured on the stroke's sample clock."""

    def __init__(self, duration_ms: float):
        self.duration_ms = duration_ms
        self.started_at = None

    def start(self, now: float):
        self.started_at = now

    def cancel(self):
        self.started_at = None

    def is_active(self, now: float) -> bool:
        if self.started_at is None:
            return False
        return (now - self.started_at) * 1000 < self.duration_ms


class ModeResolver:
    """Resolves the category of the stroke in progress."""

    def __init__(self, window: Optional[StrokeWindow] = None,
                 classifier: Optional[GestureClassifier] = None,
                 config: Optional[PencilConfig] = None,
                 logger: Optional[PencilLogger] = None):
        self.config = config or PencilConfig()
        self.window = window if window is not None else StrokeWindow(self.config.WINDOW_SIZE)
        self.classifier = classifier or GestureClassifier(self.config)
        self.logger = logger
        self.cooldown = Cooldown(self.config.GESTURE_COOLDOWN)

        self._state = MagicState.IDLE
        self._tool = None

    @property
    def state(self) -> MagicState:
        return self._state

    @property
    def tool(self) -> Optional[ToolMode]:
        """Effective tool of the stroke in progress, None between strokes."""
        return self._tool

    def reset(self):
        """Return to the initial Idle state and forget any stroke in progress."""
        self._state = MagicState.IDLE
        self._tool = None
        self.window.reset()
        self.cooldown.cancel()

    def begin_stroke(self, tool: ToolMode, pressure: float, sample: Sample) -> MagicState:
        """
        Start a stroke with its first sample.

        Args:
            tool: Effective tool for this stroke
            pressure: Pressure reported at pointer-down
            sample: First sample of the stroke

        Returns:
            The Magic state the stroke starts with
        """
        self.cooldown.cancel()
        self.window.reset()
        self.window.append(sample)
        self._tool = tool

        if tool == ToolMode.MAGIC:
            if pressure >= self.config.HIGH_PRESSURE_THRESHOLD:
                self._state = MagicState.HIGH
            else:
                self._state = MagicState.MEDIUM

        return self._state

    def add_sample(self, sample: Sample) -> Dict[str, Any]:
        """
        Feed one sample of the stroke in progress and apply any gesture transition.

        Returns:
            Per-sample report: window size, raw detector results, the gesture
            chosen by precedence (if any) and the Magic state after this sample.
        """
        self.window.append(sample)
        if self._tool != ToolMode.MAGIC:
            return self.report()

        snapshot = self.window.snapshot()
        detections = self.classifier.inspect(snapshot)
        gesture = GestureKind.NONE

        if not self.cooldown.is_active(sample.t):
            gesture = self.classifier.resolve(detections)
            if gesture != GestureKind.NONE:
                self._apply_gesture(gesture, sample)

        return self.report(len(snapshot), detections, gesture)

    def report(self, window_size: Optional[int] = None,
               detections: Optional[Dict[str, bool]] = None,
               gesture: GestureKind = GestureKind.NONE) -> Dict[str, Any]:
        """Diagnostic view of the resolver for one sample."""
        detections = detections or {}
        return {
            'window_size': len(self.window) if window_size is None else window_size,
            'circle_detected': detections.get('circle', False),
            'square_detected': detections.get('square', False),
            'zigzag_detected': detections.get('zigzag', False),
            'gesture': gesture,
            'current_magic_state': self._state,
        }

    def end_stroke(self) -> Optional[Category]:
        """
        Finish the stroke in progress.

        Returns:
            Category to record, None for tools that never record
        """
        self.cooldown.cancel()
        tool = self._tool
        self._tool = None

        if tool == ToolMode.MAGIC:
            return MAGIC_CATEGORIES[self._state]
        return TOOL_CATEGORIES.get(tool)

    def _apply_gesture(self, gesture: GestureKind, sample: Sample):
        target = GESTURE_STATES[gesture]
        if target == self._state:
            return

        previous = self._state
        self._state = target

        # Start over from the current sample so the same shape cannot fire again
        self.window.reset()
        self.window.append(sample)
        self.cooldown.start(sample.t)

        if self.logger:
            self.logger.log_transition(gesture.value, previous.value, target.value)

"""
Logging utilities for strokes, gesture transitions and annotations.
"""

import datetime
import logging
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

GESTURE_ICONS = {
    'circle': '⭕',
    'square': '⬜',
    'zigzag': '〰️',
}

CATEGORY_ICONS = {
    'high': '🔴',
    'medium': '🟠',
    'low': '🔵',
    'neutral': '🟡',
}


class PencilLogger:
    """Handles logging of strokes, gesture transitions and annotations."""

    def __init__(self, debug_file: Optional[str] = None, enabled: bool = True):
        self.enabled = enabled
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w', encoding='utf-8')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    def _timestamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def _emit(self, line: str, details: Optional[Dict[str, Any]] = None):
        timestamp = self._timestamp()
        if self.enabled:
            print(f"[{timestamp}] {line}")

        if self.debug_file:
            try:
                self.debug_file.write(f"[{timestamp}] {line} {details or ''}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not write debug file: {e}")

    def log_stroke_start(self, tool: str, pressure: float, position: Tuple[float, float],
                         magic_state: Optional[str] = None):
        """Log the beginning of a stroke."""
        x, y = position
        line = f"✏️ STROKE START: {tool} pressure {pressure:.2f} at ({int(x)}, {int(y)})"
        if magic_state:
            line += f" [magic: {magic_state}]"
        self._emit(line)

    def log_transition(self, gesture: str, previous: str, current: str):
        """Log a gesture-driven Magic state change."""
        icon = GESTURE_ICONS.get(gesture, '✨')
        self._emit(
            f"{icon} {gesture.upper()} GESTURE: {previous} → {current}",
            {'gesture': gesture, 'from': previous, 'to': current},
        )

    def log_annotation(self, annotation, total: int):
        """Log a recorded annotation."""
        category = annotation.category.value
        icon = CATEGORY_ICONS.get(category, '•')
        x, y = annotation.anchor
        self._emit(
            f"{icon} ANNOTATION {category.upper()}: pressure {annotation.pressure:.2f} "
            f"at ({int(x)}, {int(y)}) [{total} total]",
            {'id': annotation.id},
        )

    def log_clear(self, removed: int):
        """Log clearing of all annotations."""
        self._emit(f"🧹 ANNOTATIONS CLEARED: {removed} removed")

    def log_counts(self, counts: Dict[str, int]):
        """Log the per-category annotation tally."""
        summary = ", ".join(f"{CATEGORY_ICONS.get(k, '•')} {k}: {v}" for k, v in counts.items())
        self._emit(f"📊 {summary}")

    def log_skipped(self, tool: str):
        """Log a stroke that produced no annotation."""
        self._emit(f"🚫 NO ANNOTATION: {tool} stroke")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None

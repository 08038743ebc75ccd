"""
Shape gesture detection for Magic Pencil strokes.

Three independent detectors (circle, square, zig-zag) look at a snapshot of the
stroke window. Each one fails closed: too few samples, a degenerate bounding
box or a short path simply means "not detected". When several detectors fire
on the same window the zig-zag wins over the circle, and the circle over the
square.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config.settings import PencilConfig
from ..utils.gesture_utils import GeometryUtils, PathUtils, Sample


class GestureKind(str, Enum):
    """Recognized shape gestures."""

    NONE = "none"
    CIRCLE = "circle"
    SQUARE = "square"
    ZIGZAG = "zigzag"


class GestureClassifier:
    """Classifies the current stroke window as a circle, square or zig-zag."""

    def __init__(self, config: Optional[PencilConfig] = None):
        self.config = config or PencilConfig()

    def classify(self, samples: Sequence[Sample]) -> GestureKind:
        """
        Classify a window of samples.

        Args:
            samples: Stroke samples in capture order

        Returns:
            The winning GestureKind, GestureKind.NONE when nothing matched
        """
        if self.detect_zigzag(samples):
            return GestureKind.ZIGZAG
        if self.detect_circle(samples):
            return GestureKind.CIRCLE
        if self.detect_square(samples):
            return GestureKind.SQUARE
        return GestureKind.NONE

    @staticmethod
    def resolve(detections: Dict[str, bool]) -> GestureKind:
        """Apply the zig-zag > circle > square precedence to raw detector results."""
        for kind in (GestureKind.ZIGZAG, GestureKind.CIRCLE, GestureKind.SQUARE):
            if detections.get(kind.value):
                return kind
        return GestureKind.NONE

    def inspect(self, samples: Sequence[Sample]) -> Dict[str, Any]:
        """Run all three detectors and report every raw result."""
        return {
            'circle': self.detect_circle(samples),
            'square': self.detect_square(samples),
            'zigzag': self.detect_zigzag(samples),
        }

    def detect_circle(self, samples: Sequence[Sample]) -> bool:
        """Closed, round stroke: closure plus low radius variance around the centroid."""
        cfg = self.config
        if len(samples) < cfg.CIRCLE_MIN_SAMPLES:
            return False

        box = self._check_box(samples, cfg.CIRCLE_MIN_SIZE, cfg.CIRCLE_MAX_ASPECT_RATIO)
        if box is None:
            return False
        width, height = box

        if PathUtils.closure_distance(samples) > max(width, height) * cfg.CIRCLE_CLOSURE_RATIO:
            return False

        center_x, center_y = GeometryUtils.calculate_centroid(samples)
        radii = [math.hypot(p.x - center_x, p.y - center_y) for p in samples]
        avg_radius = sum(radii) / len(radii)
        if avg_radius <= cfg.CIRCLE_MIN_RADIUS:
            return False

        radius_variance = sum(abs(r - avg_radius) for r in radii) / len(radii)
        if radius_variance >= avg_radius * cfg.CIRCLE_RADIUS_VARIANCE_RATIO:
            return False

        return self._curvature_consistency(samples) >= cfg.CIRCLE_MIN_CURVATURE_FRACTION

    def detect_square(self, samples: Sequence[Sample]) -> bool:
        """Closed stroke with a handful of sharp corners."""
        cfg = self.config
        if len(samples) < cfg.SQUARE_MIN_SAMPLES:
            return False

        box = self._check_box(samples, cfg.SQUARE_MIN_SIZE, cfg.SQUARE_MAX_ASPECT_RATIO)
        if box is None:
            return False
        width, height = box

        if PathUtils.closure_distance(samples) > max(width, height) * cfg.SQUARE_CLOSURE_RATIO:
            return False

        corners = self._find_turns(
            samples,
            stride=cfg.SQUARE_CHORD_STRIDE,
            min_chord=cfg.SQUARE_MIN_CHORD,
            min_angle=cfg.SQUARE_CORNER_ANGLE,
            max_angle=math.pi,
            spacing=cfg.SQUARE_CORNER_SPACING,
        )
        return cfg.SQUARE_MIN_CORNERS <= len(corners) <= cfg.SQUARE_MAX_CORNERS

    def detect_zigzag(self, samples: Sequence[Sample]) -> bool:
        """Open stroke whose direction changes alternate left and right."""
        cfg = self.config
        if len(samples) < cfg.ZIGZAG_MIN_SAMPLES:
            return False

        # Reject trivial jitter
        if GeometryUtils.calculate_path_length(samples) < cfg.ZIGZAG_MIN_PATH_LENGTH:
            return False

        changes = self._find_turns(
            samples,
            stride=cfg.ZIGZAG_CHORD_STRIDE,
            min_chord=cfg.ZIGZAG_MIN_CHORD,
            min_angle=cfg.ZIGZAG_MIN_ANGLE,
            max_angle=cfg.ZIGZAG_MAX_ANGLE,
            spacing=cfg.ZIGZAG_CHANGE_SPACING,
        )
        if not cfg.ZIGZAG_MIN_CHANGES <= len(changes) <= cfg.ZIGZAG_MAX_CHANGES:
            return False

        alternating_score = sum(
            1 for (_, sign1), (_, sign2) in zip(changes, changes[1:])
            if sign1 * sign2 < 0
        )
        pairs = len(changes) - 1
        return (alternating_score >= 1 and
                alternating_score >= pairs * cfg.ZIGZAG_MIN_ALTERNATION_RATIO)

    def _check_box(self, samples: Sequence[Sample], min_size: float,
                   max_aspect: float) -> Optional[Tuple[float, float]]:
        """Return (width, height) when the bounding box passes the size and aspect gates."""
        min_x, max_x, min_y, max_y = PathUtils.get_path_bounds(samples)
        width = max_x - min_x
        height = max_y - min_y

        if width < min_size or height < min_size:
            return None
        if max(width, height) / min(width, height) > max_aspect:
            return None
        return width, height

    def _find_turns(self, samples: Sequence[Sample], stride: int, min_chord: float,
                    min_angle: float, max_angle: float, spacing: int) -> List[Tuple[int, int]]:
        """
        Scan interior samples for chord direction changes.

        The chord into sample i starts ``stride`` samples earlier and the chord
        out of it ends ``stride`` samples later. Returns (index, turn sign) for
        every counted change, keeping counted changes at least ``spacing``
        samples apart so one physical turn is counted once.
        """
        turns = []
        for i in range(stride, len(samples) - stride):
            angle, len1, len2, sign = GeometryUtils.chord_turn(
                samples[i - stride], samples[i], samples[i + stride]
            )

            # Skip if segments are too short to carry a direction
            if len1 < min_chord or len2 < min_chord:
                continue

            if min_angle < angle <= max_angle:
                too_close = any(abs(i - pos) < spacing for pos, _ in turns)
                if not too_close:
                    turns.append((i, sign))
        return turns

    def _curvature_consistency(self, samples: Sequence[Sample]) -> float:
        """Fraction of consecutive triplets turning by a moderate angle."""
        cfg = self.config
        consistent = 0
        measured = 0
        for i in range(1, len(samples) - 1):
            angle, len1, len2, _ = GeometryUtils.chord_turn(samples[i - 1], samples[i], samples[i + 1])
            if len1 == 0 or len2 == 0:
                continue
            measured += 1
            if cfg.CIRCLE_MIN_TURN <= angle <= cfg.CIRCLE_MAX_TURN:
                consistent += 1

        if measured == 0:
            return 0.0
        return consistent / measured


# Convenience function for simple usage
def classify_gesture(samples: Sequence[Sample]) -> GestureKind:
    """
    Simple interface to classify a window of samples.

    Args:
        samples: Stroke samples in capture order

    Returns:
        The recognized GestureKind
    """
    return GestureClassifier().classify(samples)

"""
Shared geometry utilities for stroke samples.

This module provides the point type and the small geometric helpers used by
the shape detectors and the stroke controller.
"""

import math
import time
from dataclasses import dataclass, field
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Sample:
    """A single stroke sample: canvas position plus capture time in seconds."""

    x: float
    y: float
    t: float = field(default_factory=time.time)

    def __repr__(self):
        return f"Sample({self.x:.1f}, {self.y:.1f})"

    def distance_to(self, other: 'Sample') -> float:
        """Calculate Euclidean distance to another sample."""
        return math.hypot(self.x - other.x, self.y - other.y)


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_centroid(points: Sequence[Sample]) -> Tuple[float, float]:
        """Calculate the centroid of a list of points."""
        if not points:
            return 0.0, 0.0
        sum_x = sum(p.x for p in points)
        sum_y = sum(p.y for p in points)
        return sum_x / len(points), sum_y / len(points)

    @staticmethod
    def calculate_distance(p1: Sample, p2: Sample) -> float:
        """Calculate Euclidean distance between two points."""
        return math.hypot(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def calculate_path_length(points: Sequence[Sample]) -> float:
        """Calculate total path length."""
        if len(points) < 2:
            return 0.0

        length = 0.0
        for i in range(1, len(points)):
            length += GeometryUtils.calculate_distance(points[i-1], points[i])
        return length

    @staticmethod
    def angle_difference(angle1: float, angle2: float) -> float:
        """Absolute difference between two directions, folded into [0, pi]."""
        diff = abs(angle2 - angle1) % (2 * math.pi)
        if diff > math.pi:
            diff = 2 * math.pi - diff
        return diff

    @staticmethod
    def chord_turn(before: Sample, at: Sample, after: Sample) -> Tuple[float, float, float, float]:
        """
        Compare the incoming chord (before -> at) with the outgoing chord (at -> after).

        Returns:
            (turn angle in [0, pi], incoming length, outgoing length, turn sign)
            where the sign is +1 for a counter-clockwise turn, -1 for clockwise
            and 0 for collinear chords.
        """
        dx1 = at.x - before.x
        dy1 = at.y - before.y
        dx2 = after.x - at.x
        dy2 = after.y - at.y

        len1 = math.hypot(dx1, dy1)
        len2 = math.hypot(dx2, dy2)

        turn = GeometryUtils.angle_difference(math.atan2(dy1, dx1), math.atan2(dy2, dx2))
        cross = dx1 * dy2 - dy1 * dx2
        sign = 1 if cross > 0 else -1 if cross < 0 else 0
        return turn, len1, len2, sign


class PathUtils:
    """Utility class for path processing."""

    @staticmethod
    def get_path_bounds(points: Sequence[Sample]) -> Tuple[float, float, float, float]:
        """Get bounding box of a path."""
        if not points:
            return 0.0, 0.0, 0.0, 0.0

        min_x = min(p.x for p in points)
        max_x = max(p.x for p in points)
        min_y = min(p.y for p in points)
        max_y = max(p.y for p in points)

        return min_x, max_x, min_y, max_y

    @staticmethod
    def closure_distance(points: Sequence[Sample]) -> float:
        """Distance between the first and the last point of a path."""
        if len(points) < 2:
            return 0.0
        return GeometryUtils.calculate_distance(points[0], points[-1])

    @staticmethod
    def calculate_path_duration(points: Sequence[Sample]) -> float:
        """Calculate total duration of a path in seconds."""
        if len(points) < 2:
            return 0.0
        return points[-1].t - points[0].t

"""Synthetic stroke paths shared by the test modules."""

import math
from typing import List, Sequence, Tuple

from magic_pencil.utils.gesture_utils import Sample


def circle_path(cx: float = 50.0, cy: float = 50.0, radius: float = 50.0, count: int = 40,
                gap: float = 0.09, t0: float = 0.0, dt: float = 0.01) -> List[Sample]:
    """Evenly spaced points on a circle, stopping ``gap`` radians short of closing."""
    step = (2 * math.pi - gap) / (count - 1)
    return [
        Sample(cx + radius * math.cos(i * step), cy + radius * math.sin(i * step), t0 + i * dt)
        for i in range(count)
    ]


def polyline(vertices: Sequence[Tuple[float, float]], spacing: float,
             t0: float = 0.0, dt: float = 0.01) -> List[Sample]:
    """Walk straight edges between vertices with roughly ``spacing`` between points."""
    points = [vertices[0]]
    for (x1, y1), (x2, y2) in zip(vertices, vertices[1:]):
        steps = max(1, round(math.hypot(x2 - x1, y2 - y1) / spacing))
        for s in range(1, steps + 1):
            points.append((x1 + (x2 - x1) * s / steps, y1 + (y2 - y1) * s / steps))
    return [Sample(x, y, t0 + i * dt) for i, (x, y) in enumerate(points)]


def rectangle_path(width: float = 120.0, height: float = 80.0, spacing: float = 10.0,
                   t0: float = 0.0, dt: float = 0.01) -> List[Sample]:
    """Closed rectangle traced clockwise from the top-left corner, last step left open."""
    corners = [(0, 0), (width, 0), (width, height), (0, height), (0, 0)]
    return polyline(corners, spacing, t0, dt)[:-1]


def sawtooth_path(teeth: int = 4, run: float = 30.0, rise: float = 40.0,
                  t0: float = 0.0, dt: float = 0.01) -> List[Sample]:
    """Alternating up and down segments of equal amplitude, six points per segment."""
    vertices = [(i * run, rise if i % 2 else 0.0) for i in range(teeth + 1)]
    segment = math.hypot(run, rise)
    return polyline(vertices, segment / 6, t0, dt)


def line_path(count: int, step: float = 10.0, angle: float = 0.0,
              t0: float = 0.0, dt: float = 0.01) -> List[Sample]:
    """Straight line of ``count`` points."""
    dx = step * math.cos(angle)
    dy = step * math.sin(angle)
    return [Sample(i * dx, i * dy, t0 + i * dt) for i in range(count)]


def shifted(samples: Sequence[Sample], dx: float = 0.0, dy: float = 0.0,
            t0: float = None) -> List[Sample]:
    """Translate a path in space and optionally restart its clock at ``t0``."""
    offset = 0.0 if t0 is None or not samples else t0 - samples[0].t
    return [Sample(s.x + dx, s.y + dy, s.t + offset) for s in samples]

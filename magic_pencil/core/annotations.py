"""
Annotation records and the recorder that collects them.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Tuple

from ..utils.logger import PencilLogger
from .modes import NON_RECORDING_TOOLS, Category, ToolMode


@dataclass(frozen=True)
class Annotation:
    """One completed stroke tagged with a relevance category."""

    id: str
    category: Category
    pressure: float
    created_at: float
    anchor: Tuple[float, float]


class AnnotationSet:
    """Append-only ordered collection of annotations; only ever cleared as a whole."""

    def __init__(self):
        self._items = []

    def append(self, annotation: Annotation):
        self._items.append(annotation)

    def clear(self):
        self._items = []

    def snapshot(self) -> Tuple[Annotation, ...]:
        return tuple(self._items)

    def count(self, category: Category) -> int:
        return sum(1 for a in self._items if a.category == category)

    def counts(self) -> Dict[str, int]:
        """Annotation tally per category, in category order."""
        return {c.value: self.count(c) for c in Category}

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self.snapshot())


AnnotationsCallback = Callable[[Tuple[Annotation, ...]], None]


class AnnotationRecorder:
    """Finalizes strokes into annotations and notifies the change callback."""

    def __init__(self, on_annotations_change: Optional[AnnotationsCallback] = None,
                 logger: Optional[PencilLogger] = None,
                 clock: Callable[[], float] = time.time):
        self.annotations = AnnotationSet()
        self.on_annotations_change = on_annotations_change
        self.logger = logger
        self.clock = clock

    def record_stroke(self, tool: ToolMode, category: Optional[Category], pressure: float,
                      anchor: Tuple[float, float]) -> Optional[Annotation]:
        """
        Record a completed stroke.

        Args:
            tool: Effective tool the stroke was drawn with
            category: Category resolved for the stroke
            pressure: Pressure sampled at the end of the stroke
            anchor: Last known position of the stroke

        Returns:
            The new Annotation, or None for eraser and pan strokes
        """
        if tool in NON_RECORDING_TOOLS or category is None:
            if self.logger:
                self.logger.log_skipped(tool.value)
            return None

        annotation = Annotation(
            id=f"annotation-{uuid.uuid4().hex}",
            category=category,
            pressure=max(0.0, min(1.0, float(pressure))),
            created_at=self.clock(),
            anchor=(float(anchor[0]), float(anchor[1])),
        )
        self.annotations.append(annotation)

        if self.logger:
            self.logger.log_annotation(annotation, len(self.annotations))
        self._notify()
        return annotation

    def clear_all(self):
        """Remove every annotation and notify with an empty set."""
        removed = len(self.annotations)
        self.annotations.clear()

        if self.logger:
            self.logger.log_clear(removed)
        self._notify()

    def _notify(self):
        if self.on_annotations_change:
            self.on_annotations_change(self.annotations.snapshot())

"""
Bounded buffer holding the most recent samples of the stroke in progress.
"""

from collections import deque
from typing import Optional, Tuple

from ..config.settings import PencilConfig
from ..utils.gesture_utils import Sample


class StrokeWindow:
    """FIFO of stroke samples capped at ``capacity`` entries."""

    def __init__(self, capacity: int = PencilConfig.WINDOW_SIZE):
        if capacity < 1:
            raise ValueError("Window capacity must be at least 1")
        self.capacity = capacity
        self._samples = deque(maxlen=capacity)

    def reset(self):
        """Drop every sample; called at stroke start."""
        self._samples.clear()

    def append(self, sample: Sample):
        """Add the newest sample, evicting the oldest once full."""
        self._samples.append(sample)

    def snapshot(self) -> Tuple[Sample, ...]:
        """Immutable copy of the window for classification."""
        return tuple(self._samples)

    @property
    def last(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None

    def __len__(self):
        return len(self._samples)

    def __iter__(self):
        return iter(self.snapshot())

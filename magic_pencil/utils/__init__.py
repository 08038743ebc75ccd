"""
Utilities package for stroke geometry and logging.
"""

from .gesture_utils import (
    Sample,
    GeometryUtils,
    PathUtils,
)
from .logger import PencilLogger

__all__ = [
    'Sample',
    'GeometryUtils',
    'PathUtils',
    'PencilLogger',
]

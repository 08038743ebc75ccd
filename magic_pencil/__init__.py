"""
Magic Pencil Package
Relevance annotation strokes with pressure and shape-gesture category switching.
"""

from .core.listener import PencilListener
from .core.annotations import Annotation, AnnotationRecorder, AnnotationSet
from .core.mode_resolver import ModeResolver
from .core.modes import Category, MagicState, ToolMode
from .core.stroke_window import StrokeWindow
from .gestures.shape_detector import GestureClassifier, GestureKind

__version__ = "1.0.0"
__all__ = [
    "PencilListener",
    "Annotation",
    "AnnotationRecorder",
    "AnnotationSet",
    "ModeResolver",
    "Category",
    "MagicState",
    "ToolMode",
    "StrokeWindow",
    "GestureClassifier",
    "GestureKind",
]

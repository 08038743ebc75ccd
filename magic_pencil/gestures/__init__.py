"""
Gesture detection and classification system.

This module provides the shape detectors that redirect a Magic Pencil stroke
to another relevance category mid-stroke.
"""

from .shape_detector import GestureClassifier, GestureKind, classify_gesture

__all__ = [
    'GestureClassifier',
    'GestureKind',
    'classify_gesture',
]

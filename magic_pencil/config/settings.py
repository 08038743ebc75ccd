"""
Configuration settings for the magic pencil.
"""

import math


class PencilConfig:
    """Configuration constants for stroke tracking and gesture recognition."""

    # Canvas (annotation layer) size in canvas units
    CANVAS_WIDTH = 1024
    CANVAS_HEIGHT = 768

    # Stroke window
    WINDOW_SIZE = 40

    # Pointer input
    DEFAULT_PRESSURE = 0.5
    HIGH_PRESSURE_THRESHOLD = 0.7
    ERASER_TWIST_THRESHOLD = 90  # degrees, flipped stylus

    # Timing configurations (in milliseconds)
    GESTURE_COOLDOWN = 500

    # Circle detection
    CIRCLE_MIN_SAMPLES = 8
    CIRCLE_MIN_SIZE = 25.0
    CIRCLE_MAX_ASPECT_RATIO = 2.0
    CIRCLE_CLOSURE_RATIO = 0.5  # of the larger box side, never stricter than SQUARE_CLOSURE_RATIO
    CIRCLE_MIN_RADIUS = 15.0
    CIRCLE_RADIUS_VARIANCE_RATIO = 0.2  # of the mean radius
    CIRCLE_MIN_TURN = 0.05
    CIRCLE_MAX_TURN = 1.2
    CIRCLE_MIN_CURVATURE_FRACTION = 0.5

    # Square detection
    SQUARE_MIN_SAMPLES = 10
    SQUARE_MIN_SIZE = 25.0
    SQUARE_MAX_ASPECT_RATIO = 2.5
    SQUARE_CLOSURE_RATIO = 0.5
    SQUARE_CHORD_STRIDE = 3
    SQUARE_MIN_CHORD = 8.0
    SQUARE_CORNER_ANGLE = math.pi / 4
    SQUARE_CORNER_SPACING = 4
    SQUARE_MIN_CORNERS = 2
    SQUARE_MAX_CORNERS = 8

    # Zig-zag detection
    ZIGZAG_MIN_SAMPLES = 6
    ZIGZAG_MIN_PATH_LENGTH = 40.0
    ZIGZAG_CHORD_STRIDE = 2
    ZIGZAG_MIN_CHORD = 8.0
    ZIGZAG_MIN_ANGLE = math.pi / 6
    ZIGZAG_MAX_ANGLE = 5 * math.pi / 6
    ZIGZAG_CHANGE_SPACING = 4
    ZIGZAG_MIN_CHANGES = 2
    ZIGZAG_MAX_CHANGES = 10
    ZIGZAG_MIN_ALTERNATION_RATIO = 0.5

    # Stroke colors per category (RGB), used by rendering collaborators
    CATEGORY_COLORS = {
        'high': (239, 68, 68),
        'medium': (249, 115, 22),
        'low': (59, 130, 246),
        'neutral': (234, 179, 8),
    }

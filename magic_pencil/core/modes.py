"""
Tool, state and category enumerations shared by the stroke pipeline.
"""

from enum import Enum


class ToolMode(str, Enum):
    """Drawing tools selectable from the toolbar."""

    MAGIC = "magic"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NEUTRAL = "neutral"
    ERASER = "eraser"
    PAN = "pan"


class MagicState(str, Enum):
    """Category currently carried by the Magic tool."""

    IDLE = "idle"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(str, Enum):
    """Relevance tag attached to a completed stroke."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NEUTRAL = "neutral"


# Tools that never produce annotations
NON_RECORDING_TOOLS = frozenset({ToolMode.ERASER, ToolMode.PAN})

TOOL_CATEGORIES = {
    ToolMode.HIGH: Category.HIGH,
    ToolMode.MEDIUM: Category.MEDIUM,
    ToolMode.LOW: Category.LOW,
    ToolMode.NEUTRAL: Category.NEUTRAL,
}

MAGIC_CATEGORIES = {
    MagicState.IDLE: Category.NEUTRAL,
    MagicState.HIGH: Category.HIGH,
    MagicState.MEDIUM: Category.MEDIUM,
    MagicState.LOW: Category.LOW,
}

#!/usr/bin/env python3
"""Magic Pencil Demo with Visual Feedback.

Draw over the canvas with the mouse (or a tablet driving the pointer). The
stroke is drawn in the color of its current category, and the debug panel
shows the live output of the three shape detectors.
"""

from typing import Dict, List, Optional, Tuple

import pygame

from magic_pencil.config.settings import PencilConfig
from magic_pencil.core.listener import PencilListener
from magic_pencil.core.modes import MAGIC_CATEGORIES, TOOL_CATEGORIES, ToolMode

TOOL_KEYS = {
    pygame.K_1: ToolMode.MAGIC,
    pygame.K_2: ToolMode.HIGH,
    pygame.K_3: ToolMode.MEDIUM,
    pygame.K_4: ToolMode.LOW,
    pygame.K_5: ToolMode.NEUTRAL,
    pygame.K_6: ToolMode.ERASER,
    pygame.K_7: ToolMode.PAN,
}


class MagicPencilDemo:
    """Interactive demo for Magic Pencil annotation."""

    def __init__(self) -> None:
        pygame.init()
        self.config = PencilConfig()
        self.canvas_rect = pygame.Rect(
            20, 140, self.config.CANVAS_WIDTH, self.config.CANVAS_HEIGHT
        )
        self.screen = pygame.display.set_mode(
            (self.canvas_rect.right + 360, self.canvas_rect.bottom + 20)
        )
        pygame.display.set_caption("Magic Pencil Demo")

        self.listener = PencilListener(
            on_annotations_change=self.on_annotations_change,
            on_debug=self.on_debug,
            config=self.config,
        )
        self.listener.stream.set_viewport(*self.canvas_rect)

        # Finished strokes as (color, points), current stroke as colored segments
        self.strokes: List[Tuple[Tuple[int, int, int], List[Tuple[int, int]]]] = []
        self.segments: List[Tuple[Tuple[int, int, int], Tuple[int, int], Tuple[int, int]]] = []
        self.last_pos: Optional[Tuple[int, int]] = None
        self.debug: Dict = {}
        self.counts: Dict[str, int] = {}

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.GRAY = (128, 128, 128)

        # Fonts
        self.font = pygame.font.Font(None, 36)
        self.small_font = pygame.font.Font(None, 26)

    def on_annotations_change(self, annotations) -> None:
        self.counts = {}
        for annotation in annotations:
            key = annotation.category.value
            self.counts[key] = self.counts.get(key, 0) + 1

    def on_debug(self, report: Dict) -> None:
        self.debug = report

    def current_color(self) -> Tuple[int, int, int]:
        """Color of the stroke in progress."""
        tool = self.listener.stroke_tool or self.listener.active_tool
        if tool == ToolMode.ERASER:
            return self.WHITE
        if tool == ToolMode.MAGIC:
            category = MAGIC_CATEGORIES[self.listener.magic_state]
        else:
            category = TOOL_CATEGORIES.get(tool)
        if category is None:
            return self.GRAY
        return self.config.CATEGORY_COLORS[category.value]

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1 and self.canvas_rect.collidepoint(event.pos):
                        self.start_drawing(event.pos)
                elif event.type == pygame.MOUSEMOTION:
                    if self.listener.is_drawing:
                        if self.canvas_rect.collidepoint(event.pos):
                            self.continue_drawing(event.pos)
                        else:
                            self.finish_drawing()
                elif event.type == pygame.MOUSEBUTTONUP:
                    if event.button == 1:
                        self.finish_drawing()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_c:
                        self.clear_screen()
                    elif event.key in TOOL_KEYS:
                        self.listener.active_tool = TOOL_KEYS[event.key]

            self.draw()
            clock.tick(60)

    def start_drawing(self, pos: Tuple[int, int]) -> None:
        """Start a new stroke."""
        if self.listener.stroke_start(pos, pressure=self.pressure()):
            self.segments = []
            self.last_pos = pos

    def continue_drawing(self, pos: Tuple[int, int]) -> None:
        """Add a point while drawing."""
        self.listener.stroke_move(pos, pressure=self.pressure())
        if self.last_pos is not None:
            self.segments.append((self.current_color(), self.last_pos, pos))
        self.last_pos = pos

    def finish_drawing(self) -> None:
        """Finish the stroke; the listener records the annotation."""
        if not self.listener.is_drawing:
            return
        self.listener.stroke_end()
        for color, start, end in self.segments:
            self.strokes.append((color, [start, end]))
        self.segments = []
        self.last_pos = None

    def pressure(self) -> float:
        """Hold shift to simulate a hard press."""
        if pygame.key.get_mods() & pygame.KMOD_SHIFT:
            return 1.0
        return self.config.DEFAULT_PRESSURE

    def clear_screen(self) -> None:
        """Clear strokes and annotations."""
        self.strokes = []
        self.segments = []
        self.listener.clear_all()

    def draw(self) -> None:
        """Render the UI and current drawing."""
        self.screen.fill(self.WHITE)
        pygame.draw.rect(self.screen, self.GRAY, self.canvas_rect, 2)

        instructions = [
            "1 Magic  2 High  3 Medium  4 Low  5 Neutral  6 Eraser  7 Pan   C: Clear",
            "Magic: hold SHIFT for a hard press, draw circle / square / zig-zag to switch",
            f"Tool: {self.listener.active_tool.value}   Magic state: {self.listener.magic_state.value}",
        ]
        y = 10
        for line in instructions:
            self.screen.blit(self.small_font.render(line, True, self.BLACK), (20, y))
            y += 30

        for color, points in self.strokes:
            pygame.draw.lines(self.screen, color, False, points, 8)
        for color, start, end in self.segments:
            pygame.draw.line(self.screen, color, start, end, 8)

        panel_x = self.canvas_rect.right + 20
        y = self.canvas_rect.top
        self.screen.blit(self.font.render("Detectors", True, self.BLACK), (panel_x, y))
        y += 40
        for key in ('window_size', 'circle_detected', 'square_detected', 'zigzag_detected'):
            value = self.debug.get(key, '-')
            self.screen.blit(self.small_font.render(f"{key}: {value}", True, self.BLACK), (panel_x, y))
            y += 28

        y += 20
        self.screen.blit(self.font.render("Annotations", True, self.BLACK), (panel_x, y))
        y += 40
        for category, color in self.config.CATEGORY_COLORS.items():
            count = self.counts.get(category, 0)
            self.screen.blit(self.small_font.render(f"{category}: {count}", True, color), (panel_x, y))
            y += 28

        pygame.display.flip()


def main() -> None:
    """Entry point for the demo."""
    demo = MagicPencilDemo()
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()

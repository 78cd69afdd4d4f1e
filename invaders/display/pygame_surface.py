"""
Pygame implementation of DrawSurface.
"""

import pygame
from typing import Dict

from ..core.surface_interface import DrawSurface, Color


BLACK = (0, 0, 0)


class PygameSurface(DrawSurface):
    """
    Draws the game's primitives onto a pygame surface.

    Fonts are created lazily per size and cached.
    """

    def __init__(self, surface: pygame.Surface, background: Color = BLACK):
        """
        Initialize the adapter.

        Args:
            surface: Pygame surface to draw on (usually the display surface)
            background: Colour used by clear_rect
        """
        self.surface = surface
        self.background = background
        self._fonts: Dict[int, pygame.font.Font] = {}

    def get_width(self) -> int:
        return self.surface.get_width()

    def get_height(self) -> int:
        return self.surface.get_height()

    @staticmethod
    def _rect(x: float, y: float, width: float, height: float) -> pygame.Rect:
        return pygame.Rect(int(x), int(y), max(1, int(width)), max(1, int(height)))

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        pygame.draw.rect(self.surface, self.background, self._rect(x, y, width, height))

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None:
        pygame.draw.rect(self.surface, color, self._rect(x, y, width, height))

    def stroke_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None:
        pygame.draw.rect(self.surface, color, self._rect(x, y, width, height), 1)

    def _get_font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        size: int,
        color: Color,
        align: str = "left",
        baseline: str = "alphabetic",
    ) -> None:
        font = self._get_font(size)
        rendered = font.render(text, True, color)
        rect = rendered.get_rect()

        if align == "center":
            rect.centerx = int(x)
        elif align == "right":
            rect.right = int(x)
        else:
            rect.left = int(x)

        if baseline == "top":
            rect.top = int(y)
        elif baseline == "middle":
            rect.centery = int(y)
        elif baseline == "bottom":
            rect.bottom = int(y)
        else:
            # Alphabetic: the baseline sits descent pixels above the bottom
            rect.bottom = int(y) - font.get_descent()

        self.surface.blit(rendered, rect)

"""
Abstract drawing surface for Invaders.

Game states draw through this interface once per tick. Implementations map
the primitives onto a real backend (see invaders.display.pygame_surface).
"""

from abc import ABC, abstractmethod
from typing import Tuple

Color = Tuple[int, int, int]


class DrawSurface(ABC):
    """
    Minimal 2-D drawing capability set.

    Coordinates are in surface pixels with the origin at the top-left corner.
    The core never reads pixel data back.
    """

    @abstractmethod
    def get_width(self) -> int:
        """Width of the drawable area in pixels."""
        pass

    @abstractmethod
    def get_height(self) -> int:
        """Height of the drawable area in pixels."""
        pass

    @abstractmethod
    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        """
        Clear a region back to the background colour.

        Args:
            x: Left edge
            y: Top edge
            width: Region width
            height: Region height
        """
        pass

    @abstractmethod
    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None:
        """Fill a rectangle with a solid colour."""
        pass

    @abstractmethod
    def stroke_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None:
        """Draw a one pixel rectangle outline."""
        pass

    @abstractmethod
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
        """
        Draw a line of text.

        Args:
            text: Text to draw
            x: Anchor x coordinate
            y: Anchor y coordinate
            size: Font size in pixels
            color: Text colour
            align: Horizontal anchor, one of "left", "center", "right"
            baseline: Vertical anchor, one of "top", "middle", "alphabetic", "bottom"
        """
        pass

"""
Axis-aligned rectangles for play-area bounds and entity hit boxes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in surface coordinates (y grows downward)."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_center(cls, x: float, y: float, width: float, height: float) -> "Rect":
        """Build a rectangle from its centre point and full extents."""
        half_w = width / 2
        half_h = height / 2
        return cls(left=x - half_w, top=y - half_h, right=x + half_w, bottom=y + half_h)

    @classmethod
    def centered_in(
        cls, outer_width: float, outer_height: float, width: float, height: float
    ) -> "Rect":
        """Build a width x height rectangle centred inside an outer area."""
        return cls.from_center(outer_width / 2, outer_height / 2, width, height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point lies inside the rectangle, edges included."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def overlaps(self, other: "Rect") -> bool:
        """
        AABB overlap test.

        Edge-inclusive: rectangles that exactly touch overlap, any positive
        gap on either axis does not.
        """
        return (
            self.left <= other.right
            and other.left <= self.right
            and self.top <= other.bottom
            and other.top <= self.bottom
        )

    def to_dict(self) -> dict:
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
        }

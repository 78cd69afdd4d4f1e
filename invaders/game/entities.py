"""
Entity model: the ship, invaders and the two projectile kinds.

All positions are entity centres in surface pixels.
"""

from dataclasses import dataclass
from typing import Dict, Any

from ..core.geometry import Rect


@dataclass(frozen=True)
class Vector:
    """A 2-D velocity in px/s."""
    x: float
    y: float

    def scaled(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)


@dataclass(eq=False)
class Ship:
    """The player's defender."""
    x: float
    y: float
    width: int = 20
    height: int = 16

    @property
    def bounds(self) -> Rect:
        return Rect.from_center(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(eq=False)
class Invader:
    """
    One member of the formation.

    rank is the row index (0 = furthest from the ship, growing toward it)
    and file is the column index.
    """
    x: float
    y: float
    rank: int
    file: int
    kind: str = "Invader"
    width: int = 18
    height: int = 14

    @property
    def bounds(self) -> Rect:
        return Rect.from_center(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "rank": self.rank,
            "file": self.file,
            "kind": self.kind,
            "width": self.width,
            "height": self.height,
        }


@dataclass(eq=False)
class Rocket:
    """A shot fired upward by the ship. velocity is a positive speed."""
    x: float
    y: float
    velocity: float
    width: int = 1
    height: int = 4

    @property
    def bounds(self) -> Rect:
        return Rect.from_center(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "velocity": self.velocity}


@dataclass(eq=False)
class Bomb:
    """A bomb dropped by a front-rank invader. velocity is a positive speed."""
    x: float
    y: float
    velocity: float
    width: int = 4
    height: int = 4

    @property
    def bounds(self) -> Rect:
        return Rect.from_center(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "velocity": self.velocity}

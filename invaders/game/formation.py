"""
Formation engine.

The formation moves as one rigid body: a single shared velocity is applied
to every invader each tick. Touching a side wall switches the formation to
a vertical drop; when the drop distance is covered it resumes horizontal
motion in the opposite direction.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Any

from ..core.geometry import Rect
from ..utils.logger import get_logger
from .config import GameSettings, LevelParameters
from .entities import Invader, Rocket, Vector

logger = get_logger(__name__)


@dataclass
class FormationEvents:
    """Edge contacts detected for one tick. Flags are independent."""
    hit_left: bool = False
    hit_right: bool = False
    hit_bottom: bool = False

    @property
    def hit_side(self) -> bool:
        return self.hit_left or self.hit_right


class Formation:
    """Owns the invader collection and its shared motion state."""

    def __init__(
        self,
        invaders: Iterable[Invader],
        speed: float,
        drop_distance: float,
        acceleration: float = 0.0,
    ):
        """
        Initialize the formation.

        Args:
            invaders: Initial members
            speed: Scalar speed in px/s; the formation starts moving left
            drop_distance: Vertical distance covered on each wall contact
            acceleration: Speed added on each wall contact
        """
        self.invaders: List[Invader] = list(invaders)
        self.speed = speed
        self.drop_distance = drop_distance
        self.acceleration = acceleration

        self.velocity = Vector(-speed, 0.0)
        self.next_velocity: Optional[Vector] = None
        self.dropping = False
        self.current_drop_distance = 0.0

    @classmethod
    def create(
        cls, params: LevelParameters, settings: GameSettings, bounds: Rect
    ) -> "Formation":
        """Lay out a ranks x files grid centred horizontally in the play area."""
        ranks = params.invader_ranks
        files = params.invader_files
        spacing = settings.formation_width / files

        invaders = []
        for rank in range(ranks):
            for file in range(files):
                invaders.append(Invader(
                    x=bounds.center_x + (file - (files - 1) / 2) * spacing,
                    y=bounds.top + rank * settings.invader_rank_spacing,
                    rank=rank,
                    file=file,
                ))

        logger.debug("Created formation of %d ranks x %d files", ranks, files)
        return cls(
            invaders,
            speed=params.invader_velocity,
            drop_distance=settings.invader_drop_distance,
            acceleration=settings.invader_acceleration,
        )

    def __len__(self) -> int:
        return len(self.invaders)

    def __iter__(self) -> Iterator[Invader]:
        return iter(self.invaders)

    @property
    def is_empty(self) -> bool:
        return not self.invaders

    def detect_edges(self, dt: float, bounds: Rect) -> FormationEvents:
        """Check every invader's prospective position against the bounds."""
        events = FormationEvents()
        dx = self.velocity.x * dt
        dy = self.velocity.y * dt

        for invader in self.invaders:
            new_x = invader.x + dx
            new_y = invader.y + dy
            if new_x < bounds.left:
                events.hit_left = True
            if new_x > bounds.right:
                events.hit_right = True
            if new_y > bounds.bottom:
                events.hit_bottom = True

        return events

    def advance(self, dt: float, bounds: Rect) -> FormationEvents:
        """
        Move the formation one tick.

        Returns:
            The edge events detected before moving. hit_bottom also covers
            the step actually applied, so a drop starting this tick that
            crosses the bottom is reported. It is a loss condition the
            caller must act on.
        """
        events = self.detect_edges(dt, bounds)

        if events.hit_side and not self.dropping:
            self._begin_drop(events)

        step = self.velocity.scaled(dt)
        for invader in self.invaders:
            if invader.y + step.y > bounds.bottom:
                events.hit_bottom = True
            invader.x += step.x
            invader.y += step.y

        if self.dropping:
            self.current_drop_distance += step.y
            if self.current_drop_distance >= self.drop_distance:
                self._end_drop()

        return events

    def _begin_drop(self, events: FormationEvents) -> None:
        if events.hit_left and not events.hit_right:
            direction = 1.0
        elif events.hit_right and not events.hit_left:
            direction = -1.0
        else:
            # Wider than the play area: just reverse
            direction = 1.0 if self.velocity.x < 0 else -1.0

        self.speed += self.acceleration
        self.velocity = Vector(0.0, self.speed)
        self.next_velocity = Vector(direction * self.speed, 0.0)
        self.dropping = True
        self.current_drop_distance = 0.0

    def _end_drop(self) -> None:
        self.velocity = self.next_velocity
        self.next_velocity = None
        self.dropping = False
        self.current_drop_distance = 0.0

    def front_rank(self) -> Dict[int, Invader]:
        """Map each occupied file to its invader closest to the ship."""
        front: Dict[int, Invader] = {}
        for invader in self.invaders:
            current = front.get(invader.file)
            if current is None or invader.rank > current.rank:
                front[invader.file] = invader
        return dict(sorted(front.items()))

    def remove_hit(self, rockets: List[Rocket]) -> Tuple[List[Rocket], List[Invader]]:
        """
        Resolve rockets against invaders.

        Each invader is tested against the live rockets and is hit at most
        once; the first overlapping rocket is consumed with it.

        Returns:
            Tuple of (remaining rockets, destroyed invaders)
        """
        live_rockets = list(rockets)
        survivors: List[Invader] = []
        destroyed: List[Invader] = []

        for invader in self.invaders:
            hit_box = invader.bounds
            hit: Optional[Rocket] = None
            for rocket in live_rockets:
                if rocket.bounds.overlaps(hit_box):
                    hit = rocket
                    break

            if hit is None:
                survivors.append(invader)
            else:
                live_rockets.remove(hit)
                destroyed.append(invader)

        self.invaders = survivors
        return live_rockets, destroyed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "invaders": [inv.to_dict() for inv in self.invaders],
            "velocity": {"x": self.velocity.x, "y": self.velocity.y},
            "speed": self.speed,
            "dropping": self.dropping,
            "current_drop_distance": self.current_drop_distance,
        }

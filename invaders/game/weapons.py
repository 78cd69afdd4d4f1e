"""
Weapon subsystems: the ship's rocket launcher and the invaders' bombs.
"""

import random
from typing import Dict, List, Optional

from ..core.geometry import Rect
from .entities import Bomb, Invader, Rocket, Ship

# Rockets leave from the ship's nose rather than its centre
ROCKET_SPAWN_OFFSET = 12


class RocketLauncher:
    """Creates rockets subject to a maximum fire rate."""

    def __init__(self, velocity: float, max_fire_rate: float):
        """
        Args:
            velocity: Rocket speed in px/s
            max_fire_rate: Maximum rockets per second
        """
        self.velocity = velocity
        self.max_fire_rate = max_fire_rate
        self.last_fire_time_ms: Optional[float] = None

    @property
    def cooldown_ms(self) -> float:
        return 1000.0 / self.max_fire_rate

    def can_fire(self, now_ms: float) -> bool:
        if self.last_fire_time_ms is None:
            return True
        return now_ms - self.last_fire_time_ms >= self.cooldown_ms

    def fire(self, ship: Ship, now_ms: float) -> Optional[Rocket]:
        """
        Fire a rocket from the ship if the cooldown has elapsed.

        Args:
            ship: The firing ship
            now_ms: Current simulation time in milliseconds

        Returns:
            The new rocket, or None while cooling down
        """
        if not self.can_fire(now_ms):
            return None
        self.last_fire_time_ms = now_ms
        return Rocket(x=ship.x, y=ship.y - ROCKET_SPAWN_OFFSET, velocity=self.velocity)


class BombSpawner:
    """Gives each front-rank invader a chance to drop a bomb every tick."""

    def __init__(
        self,
        rate: float,
        min_velocity: float,
        max_velocity: float,
        rng: Optional[random.Random] = None,
    ):
        self.rate = rate
        self.min_velocity = min_velocity
        self.max_velocity = max_velocity
        self.rng = rng or random.Random()

    def spawn(self, front_rank: Dict[int, Invader], dt: float) -> List[Bomb]:
        """
        Run one Bernoulli trial with p = rate * dt per front-rank invader.

        Trials run in the mapping's order, which Formation.front_rank gives
        by file.
        """
        chance = self.rate * dt
        bombs = []
        for invader in front_rank.values():
            if self.rng.random() < chance:
                bombs.append(Bomb(
                    x=invader.x,
                    y=invader.y + invader.height / 2,
                    velocity=self.rng.uniform(self.min_velocity, self.max_velocity),
                ))
        return bombs


def advance_rockets(rockets: List[Rocket], dt: float, bounds: Rect) -> List[Rocket]:
    """Move rockets up, keeping only those not yet fully past the top bound."""
    remaining = []
    for rocket in rockets:
        rocket.y -= rocket.velocity * dt
        if rocket.bounds.bottom >= bounds.top:
            remaining.append(rocket)
    return remaining


def advance_bombs(bombs: List[Bomb], dt: float, bounds: Rect) -> List[Bomb]:
    """Move bombs down, keeping only those not yet fully past the bottom bound."""
    remaining = []
    for bomb in bombs:
        bomb.y += bomb.velocity * dt
        if bomb.bounds.top <= bounds.bottom:
            remaining.append(bomb)
    return remaining

"""
Invaders game configuration.
"""

from dataclasses import dataclass, fields, asdict
from typing import Dict, Any

from .errors import ConfigurationError


# Fields that must be strictly positive
_POSITIVE_FIELDS = (
    "bomb_min_velocity",
    "bomb_max_velocity",
    "invader_initial_velocity",
    "invader_drop_distance",
    "rocket_velocity",
    "rocket_max_fire_rate",
    "ship_speed",
    "game_width",
    "game_height",
    "fps",
    "invader_rank_spacing",
    "formation_width",
    "level_intro_seconds",
)

# Fields where zero is meaningful (e.g. bomb_rate=0 disables bombing)
_NON_NEGATIVE_FIELDS = (
    "bomb_rate",
    "invader_acceleration",
    "level_difficulty_multiplier",
    "points_per_invader",
)

_COUNT_FIELDS = (
    "invader_ranks",
    "invader_files",
    "limit_level_increase",
    "starting_lives",
)


@dataclass(frozen=True)
class GameSettings:
    """Configuration for one game session. Immutable once constructed."""

    # Bombs (per second probability per front-rank invader, px/s)
    bomb_rate: float = 0.05
    bomb_min_velocity: float = 50.0
    bomb_max_velocity: float = 50.0

    # Invader formation (px/s, px/s per edge hit, px)
    invader_initial_velocity: float = 25.0
    invader_acceleration: float = 0.0
    invader_drop_distance: float = 20.0
    invader_ranks: int = 5
    invader_files: int = 10
    invader_rank_spacing: float = 20.0
    formation_width: float = 200.0

    # Rockets (px/s, rockets per second)
    rocket_velocity: float = 120.0
    rocket_max_fire_rate: float = 2.0

    # Ship (px/s)
    ship_speed: float = 120.0
    starting_lives: int = 3

    # Play area and timing
    game_width: float = 400.0
    game_height: float = 300.0
    fps: int = 50
    level_intro_seconds: float = 3.0

    # Progression
    level_difficulty_multiplier: float = 0.2
    points_per_invader: int = 5
    limit_level_increase: int = 25

    def __post_init__(self):
        for name in _POSITIVE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")

        for name in _NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value!r}")

        for name in _COUNT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")

        if self.bomb_max_velocity < self.bomb_min_velocity:
            raise ConfigurationError(
                f"bomb_max_velocity ({self.bomb_max_velocity}) must not be below "
                f"bomb_min_velocity ({self.bomb_min_velocity})"
            )

    @property
    def tick_seconds(self) -> float:
        """Nominal simulation step, dt = 1 / fps."""
        return 1.0 / self.fps

    @property
    def tick_interval_ms(self) -> float:
        """Scheduler interval in milliseconds."""
        return 1000.0 / self.fps

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        """Create settings from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})


@dataclass(frozen=True)
class LevelParameters:
    """Difficulty values derived from GameSettings for one level."""

    level: int
    invader_velocity: float
    bomb_rate: float
    bomb_min_velocity: float
    bomb_max_velocity: float
    rocket_max_fire_rate: float
    invader_ranks: int
    invader_files: int

    @classmethod
    def for_level(cls, settings: GameSettings, level: int) -> "LevelParameters":
        """
        Scale the base settings for a level.

        Velocity, bomb rate and bomb minimum velocity grow linearly with
        level * level_difficulty_multiplier. Fire rate and grid size grow
        with the level capped at limit_level_increase; fractional grid
        growth is truncated.
        """
        if level < 1:
            raise ConfigurationError(f"level must be >= 1, got {level}")

        level_multiplier = level * settings.level_difficulty_multiplier
        limit_level = min(level, settings.limit_level_increase)

        return cls(
            level=level,
            invader_velocity=(
                settings.invader_initial_velocity
                + 1.5 * (level_multiplier * settings.invader_initial_velocity)
            ),
            bomb_rate=settings.bomb_rate + level_multiplier * settings.bomb_rate,
            bomb_min_velocity=(
                settings.bomb_min_velocity + level_multiplier * settings.bomb_min_velocity
            ),
            bomb_max_velocity=settings.bomb_max_velocity,
            rocket_max_fire_rate=settings.rocket_max_fire_rate + 0.4 * limit_level,
            invader_ranks=int(settings.invader_ranks + 0.1 * limit_level),
            invader_files=int(settings.invader_files + 0.2 * limit_level),
        )

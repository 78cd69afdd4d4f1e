"""
Game states.

The controller keeps a stack of these; only the top state receives update,
draw and key events. Every state shares one interface whose hooks default
to no-ops, and carries a StateKind tag identifying which of the five
screens it is.
"""

import math
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..core.surface_interface import DrawSurface
from ..utils.logger import get_logger
from .collisions import TickOutcome, resolve_tick
from .config import GameSettings, LevelParameters
from .entities import Bomb, Rocket, Ship
from .formation import Formation
from .keys import Key
from .weapons import BombSpawner, RocketLauncher, advance_bombs, advance_rockets

if TYPE_CHECKING:
    from .controller import Game

logger = get_logger(__name__)

SOUND_CUES = ("shoot", "bang", "explosion")

# Colors
WHITE = (255, 255, 255)
SHIP_COLOR = (153, 153, 153)
INVADER_COLOR = (0, 102, 0)
ROCKET_COLOR = (255, 0, 0)
BOMB_COLOR = (255, 85, 85)
DEBUG_COLOR = (255, 0, 0)

HUD_FONT_SIZE = 14


class StateKind(Enum):
    """The closed set of screens."""
    WELCOME = "welcome"
    LEVEL_INTRO = "level_intro"
    PLAY = "play"
    PAUSE = "pause"
    GAME_OVER = "game_over"


class GameState:
    """
    Base class for all states.

    Hooks receive the Game context explicitly. Hooks a state does not need
    are left as the no-ops defined here.
    """

    kind: StateKind

    def enter(self, game: "Game") -> None:
        """Called when the state becomes the top of the stack."""
        pass

    def leave(self, game: "Game") -> None:
        """Called when the state is removed from the stack."""
        pass

    def update(self, game: "Game", dt: float) -> None:
        """Advance the state by dt seconds."""
        pass

    def draw(self, game: "Game", dt: float, surface: DrawSurface) -> None:
        """Draw the state."""
        pass

    def key_down(self, game: "Game", key: int) -> None:
        pass

    def key_up(self, game: "Game", key: int) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _draw_centered_lines(
    game: "Game", surface: DrawSurface, lines: List[tuple]
) -> None:
    """Clear the surface and draw (text, size, y_offset) lines around the centre."""
    surface.clear_rect(0, 0, game.width, game.height)
    for text, size, y_offset in lines:
        surface.fill_text(
            text,
            game.width / 2,
            game.height / 2 + y_offset,
            size,
            WHITE,
            align="center",
            baseline="middle",
        )


class WelcomeState(GameState):
    """Title screen. Loads the sound cues on entry."""

    kind = StateKind.WELCOME

    def enter(self, game: "Game") -> None:
        game.audio.init()
        for name in SOUND_CUES:
            source = str(Path(game.sound_dir) / f"{name}.wav")
            if not game.audio.load_sound(name, source):
                logger.debug("Sound cue '%s' unavailable", name)

    def draw(self, game: "Game", dt: float, surface: DrawSurface) -> None:
        _draw_centered_lines(game, surface, [
            ("Space Invaders", 30, -40),
            ("Press 'Space' or touch to start", 16, 0),
        ])

    def key_down(self, game: "Game", key: int) -> None:
        if key == Key.FIRE:
            game.reset_session()
            game.move_to_state(LevelIntroState(game.level))


class LevelIntroState(GameState):
    """Countdown shown before each level."""

    kind = StateKind.LEVEL_INTRO

    def __init__(self, level: int):
        self.level = level
        self.countdown: float = 0.0
        self.countdown_message = ""

    def __repr__(self) -> str:
        return f"LevelIntroState(level={self.level})"

    def enter(self, game: "Game") -> None:
        self.countdown = game.settings.level_intro_seconds
        self.countdown_message = str(math.ceil(self.countdown))

    def update(self, game: "Game", dt: float) -> None:
        self.countdown -= dt
        if self.countdown > 0:
            self.countdown_message = str(math.ceil(self.countdown))
            return

        game.move_to_state(PlayState(game.settings, self.level))

    def draw(self, game: "Game", dt: float, surface: DrawSurface) -> None:
        _draw_centered_lines(game, surface, [
            (f"Level {self.level}", 36, 0),
            (f"Ready in {self.countdown_message}", 24, 36),
        ])


class PlayState(GameState):
    """
    The simulation itself.

    Owns the ship, the formation and every projectile for one level. They
    are created on enter and released on leave.
    """

    kind = StateKind.PLAY

    def __init__(self, settings: GameSettings, level: int):
        """
        Args:
            settings: Base game settings
            level: Level to play, used to scale the difficulty
        """
        self.settings = settings
        self.level = level

        self.params: Optional[LevelParameters] = None
        self.ship: Optional[Ship] = None
        self.formation: Optional[Formation] = None
        self.rockets: List[Rocket] = []
        self.bombs: List[Bomb] = []
        self.launcher: Optional[RocketLauncher] = None
        self.spawner: Optional[BombSpawner] = None
        self.elapsed_ms: float = 0.0

    def __repr__(self) -> str:
        return f"PlayState(level={self.level})"

    def enter(self, game: "Game") -> None:
        bounds = game.bounds
        self.params = LevelParameters.for_level(self.settings, self.level)

        self.ship = Ship(x=bounds.center_x, y=bounds.bottom)
        self.formation = Formation.create(self.params, self.settings, bounds)
        self.launcher = RocketLauncher(
            velocity=self.settings.rocket_velocity,
            max_fire_rate=self.params.rocket_max_fire_rate,
        )
        self.spawner = BombSpawner(
            rate=self.params.bomb_rate,
            min_velocity=self.params.bomb_min_velocity,
            max_velocity=self.params.bomb_max_velocity,
            rng=game.rng,
        )
        self.rockets = []
        self.bombs = []
        self.elapsed_ms = 0.0

        logger.debug(
            "Level %d: %d invaders at %.1f px/s",
            self.level, len(self.formation), self.params.invader_velocity,
        )

    def leave(self, game: "Game") -> None:
        self.ship = None
        self.formation = None
        self.rockets = []
        self.bombs = []

    def update(self, game: "Game", dt: float) -> TickOutcome:
        """
        Run one simulation tick.

        Returns:
            The tick outcome; LOST and LEVEL_CLEARED have already moved the
            game to the next state
        """
        self.elapsed_ms += dt * 1000.0
        bounds = game.bounds

        # Held keys are polled every tick for smooth movement
        if Key.LEFT in game.pressed_keys:
            self.ship.x -= self.settings.ship_speed * dt
        if Key.RIGHT in game.pressed_keys:
            self.ship.x += self.settings.ship_speed * dt
        if Key.FIRE in game.pressed_keys:
            self.fire_rocket(game)
        self.ship.x = min(max(self.ship.x, bounds.left), bounds.right)

        self.rockets = advance_rockets(self.rockets, dt, bounds)

        events = self.formation.advance(dt, bounds)
        if events.hit_bottom:
            game.lives = 0

        self.bombs.extend(self.spawner.spawn(self.formation.front_rank(), dt))
        self.bombs = advance_bombs(self.bombs, dt, bounds)

        outcome = resolve_tick(game, self)
        if outcome is TickOutcome.LOST:
            game.move_to_state(GameOverState())
        elif outcome is TickOutcome.LEVEL_CLEARED:
            game.move_to_state(LevelIntroState(game.level))
        return outcome

    def fire_rocket(self, game: "Game") -> Optional[Rocket]:
        """Fire a rocket if the launcher has cooled down."""
        rocket = self.launcher.fire(self.ship, self.elapsed_ms)
        if rocket is not None:
            self.rockets.append(rocket)
            game.audio.play_sound("shoot")
        return rocket

    def key_down(self, game: "Game", key: int) -> None:
        if key == Key.FIRE:
            self.fire_rocket(game)
        elif key == Key.PAUSE:
            game.push_state(PauseState())

    def draw(self, game: "Game", dt: float, surface: DrawSurface) -> None:
        surface.clear_rect(0, 0, game.width, game.height)

        ship = self.ship
        surface.fill_rect(
            ship.x - ship.width / 2, ship.y - ship.height / 2,
            ship.width, ship.height, SHIP_COLOR,
        )

        for invader in self.formation:
            surface.fill_rect(
                invader.x - invader.width / 2, invader.y - invader.height / 2,
                invader.width, invader.height, INVADER_COLOR,
            )

        for bomb in self.bombs:
            surface.fill_rect(
                bomb.x - bomb.width / 2, bomb.y - bomb.height / 2,
                bomb.width, bomb.height, BOMB_COLOR,
            )

        for rocket in self.rockets:
            surface.fill_rect(
                rocket.x, rocket.y - rocket.height / 2,
                rocket.width, rocket.height, ROCKET_COLOR,
            )

        # HUD sits in the strip below the play area
        bounds = game.bounds
        text_y = bounds.bottom + (game.height - bounds.bottom) / 2 + HUD_FONT_SIZE / 2
        surface.fill_text(
            f"Lives: {game.lives}", bounds.left, text_y, HUD_FONT_SIZE, WHITE, align="left"
        )
        surface.fill_text(
            f"Score: {game.score}, Level: {game.level}",
            bounds.right, text_y, HUD_FONT_SIZE, WHITE, align="right",
        )

        if game.debug:
            surface.stroke_rect(0, 0, game.width, game.height, DEBUG_COLOR)
            surface.stroke_rect(
                bounds.left, bounds.top, bounds.width, bounds.height, DEBUG_COLOR
            )

    def get_state(self) -> Dict[str, Any]:
        """Snapshot of the simulation for tools and tests."""
        return {
            "level": self.level,
            "elapsed_ms": self.elapsed_ms,
            "ship": self.ship.to_dict() if self.ship else None,
            "formation": self.formation.to_dict() if self.formation else None,
            "rockets": [r.to_dict() for r in self.rockets],
            "bombs": [b.to_dict() for b in self.bombs],
        }


class PauseState(GameState):
    """Overlay pushed over PlayState; the simulation beneath is suspended."""

    kind = StateKind.PAUSE

    def draw(self, game: "Game", dt: float, surface: DrawSurface) -> None:
        _draw_centered_lines(game, surface, [("Paused", 14, 0)])

    def key_down(self, game: "Game", key: int) -> None:
        if key in (Key.PAUSE, Key.FIRE):
            game.pop_state()


class GameOverState(GameState):
    """Final score screen."""

    kind = StateKind.GAME_OVER

    def draw(self, game: "Game", dt: float, surface: DrawSurface) -> None:
        _draw_centered_lines(game, surface, [
            ("Game over!", 30, -40),
            (f"You scored {game.score} and got to level {game.level}", 16, 0),
            ("Press 'Space' to play again", 16, 40),
        ])

    def key_down(self, game: "Game", key: int) -> None:
        if key == Key.FIRE:
            game.reset_session()
            game.move_to_state(LevelIntroState(1))

"""
Game controller.

One Game instance is the explicit context for a play session: it owns the
lives/score/level counters, the play-area bounds, the pressed-key set and
the state stack, and is passed to every state hook.
"""

import random
from typing import Any, Dict, List, Optional, Set

from ..core.audio_interface import AudioInterface, NullAudio
from ..core.geometry import Rect
from ..core.scheduler import ManualScheduler, Scheduler
from ..core.surface_interface import DrawSurface
from ..utils.logger import get_logger
from .config import GameSettings
from .errors import ConfigurationError
from .keys import Key
from .states import GameState, WelcomeState

logger = get_logger(__name__)


class Game:
    """
    Drives the state stack from an external tick scheduler.

    Call initialise() with a surface, then start(). Input adapters call
    key_down/key_up and the touch_* methods between ticks.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        audio: Optional[AudioInterface] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        debug: bool = False,
        sound_dir: str = "sounds",
    ):
        """
        Initialize the game.

        Args:
            settings: Validated game settings (defaults if omitted)
            audio: Audio backend (silent if omitted)
            scheduler: Tick scheduler (a ManualScheduler if omitted)
            rng: Random source for bomb spawning
            debug: Draw play-area outlines
            sound_dir: Directory the sound cues are loaded from
        """
        self.settings = settings or GameSettings()
        self.audio = audio or NullAudio()
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng or random.Random()
        self.debug = debug
        self.sound_dir = sound_dir

        # Session counters
        self.lives: int = self.settings.starting_lives
        self.score: int = 0
        self.level: int = 1

        # Surface and play area (set by initialise)
        self.surface: Optional[DrawSurface] = None
        self.width: int = 0
        self.height: int = 0
        self._bounds: Optional[Rect] = None

        # Input and states
        self.pressed_keys: Set[int] = set()
        self.state_stack: List[GameState] = []
        self._previous_touch_x: Optional[float] = None

    @property
    def bounds(self) -> Rect:
        """Play-area bounds. Requires initialise()."""
        if self._bounds is None:
            raise ConfigurationError("Game.initialise(surface) must be called first")
        return self._bounds

    @property
    def initialised(self) -> bool:
        return self._bounds is not None

    def initialise(self, surface: DrawSurface) -> None:
        """
        Attach the drawing surface and centre the play area within it.

        Raises:
            ConfigurationError: If the surface has no drawable area
        """
        width = surface.get_width()
        height = surface.get_height()
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Surface must have a positive size, got {width}x{height}")

        if self.settings.game_width > width or self.settings.game_height > height:
            logger.warning(
                "Play area %sx%s is larger than the %dx%d surface",
                self.settings.game_width, self.settings.game_height, width, height,
            )

        self.surface = surface
        self.width = width
        self.height = height
        self._bounds = Rect.centered_in(
            width, height, self.settings.game_width, self.settings.game_height
        )

    def reset_session(self) -> None:
        """Reset lives, score and level for a new game."""
        self.lives = self.settings.starting_lives
        self.score = 0
        self.level = 1

    def start(self) -> None:
        """
        Enter the welcome screen and start ticking.

        With a blocking scheduler this returns only after stop().
        """
        if not self.initialised:
            raise ConfigurationError("Game.initialise(surface) must be called before start()")

        self.reset_session()
        self.move_to_state(WelcomeState())
        logger.info("Starting at %d fps", self.settings.fps)
        self.scheduler.start(self.tick, self.settings.tick_interval_ms)

    def stop(self) -> None:
        """Stop ticking. The last computed state is left intact."""
        if self.scheduler.running:
            logger.info("Stopping")
        self.scheduler.stop()

    def tick(self) -> None:
        """One fixed step: update the top state, then draw whatever is on top."""
        state = self.current_state
        if state is None:
            return

        dt = self.settings.tick_seconds
        state.update(self, dt)

        state = self.current_state
        if state is not None and self.surface is not None:
            state.draw(self, dt, self.surface)

    @property
    def current_state(self) -> Optional[GameState]:
        return self.state_stack[-1] if self.state_stack else None

    def move_to_state(self, state: GameState) -> None:
        """Replace the top of the stack: leave the old top, then enter the new state."""
        current = self.current_state
        if current is not None:
            current.leave(self)
            self.state_stack.pop()

        state.enter(self)
        self.state_stack.append(state)
        logger.debug("State %r -> %r", current, state)

    def push_state(self, state: GameState) -> None:
        """Push an overlay; the state beneath is suspended, not left."""
        state.enter(self)
        self.state_stack.append(state)
        logger.debug("Pushed %r", state)

    def pop_state(self) -> Optional[GameState]:
        """Remove the top state. A no-op on an empty stack."""
        state = self.current_state
        if state is None:
            return None

        state.leave(self)
        self.state_stack.pop()
        logger.debug("Popped %r", state)
        return state

    def key_down(self, key: int) -> None:
        self.pressed_keys.add(key)
        state = self.current_state
        if state is not None:
            state.key_down(self, key)

    def key_up(self, key: int) -> None:
        self.pressed_keys.discard(key)
        state = self.current_state
        if state is not None:
            state.key_up(self, key)

    def touch_start(self, x: Optional[float] = None) -> None:
        """A tap acts as a fire press for the active state."""
        self._previous_touch_x = x
        state = self.current_state
        if state is not None:
            state.key_down(self, Key.FIRE)

    def touch_move(self, x: float) -> None:
        """Horizontal drag holds left or right for the rest of the gesture."""
        previous = self._previous_touch_x
        if previous is not None:
            if x > previous:
                self.pressed_keys.discard(Key.LEFT)
                self.pressed_keys.add(Key.RIGHT)
            elif x < previous:
                self.pressed_keys.discard(Key.RIGHT)
                self.pressed_keys.add(Key.LEFT)
        self._previous_touch_x = x

    def touch_end(self) -> None:
        self.pressed_keys.discard(Key.LEFT)
        self.pressed_keys.discard(Key.RIGHT)
        self._previous_touch_x = None

    def mute(self, flag: Optional[bool] = None) -> bool:
        """
        Set or toggle audio muting.

        Args:
            flag: True/False to set, None to toggle

        Returns:
            The new muted state
        """
        if flag is None:
            self.audio.muted = not self.audio.muted
        else:
            self.audio.muted = flag
        return self.audio.muted

    def get_state(self) -> Dict[str, Any]:
        """Current session snapshot."""
        state = self.current_state
        return {
            "lives": self.lives,
            "score": self.score,
            "level": self.level,
            "state": state.kind.value if state is not None else None,
            "stack": [s.kind.value for s in self.state_stack],
            "bounds": self._bounds.to_dict() if self._bounds else None,
            "muted": self.audio.muted,
        }

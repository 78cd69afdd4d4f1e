"""
Pygame application shell.

Creates the window, wires the pygame adapters into a Game and translates
window events (keyboard, touch, quit) into game input.
"""

import random
import pygame
from typing import Any, Dict, Optional

from ..game.controller import Game
from ..game.keys import Key
from ..utils.config_loader import Config
from ..utils.logger import get_logger
from .pygame_audio import PygameAudio
from .pygame_scheduler import PygameScheduler
from .pygame_surface import PygameSurface

logger = get_logger(__name__)


def build_key_map() -> Dict[int, Key]:
    """Map pygame key constants onto game keys."""
    return {
        pygame.K_LEFT: Key.LEFT, pygame.K_a: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT, pygame.K_d: Key.RIGHT,
        pygame.K_SPACE: Key.FIRE,
        pygame.K_p: Key.PAUSE,
    }


class PygameApp:
    """Runs a Game in a pygame window."""

    def __init__(self, config: Config, rng: Optional[random.Random] = None):
        self.config = config
        self.screen: Optional[pygame.Surface] = None

        self.audio = PygameAudio(enabled=config.audio.enabled)
        self.audio.muted = config.audio.muted
        self.scheduler = PygameScheduler(self.handle_event)
        self.game = Game(
            settings=config.game,
            audio=self.audio,
            scheduler=self.scheduler,
            rng=rng,
            debug=config.display.debug,
            sound_dir=config.audio.sound_dir,
        )
        self.key_map = build_key_map()

    def run(self) -> None:
        """Open the window and block until the player quits."""
        display = self.config.display
        pygame.init()
        try:
            pygame.display.set_caption(display.title)
            self.screen = pygame.display.set_mode((display.window_width, display.window_height))
            self.game.initialise(PygameSurface(self.screen))
            self.game.start()
        finally:
            pygame.quit()

        logger.info("Final score %d at level %d", self.game.score, self.game.level)

    def _touch_x(self, event: Any) -> float:
        # Finger coordinates are normalised to [0, 1]
        return event.x * self.game.width

    def handle_event(self, event: Any) -> None:
        """Translate one pygame event into game input."""
        if event.type == pygame.QUIT:
            self.game.stop()

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.game.stop()
            elif event.key == pygame.K_m:
                muted = self.game.mute()
                logger.info("Sound %s", "muted" if muted else "unmuted")
            elif event.key in self.key_map:
                self.game.key_down(self.key_map[event.key])

        elif event.type == pygame.KEYUP:
            if event.key in self.key_map:
                self.game.key_up(self.key_map[event.key])

        elif event.type == pygame.FINGERDOWN:
            self.game.touch_start(self._touch_x(event))

        elif event.type == pygame.FINGERMOTION:
            self.game.touch_move(self._touch_x(event))

        elif event.type == pygame.FINGERUP:
            self.game.touch_end()

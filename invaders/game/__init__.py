"""
Invaders simulation: entities, formation engine, weapons, collisions and
the state machine driven by the Game controller.
"""

from .config import GameSettings, LevelParameters
from .controller import Game
from .errors import ConfigurationError
from .keys import Key
from .states import (
    GameState,
    StateKind,
    WelcomeState,
    LevelIntroState,
    PlayState,
    PauseState,
    GameOverState,
)

__all__ = [
    "Game",
    "GameSettings",
    "LevelParameters",
    "ConfigurationError",
    "Key",
    "GameState",
    "StateKind",
    "WelcomeState",
    "LevelIntroState",
    "PlayState",
    "PauseState",
    "GameOverState",
]

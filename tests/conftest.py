"""
Shared fixtures for the Invaders test suite.

pygame is replaced by a MagicMock for the whole session so the display
adapters run without a window or sound card. The core game is exercised
through recording fakes of the surface and audio interfaces and a
ManualScheduler.
"""

import random
import sys
from pathlib import Path
from typing import List, Tuple, Any
from unittest.mock import MagicMock

import pytest


ROOT_DIR = Path(__file__).resolve().parent.parent
for extra_path in (ROOT_DIR, ROOT_DIR / "scripts"):
    if str(extra_path) not in sys.path:
        sys.path.insert(0, str(extra_path))


class MockPygameError(Exception):
    """Stands in for pygame.error so `except pygame.error` works."""


def _fake_rect(*args):
    x, y, width, height = (list(args) + [0, 0, 0, 0])[:4]
    return MagicMock(x=x, y=y, width=width, height=height)


def build_pygame_double():
    """Build the pygame stand-in with just the API surface the adapters touch."""
    fake = MagicMock()
    fake.error = MockPygameError

    screen = MagicMock()
    screen.get_width.return_value = 800
    screen.get_height.return_value = 600
    fake.display.set_mode.return_value = screen

    font = MagicMock()
    font.get_descent.return_value = -3
    fake.font.Font.return_value = font

    fake.mixer.Sound.return_value = MagicMock()
    fake.event.get.return_value = []
    fake.time.Clock.return_value = MagicMock()
    fake.Rect = MagicMock(side_effect=_fake_rect)

    # Event types and key constants as defined by pygame 2
    fake.QUIT = 256
    fake.KEYDOWN = 768
    fake.KEYUP = 769
    fake.FINGERMOTION = 1792
    fake.FINGERDOWN = 1793
    fake.FINGERUP = 1794
    fake.K_ESCAPE = 27
    fake.K_SPACE = 32
    fake.K_LEFT = 1073741904
    fake.K_RIGHT = 1073741903
    fake.K_a = 97
    fake.K_d = 100
    fake.K_m = 109
    fake.K_p = 112

    return fake


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Install the pygame double for the whole session.

    Tests import invaders modules inside the test body, so the display
    adapters always bind to the double.
    """
    real_pygame = sys.modules.get("pygame")
    fake = build_pygame_double()
    sys.modules["pygame"] = fake

    yield fake

    if real_pygame is not None:
        sys.modules["pygame"] = real_pygame
    else:
        sys.modules.pop("pygame", None)


class FakeSurface:
    """DrawSurface that records every primitive call."""

    def __init__(self, width: int = 800, height: int = 600):
        self._size = (width, height)
        self.calls: List[Tuple[str, Tuple[Any, ...], dict]] = []

    def get_width(self) -> int:
        return self._size[0]

    def get_height(self) -> int:
        return self._size[1]

    def clear_rect(self, *args, **kwargs):
        self.calls.append(("clear_rect", args, kwargs))

    def fill_rect(self, *args, **kwargs):
        self.calls.append(("fill_rect", args, kwargs))

    def stroke_rect(self, *args, **kwargs):
        self.calls.append(("stroke_rect", args, kwargs))

    def fill_text(self, *args, **kwargs):
        self.calls.append(("fill_text", args, kwargs))

    def texts(self) -> List[str]:
        return [args[0] for name, args, _ in self.calls if name == "fill_text"]

    def count(self, name: str) -> int:
        return sum(1 for call_name, _, _ in self.calls if call_name == name)

    def clear_calls(self):
        self.calls = []


class RecordingAudio:
    """AudioInterface stand-in that records cue activity."""

    def __init__(self):
        self.muted = False
        self.initialised = 0
        self.loaded = {}
        self.played: List[str] = []

    def init(self):
        self.initialised += 1

    def load_sound(self, name, source):
        self.loaded[name] = source
        return True

    def play_sound(self, name):
        if not self.muted:
            self.played.append(name)


@pytest.fixture
def settings():
    """Default settings with bombing disabled so ticks are deterministic."""
    from invaders.game.config import GameSettings

    return GameSettings(bomb_rate=0.0)


@pytest.fixture
def surface():
    """Recording 800x600 surface."""
    return FakeSurface()


@pytest.fixture
def audio():
    """Recording audio backend."""
    return RecordingAudio()


@pytest.fixture
def make_game(settings, surface, audio):
    """Factory for initialised games on a manual scheduler."""
    from invaders.core.scheduler import ManualScheduler
    from invaders.game.controller import Game

    def _make(game_settings=None, debug=False, seed=1234):
        game = Game(
            settings=game_settings or settings,
            audio=audio,
            scheduler=ManualScheduler(),
            rng=random.Random(seed),
            debug=debug,
        )
        game.initialise(surface)
        return game

    return _make


@pytest.fixture
def game(make_game):
    """A started game sitting on the welcome screen."""
    game = make_game()
    game.start()
    return game


@pytest.fixture
def play_game(game):
    """A started game already in PlayState for level 1."""
    from invaders.game.states import PlayState

    game.move_to_state(PlayState(game.settings, game.level))
    return game


@pytest.fixture
def surface_factory():
    """Factory for recording surfaces of any size."""
    return FakeSurface

"""
Pygame adapters for Invaders.

Implements the core surface, audio and scheduler interfaces on pygame and
provides the windowed application shell.
"""

from .pygame_surface import PygameSurface
from .pygame_audio import PygameAudio, synthesize_cue
from .pygame_scheduler import PygameScheduler
from .app import PygameApp, build_key_map

__all__ = [
    'PygameSurface',
    'PygameAudio',
    'PygameScheduler',
    'PygameApp',
    'synthesize_cue',
    'build_key_map',
]

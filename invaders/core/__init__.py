"""
Core abstractions for Invaders.

Provides geometry and the interfaces the simulation uses to reach its
external collaborators (drawing surface, audio and tick scheduler).
"""

from .geometry import Rect
from .surface_interface import DrawSurface
from .audio_interface import AudioInterface, NullAudio
from .scheduler import Scheduler, ManualScheduler

__all__ = [
    'Rect',
    'DrawSurface',
    'AudioInterface',
    'NullAudio',
    'Scheduler',
    'ManualScheduler',
]

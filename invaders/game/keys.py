"""
Input codes understood by the game states.

Values are the classic browser key codes so key and touch adapters can share
one vocabulary.
"""

from enum import IntEnum


class Key(IntEnum):
    """Keys the simulation reacts to."""
    LEFT = 37
    RIGHT = 39
    FIRE = 32   # Space
    PAUSE = 80  # 'P'

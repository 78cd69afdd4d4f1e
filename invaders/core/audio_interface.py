"""
Abstract audio subsystem for Invaders.

The simulation treats named cues ("shoot", "bang", "explosion") as
fire-and-forget triggers. Implementations must never raise from play_sound.
"""

from abc import ABC, abstractmethod


class AudioInterface(ABC):
    """Capability set for loading and triggering named sound cues."""

    def __init__(self):
        self._muted = False

    @property
    def muted(self) -> bool:
        """Whether playback is currently suppressed."""
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._muted = bool(value)

    @abstractmethod
    def init(self) -> None:
        """Prepare the audio backend. Safe to call more than once."""
        pass

    @abstractmethod
    def load_sound(self, name: str, source: str) -> bool:
        """
        Register a named cue.

        Args:
            name: Cue name used by play_sound
            source: Where to load the sound from (backend specific)

        Returns:
            True if the cue is available for playback
        """
        pass

    @abstractmethod
    def play_sound(self, name: str) -> None:
        """Trigger a cue. Unknown cues and backend failures are ignored."""
        pass


class NullAudio(AudioInterface):
    """Silent audio used for headless runs and tests."""

    def init(self) -> None:
        pass

    def load_sound(self, name: str, source: str) -> bool:
        return False

    def play_sound(self, name: str) -> None:
        pass

"""
Pygame mixer implementation of AudioInterface.

Cues are loaded from files. If a file for one of the game's own cues is
missing or unreadable, a retro-style tone is synthesized with numpy instead,
so the game never depends on shipping sound assets.
"""

import numpy as np
import pygame
from pathlib import Path
from typing import Dict, Optional

from ..core.audio_interface import AudioInterface
from ..utils.logger import get_logger

logger = get_logger(__name__)

SAMPLE_RATE = 22050


def _envelope(length: int, attack: float, decay: float, sample_rate: int) -> np.ndarray:
    """Linear attack and decay ramps over a flat sustain."""
    envelope = np.ones(length)
    attack_samples = min(length, int(attack * sample_rate))
    decay_samples = min(length - attack_samples, int(decay * sample_rate))

    if attack_samples > 0:
        envelope[:attack_samples] = np.linspace(0, 1, attack_samples)
    if decay_samples > 0:
        envelope[-decay_samples:] = np.linspace(1, 0, decay_samples)
    return envelope


def synthesize_cue(name: str, sample_rate: int = SAMPLE_RATE) -> Optional[np.ndarray]:
    """
    Generate a mono waveform in [-1, 1] for a known cue name.

    Returns:
        The waveform, or None if there is no preset for the name
    """
    rng = np.random.default_rng(0)

    if name == "shoot":
        duration = 0.12
        t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
        freq = 880 - 440 * (t / duration)  # Falling square-wave chirp
        wave = 0.3 * np.sign(np.sin(2 * np.pi * freq * t))
        return wave * _envelope(len(t), 0.002, 0.06, sample_rate)

    if name == "bang":
        duration = 0.2
        samples = int(sample_rate * duration)
        noise = rng.uniform(-1, 1, samples)
        return 0.4 * noise * _envelope(samples, 0.001, duration, sample_rate)

    if name == "explosion":
        duration = 0.5
        samples = int(sample_rate * duration)
        noise = rng.uniform(-1, 1, samples)
        # Moving average acts as a crude lowpass for a deeper rumble
        kernel = np.ones(32) / 32
        rumble = np.convolve(noise, kernel, mode="same")
        rumble /= max(np.max(np.abs(rumble)), 1e-9)
        return 0.5 * rumble * _envelope(samples, 0.005, duration * 0.8, sample_rate)

    return None


class PygameAudio(AudioInterface):
    """Plays named cues through pygame.mixer. Failures are logged, never raised."""

    def __init__(self, enabled: bool = True, sample_rate: int = SAMPLE_RATE):
        """
        Args:
            enabled: False keeps the mixer untouched and every cue silent
            sample_rate: Mixer and synthesis sample rate
        """
        super().__init__()
        self.enabled = enabled
        self.sample_rate = sample_rate
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self._initialised = False

    @property
    def available(self) -> bool:
        return self.enabled and self._initialised

    def init(self) -> None:
        if self._initialised or not self.enabled:
            return
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=2, buffer=512)
        except pygame.error as e:
            logger.warning("Audio unavailable, continuing without sound: %s", e)
            self.enabled = False
            return
        self._initialised = True

    def _make_sound(self, wave: np.ndarray) -> pygame.mixer.Sound:
        """Convert a mono float waveform into a stereo 16-bit Sound."""
        samples = np.clip(wave * 32767, -32767, 32767).astype(np.int16)
        stereo = np.ascontiguousarray(np.column_stack((samples, samples)))
        return pygame.mixer.Sound(stereo)

    def _load_fallback(self, name: str, reason: str) -> bool:
        wave = synthesize_cue(name, self.sample_rate)
        if wave is None:
            logger.warning("Sound '%s' unavailable: %s", name, reason)
            return False
        try:
            self.sounds[name] = self._make_sound(wave)
        except pygame.error as e:
            logger.warning("Could not synthesize sound '%s': %s", name, e)
            return False
        logger.info("Sound '%s' %s; using synthesized cue", name, reason)
        return True

    def load_sound(self, name: str, source: str) -> bool:
        if not self.available:
            return False

        path = Path(source)
        if not path.is_file():
            return self._load_fallback(name, f"not found at {path}")

        try:
            self.sounds[name] = pygame.mixer.Sound(str(path))
        except pygame.error as e:
            return self._load_fallback(name, f"failed to load from {path} ({e})")
        return True

    def play_sound(self, name: str) -> None:
        if self.muted or not self.available:
            return
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.warning("Could not play sound '%s': %s", name, e)

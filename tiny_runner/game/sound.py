# tiny_runner/game/sound.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
VOLUME = 0.12


class SoundEvent(Enum):
    JUMP = "jump"
    SCORE = "score"
    GAME_OVER = "gameOver"


# (frequency Hz, duration s)
TONES: Dict[SoundEvent, Tuple[float, float]] = {
    SoundEvent.JUMP: (420.0, 0.06),
    SoundEvent.SCORE: (860.0, 0.03),
    SoundEvent.GAME_OVER: (180.0, 0.12),
}


def triangle_tone(freq: float, dur: float, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mono int16 triangle wave with a fast attack and exponential tail."""
    n = max(1, int(sample_rate * dur))
    t = np.arange(n, dtype=np.float32) / sample_rate
    phase = (t * freq) % 1.0
    wave = 4.0 * np.abs(phase - 0.5) - 1.0
    attack = np.clip(t / 0.01, 0.0, 1.0)
    tail = np.exp(-5.0 * t / max(dur, 1e-3))
    samples = VOLUME * wave * attack * tail
    return (samples * 32767).astype(np.int16)


class Blipper:
    """Plays a short blip per SoundEvent. Silently inert if the mixer is unavailable."""
    def __init__(self, enabled: bool = True):
        self._sounds: Dict[SoundEvent, "pygame.mixer.Sound"] = {}
        self.enabled = enabled and self._init_mixer()
        if self.enabled:
            for ev, (freq, dur) in TONES.items():
                self._sounds[ev] = self._make_sound(freq, dur)

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as e:
            logger.info("Sound disabled (mixer unavailable): %s", e)
            return False
        return True

    def _make_sound(self, freq: float, dur: float) -> "pygame.mixer.Sound":
        samples = triangle_tone(freq, dur)
        _, _, channels = pygame.mixer.get_init()
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def play(self, event: SoundEvent):
        snd: Optional["pygame.mixer.Sound"] = self._sounds.get(event)
        if snd is not None:
            snd.play()

"""Fire-and-forget sound cues.

The game engine only names cues; a ``SoundEffects`` implementation decides
what to do with them. Playback failures are logged and swallowed so audio can
never affect game state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class SoundCue(str, Enum):
    MOVE = "move"
    ROTATE = "rotate"
    LAND = "land"
    HARD_DROP = "hard_drop"
    LINE_CLEAR = "line_clear"
    TETRIS = "tetris"
    GAME_OVER = "game_over"
    CORRECT = "correct"
    WRONG = "wrong"
    GAME_COMPLETE = "game_complete"
    HIGH_SCORE = "high_score"
    CLICK = "click"
    PAUSE = "pause"
    RESUME = "resume"
    TIMER_TICK = "timer_tick"
    URGENT_BEEP = "urgent_beep"


class SoundEffects:
    """Base sound sink: validates the call and isolates failures."""

    def __init__(self, volume: float = 0.3, enabled: bool = True) -> None:
        self.volume = min(max(float(volume), 0.0), 1.0)
        self.enabled = enabled

    def set_volume(self, volume: float) -> None:
        self.volume = min(max(float(volume), 0.0), 1.0)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)

    def play(self, cue: SoundCue, lines: int = 1) -> None:
        if not self.enabled:
            return
        try:
            self._play(SoundCue(cue), lines)
        except Exception:  # audio must never break the game
            logger.warning("Sound cue %s failed", cue, exc_info=True)

    def _play(self, cue: SoundCue, lines: int) -> None:
        raise NotImplementedError


class SilentSoundEffects(SoundEffects):
    """Records cues instead of playing them (headless runs and tests)."""

    def __init__(self, volume: float = 0.3, enabled: bool = True) -> None:
        super().__init__(volume, enabled)
        self.played: List[SoundCue] = []

    def _play(self, cue: SoundCue, lines: int) -> None:
        self.played.append(cue)


# -------------------------------------------------------------
# Synthesis
# -------------------------------------------------------------

@dataclass(frozen=True)
class Note:
    freq: float
    duration: float
    wave: str = "square"
    gain: float = 0.3
    start: float = 0.0
    end_freq: Optional[float] = None  # exponential sweep target


C5, E5, G5, C6, E6, G6 = 523.25, 659.25, 783.99, 1046.50, 1318.51, 1568.00

_ARPEGGIO = (C5, E5, G5, C6)

RECIPES: Dict[SoundCue, Tuple[Note, ...]] = {
    SoundCue.MOVE: (Note(200, 0.05, gain=0.09),),
    SoundCue.ROTATE: (Note(300, 0.08, gain=0.2, end_freq=500),),
    SoundCue.HARD_DROP: (Note(800, 0.15, "sawtooth", end_freq=100),),
    SoundCue.LAND: (Note(80, 0.1, "sine", gain=0.4),),
    SoundCue.TETRIS: tuple(Note(f, 0.2, gain=0.4, start=i * 0.1) for i, f in enumerate(_ARPEGGIO + (E6,))),
    SoundCue.GAME_OVER: tuple(
        Note(f, 0.4, "sawtooth", start=i * 0.2) for i, f in enumerate((392.0, 349.23, 293.66, 261.63))
    ),
    SoundCue.CORRECT: tuple(Note(f, 0.25, "triangle", 0.35, i * 0.08) for i, f in enumerate((E5, G5, C6))),
    SoundCue.WRONG: (Note(150, 0.4, "sawtooth"),),
    SoundCue.HIGH_SCORE: tuple(
        Note(f, 0.25, "triangle", 0.35, i * 0.15) for i, f in enumerate(_ARPEGGIO + (G5, C6, E6))
    ),
    SoundCue.CLICK: (Note(400, 0.05, gain=0.06),),
    SoundCue.PAUSE: (Note(600, 0.1, "triangle", 0.2, end_freq=300),),
    SoundCue.RESUME: (Note(300, 0.1, "triangle", 0.2, end_freq=600),),
    SoundCue.TIMER_TICK: (Note(800, 0.03, gain=0.15),),
    SoundCue.URGENT_BEEP: (Note(1200, 0.08, gain=0.25),),
}


def _game_complete() -> Tuple[Note, ...]:
    melody = [(C5, 0.2), (E5, 0.2), (G5, 0.2), (C6, 0.3), (G5, 0.15), (C6, 0.3), (E6, 0.4), (G6, 0.6)]
    notes = []
    t = 0.0
    for i, (freq, duration) in enumerate(melody):
        last = i == len(melody) - 1
        notes.append(Note(freq, duration, "sine" if last else "triangle", 0.5 if last else 0.4, t))
        t += duration * 0.8
    return tuple(notes)


RECIPES[SoundCue.GAME_COMPLETE] = _game_complete()


def line_clear_notes(lines: int) -> Tuple[Note, ...]:
    return tuple(Note(f, 0.15, start=i * 0.08) for i, f in enumerate(_ARPEGGIO[: max(1, min(lines, 4))]))


def _oscillator(wave: str, phase: np.ndarray) -> np.ndarray:
    if wave == "sine":
        return np.sin(phase)
    if wave == "square":
        return np.sign(np.sin(phase))
    if wave == "sawtooth":
        return 2.0 * ((phase / (2 * np.pi)) % 1.0) - 1.0
    if wave == "triangle":
        return 2.0 * np.abs(2.0 * ((phase / (2 * np.pi)) % 1.0) - 1.0) - 1.0
    raise ValueError(f"Unknown waveform: {wave}")


def render_notes(notes: Tuple[Note, ...], sample_rate: int = 44100) -> np.ndarray:
    """Mix ``notes`` into a mono float buffer in [-1, 1]."""
    total = max(n.start + n.duration for n in notes)
    out = np.zeros(int(sample_rate * total) + 1, dtype=np.float64)
    for n in notes:
        count = max(1, int(sample_rate * n.duration))
        t = np.arange(count) / sample_rate
        if n.end_freq is None:
            phase = 2 * np.pi * n.freq * t
        else:
            # Exponential sweep from freq to end_freq over the note
            k = np.log(n.end_freq / n.freq) / n.duration
            phase = 2 * np.pi * n.freq * np.expm1(k * t) / k
        envelope = n.gain * np.power(0.01 / n.gain, t / n.duration)
        offset = int(sample_rate * n.start)
        out[offset: offset + count] += _oscillator(n.wave, phase) * envelope
    return np.clip(out, -1.0, 1.0)


class SynthSoundEffects(SoundEffects):
    """Synthesized chiptune cues played through ``pygame.mixer``."""

    def __init__(self, volume: float = 0.3, enabled: bool = True, sample_rate: int = 44100) -> None:
        super().__init__(volume, enabled)
        self.sample_rate = sample_rate
        self._cache: Dict[Tuple[SoundCue, int], object] = {}
        self._ready = False

    def _ensure_mixer(self) -> bool:
        if self._ready:
            return True
        import pygame

        if not pygame.mixer.get_init():
            try:
                pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=2, buffer=512)
            except pygame.error as exc:
                # No audio device: go quiet for the rest of the session
                logger.warning("Audio disabled, mixer init failed: %s", exc)
                self.enabled = False
                return False
        self._ready = True
        return True

    def _sound(self, cue: SoundCue, lines: int):
        import pygame

        key = (cue, lines if cue == SoundCue.LINE_CLEAR else 0)
        sound = self._cache.get(key)
        if sound is None:
            notes = line_clear_notes(lines) if cue == SoundCue.LINE_CLEAR else RECIPES[cue]
            wave = render_notes(notes, self.sample_rate)
            stereo = np.column_stack((wave, wave))
            sound = pygame.sndarray.make_sound(np.ascontiguousarray((stereo * 32767).astype(np.int16)))
            self._cache[key] = sound
        return sound

    def _play(self, cue: SoundCue, lines: int) -> None:
        if not self._ensure_mixer():
            return
        sound = self._sound(cue, lines)
        sound.set_volume(self.volume)
        sound.play()

"""Sound cues for Quiz Tetris."""

from .sounds import SoundCue, SoundEffects, SilentSoundEffects, SynthSoundEffects

__all__ = [
    "SoundCue",
    "SoundEffects",
    "SilentSoundEffects",
    "SynthSoundEffects",
]

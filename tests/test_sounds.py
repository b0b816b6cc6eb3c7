"""
Tests for sound cue dispatch and synthesis (no audio device needed).
"""

import logging

import numpy as np
import pygame
import pytest

from quiz_tetris.audio.sounds import (
    RECIPES,
    Note,
    SilentSoundEffects,
    SoundCue,
    SoundEffects,
    SynthSoundEffects,
    line_clear_notes,
    render_notes,
)


class ExplodingSoundEffects(SoundEffects):
    def _play(self, cue, lines):
        raise RuntimeError("no audio device")


class TestDispatch:
    def test_silent_effects_record_cues(self):
        sounds = SilentSoundEffects()
        sounds.play(SoundCue.MOVE)
        sounds.play("tetris")
        assert sounds.played == [SoundCue.MOVE, SoundCue.TETRIS]

    def test_disabled_effects_do_nothing(self):
        sounds = SilentSoundEffects(enabled=False)
        sounds.play(SoundCue.LAND)
        assert sounds.played == []

    def test_failures_are_logged_not_raised(self, caplog):
        with caplog.at_level(logging.WARNING, logger="quiz_tetris.audio.sounds"):
            ExplodingSoundEffects().play(SoundCue.CLICK)
        assert "failed" in caplog.text

    def test_volume_is_clamped(self):
        sounds = SilentSoundEffects(volume=3.0)
        assert sounds.volume == 1.0
        sounds.set_volume(-1)
        assert sounds.volume == 0.0


class TestSynthesis:
    def test_every_cue_has_a_recipe(self):
        missing = set(SoundCue) - set(RECIPES)
        assert missing == {SoundCue.LINE_CLEAR}

    @pytest.mark.parametrize("lines, count", [(0, 1), (1, 1), (3, 3), (4, 4), (9, 4)])
    def test_line_clear_arpeggio_length(self, lines, count):
        assert len(line_clear_notes(lines)) == count

    def test_render_is_bounded(self):
        wave = render_notes(RECIPES[SoundCue.GAME_COMPLETE], sample_rate=8000)
        assert wave.ndim == 1
        assert np.all(np.abs(wave) <= 1.0)
        assert np.any(wave != 0)

    def test_render_length_covers_all_notes(self):
        notes = (Note(440, 0.1), Note(880, 0.2, start=0.3))
        assert len(render_notes(notes, sample_rate=1000)) == 501

    def test_sweep_renders(self):
        wave = render_notes(RECIPES[SoundCue.ROTATE], sample_rate=8000)
        assert np.isfinite(wave).all()

    def test_cue_names(self):
        assert {cue.value for cue in SoundCue} == {
            "move", "rotate", "land", "hard_drop", "line_clear", "tetris", "game_over",
            "correct", "wrong", "game_complete", "high_score", "click", "pause", "resume",
            "timer_tick", "urgent_beep",
        }


class TestSynthMixer:
    def test_failed_mixer_init_disables_audio_once(self, monkeypatch, caplog):
        attempts = []

        def broken_init(**kwargs):
            attempts.append(kwargs)
            raise pygame.error("no audio device")

        monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
        monkeypatch.setattr(pygame.mixer, "init", broken_init)
        sounds = SynthSoundEffects()
        with caplog.at_level(logging.WARNING, logger="quiz_tetris.audio.sounds"):
            for cue in (SoundCue.MOVE, SoundCue.ROTATE, SoundCue.LAND):
                sounds.play(cue)
        assert len(attempts) == 1
        assert not sounds.enabled
        warnings = [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].exc_info is None

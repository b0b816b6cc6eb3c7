"""
Tests for keyboard handling and the display helpers that need no window.
"""

import asyncio
from dataclasses import replace

import pygame
import pytest

from quiz_tetris.game import GamePhase
from quiz_tetris.visualization.human_play import KeyboardController
from quiz_tetris.visualization.renderer import format_time


async def settle():
    for _ in range(3):
        await asyncio.sleep(0)


class TestKeyboardController:
    def test_enter_starts_and_answers(self, make_session):
        async def scenario():
            session = make_session()
            controller = KeyboardController(session)
            controller.handle_key(pygame.K_RETURN)
            await settle()
            assert session.phase == GamePhase.QUESTION
            assert session.current_question is not None

            answer_key = pygame.K_1 + session.current_question.correct_index
            controller.handle_key(answer_key)
            assert controller.selected == session.current_question.correct_index
            controller.handle_key(pygame.K_RETURN)
            await settle()
            assert session.phase == GamePhase.PLAYING
            assert session.state.score == 300
            session.shutdown()

        asyncio.run(scenario())

    def test_enter_without_selection_does_nothing(self, make_session):
        async def scenario():
            session = make_session()
            await session.start()
            KeyboardController(session).handle_key(pygame.K_RETURN)
            await settle()
            assert session.questions_answered == 0
            session.shutdown()

        asyncio.run(scenario())

    def test_arrows_move_piece_and_p_pauses(self, make_session):
        async def scenario():
            session = make_session()
            await session.start()
            await session.submit_answer(session.current_question.correct_index)
            controller = KeyboardController(session)
            x = session.state.current_piece.x
            controller.handle_key(pygame.K_LEFT)
            assert session.state.current_piece.x == x - 1
            controller.handle_key(pygame.K_p)
            controller.handle_key(pygame.K_RIGHT)
            assert session.state.current_piece.x == x - 1
            controller.handle_key(pygame.K_r)
            assert session.phase == GamePhase.MENU
            session.shutdown()

        asyncio.run(scenario())

    def test_name_entry_on_game_over(self, make_session):
        session = make_session()
        session.phase = GamePhase.GAME_OVER
        session.state = replace(session.state, score=700, game_over=True)
        controller = KeyboardController(session)
        controller.sync()
        assert controller.name_entry == ""
        controller.handle_key(pygame.K_a, "A")
        controller.handle_key(pygame.K_d, "d")
        controller.handle_key(pygame.K_x, "x")
        controller.handle_key(pygame.K_BACKSPACE)
        assert controller.name_entry == "Ad"
        controller.handle_key(pygame.K_RETURN)
        assert controller.name_entry is None
        top = session.leaderboard.list_top_scores()
        assert [(e.player_name, e.score) for e in top] == [("Ad", 700)]

    def test_name_is_capped(self, make_session):
        session = make_session()
        session.phase = GamePhase.GAME_COMPLETE
        controller = KeyboardController(session)
        controller.sync()
        for _ in range(20):
            controller.handle_key(pygame.K_z, "z")
        assert len(controller.name_entry) == 12

    def test_key_that_reaches_end_screen_first_is_not_typed(self, make_session):
        session = make_session()
        session.phase = GamePhase.GAME_OVER
        controller = KeyboardController(session)
        controller.handle_key(pygame.K_r, "r")
        assert controller.name_entry == ""
        assert session.phase == GamePhase.GAME_OVER
        controller.handle_key(pygame.K_RETURN)
        assert [e.player_name for e in session.leaderboard.list_top_scores()] == ["Anonymous"]

    def test_escape_skips_saving_then_r_plays_again(self, make_session):
        async def scenario():
            session = make_session()
            session.phase = GamePhase.GAME_OVER
            session.state = replace(session.state, game_over=True)
            controller = KeyboardController(session)
            controller.sync()
            controller.handle_key(pygame.K_ESCAPE)
            assert controller.name_entry is None
            controller.handle_key(pygame.K_r, "r")
            await settle()
            assert session.phase == GamePhase.QUESTION
            assert session.leaderboard.list_top_scores() == []
            session.shutdown()

        asyncio.run(scenario())

    def test_non_qualifying_score_goes_straight_to_play_again(self, make_session):
        async def scenario():
            session = make_session()
            for score in range(100, 1100, 100):
                session.leaderboard.record_score("p", score, 1, 0)
            session.phase = GamePhase.GAME_COMPLETE
            session.state = replace(session.state, score=50)
            controller = KeyboardController(session)
            controller.sync()
            assert controller.name_entry is None
            controller.handle_key(pygame.K_r, "r")
            await settle()
            assert session.phase == GamePhase.QUESTION
            assert len(session.leaderboard.list_top_scores()) == 10
            session.shutdown()

        asyncio.run(scenario())

    def test_prompt_reopens_after_the_next_run_ends(self, make_session):
        async def scenario():
            session = make_session()
            session.phase = GamePhase.GAME_OVER
            controller = KeyboardController(session)
            controller.sync()
            controller.handle_key(pygame.K_ESCAPE)
            controller.handle_key(pygame.K_r)
            await settle()
            session.phase = GamePhase.GAME_OVER
            controller.sync()
            assert controller.name_entry == ""
            session.shutdown()

        asyncio.run(scenario())


class TestFormatTime:
    @pytest.mark.parametrize("seconds, text", [(0, "00:00"), (59, "00:59"), (61, "01:01"), (3600, "60:00")])
    def test_minutes_and_seconds(self, seconds, text):
        assert format_time(seconds) == text

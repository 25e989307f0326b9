# Area: Local Play Tests
"""Tests for LocalGame."""

import random
from unittest.mock import Mock

import pytest

from rps_lobby.local_game import LocalGame, RoundResult
from rps_lobby.players import AiPlayer, PseudoPlayer


def scripted(name, rules, *choices):
    """A PseudoPlayer whose get_choice() replays ``choices``."""
    player = PseudoPlayer(name, rules)
    queue = list(choices)

    def next_choice():
        player.set_choice(queue.pop(0))
        return PseudoPlayer.get_choice(player)

    player.get_choice = next_choice
    return player


class TestLocalGame:

    def test_duplicate_names_rejected(self, classic_rules):
        with pytest.raises(ValueError):
            LocalGame(classic_rules, [PseudoPlayer("Zach", classic_rules),
                                      PseudoPlayer("Zach", classic_rules)])

    def test_play_round_scores_winner(self, classic_rules):
        zach = scripted("Zach", classic_rules, "Rock")
        robot = scripted("Robot 1", classic_rules, "Scissors")
        game = LocalGame(classic_rules, [zach, robot])

        result = game.play_round()

        assert result == RoundResult({"Zach": "Rock", "Robot 1": "Scissors"}, "Zach")
        assert zach.score == 1
        assert robot.score == 0
        assert game.rounds_played == 1

    def test_tie(self, classic_rules):
        a = scripted("a", classic_rules, "Rock")
        b = scripted("b", classic_rules, "Rock")
        result = LocalGame(classic_rules, [a, b]).play_round()
        assert result.is_tie
        assert a.score == b.score == 0

    def test_ai_choices_are_valid(self, fire_rules):
        rng = random.Random(3)
        players = [AiPlayer(i, fire_rules, rng=rng) for i in (1, 2, 3)]
        game = LocalGame(fire_rules, players)
        for _ in range(20):
            result = game.play_round()
            assert set(result.choices.values()) <= set(fire_rules.choices())
        assert sum(score for _, score in game.scoreboard()) <= 20

    def test_run_until_declined(self, classic_rules):
        zach = scripted("Zach", classic_rules, "Paper", "Paper")
        robot = scripted("Robot 1", classic_rules, "Rock", "Paper")
        game = LocalGame(classic_rules, [zach, robot])
        ask_again = Mock(side_effect=[True, False])
        lines = []

        scoreboard = game.run(ask_again, output_fn=lines.append)

        assert scoreboard == [("Zach", 1), ("Robot 1", 0)]
        assert "Zach picked Paper" in lines
        assert "Zach wins!" in lines
        assert "It was a tie!" in lines
        assert lines[-2:] == ["Zach had a score of 1", "Robot 1 had a score of 0"]
        assert ask_again.call_count == 2

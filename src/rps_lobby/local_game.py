# Area: Local Play
"""
rps_lobby.local_game — Single-process game
==========================================

Plays rounds between players that all live in this process (a human
at the terminal and any number of AI players). The networked
equivalent is the session layer; this loop asks each player for a
choice in turn instead of waiting for submissions.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .players import Player
from .rules import RuleGraph

logger = logging.getLogger("rps_lobby.local_game")


@dataclass
class RoundResult:
    """Outcome of one local round. ``winner`` is None for a tie."""
    choices: Dict[str, str]
    winner: Optional[str] = None

    @property
    def is_tie(self) -> bool:
        return self.winner is None


class LocalGame:
    """An RPS-style game between in-process players."""

    def __init__(self, rules: RuleGraph, players: Sequence[Player]):
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise ValueError(f"Player names must be unique: {names}")
        self.rules = rules
        self.players = list(players)
        self.rounds_played = 0

    def play_round(self) -> RoundResult:
        """Gather every player's choice, resolve, and score the winner."""
        choices = [player.get_choice() for player in self.players]

        winner_idx = self.rules.resolve(choices)
        winner = self.players[winner_idx] if winner_idx is not None else None
        if winner is not None:
            winner.score += 1
        self.rounds_played += 1

        result = RoundResult(
            choices={p.name: c for p, c in zip(self.players, choices)},
            winner=winner.name if winner else None,
        )
        logger.debug(f"Local round {self.rounds_played}: {result}")
        return result

    def scoreboard(self) -> List[Tuple[str, int]]:
        return [(player.name, player.score) for player in self.players]

    def run(self, ask_again: Callable[[], bool],
            output_fn: Callable[[str], None] = print) -> List[Tuple[str, int]]:
        """
        Play rounds until ``ask_again`` returns False, printing each one.

        Returns:
            The final scoreboard
        """
        while True:
            result = self.play_round()

            output_fn("")
            for name, choice in result.choices.items():
                output_fn(f"{name} picked {choice}")
            output_fn("")
            output_fn("It was a tie!" if result.is_tie else f"{result.winner} wins!")
            output_fn("")

            if not ask_again():
                break

        output_fn("")
        for name, score in self.scoreboard():
            output_fn(f"{name} had a score of {score}")
        return self.scoreboard()

# Area: Rules
"""
rps_lobby.rules — The rules of a Rock-Paper-Scissors-style game
================================================================

The rules consist of two components: the choices a player can make
(e.g. "Rock") and the hierarchy between them (e.g. "Rock beats
Scissors"). The hierarchy is a directed graph that must never contain
a self-loop or a contradicting pair of edges. It does not have to be
transitive or total: "Fire" beating everything while Rock, Paper and
Scissors cycle is a valid game.

Serialized form (used on the wire and in rule files):

    {"Rock": ["Scissors"], "Paper": ["Rock"], "Scissors": ["Paper"]}
"""

from __future__ import annotations
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from .errors import InvalidRuleError

_RULE_PATTERN = re.compile(r"^\s*(\S+)\s+beats\s+(\S+)\s*$", re.IGNORECASE)

_board_adapter: TypeAdapter = TypeAdapter(Dict[str, List[str]])


@dataclass(frozen=True)
class Rule:
    """A single edge of the rule graph: ``beater`` beats ``beaten``."""
    beater: str
    beaten: str

    def __str__(self) -> str:
        return f"{self.beater} beats {self.beaten}"


def parse_rule(text: str) -> Rule:
    """
    Parse a rule written as ``"X beats Y"``.

    Raises
    ------
    InvalidRuleError
        If the text does not follow the format.
    """
    match = _RULE_PATTERN.match(text)
    if not match:
        raise InvalidRuleError(f"expected 'X beats Y', got {text!r}")
    return Rule(beater=match.group(1), beaten=match.group(2))


class RuleGraph:
    """
    Choices plus the directed "beats" relation between them.

    Choices and each choice's beaten list keep insertion order, so
    iteration (and therefore serialization and AI picks seeded with a
    fixed RNG) is deterministic.
    """

    def __init__(self):
        self._board: Dict[str, List[str]] = {}

    # ── Construction / serialization ─────────────────────────

    @classmethod
    def from_dict(cls, board: Any) -> "RuleGraph":
        """
        Build a graph from its serialized mapping.

        The mapping must be choice -> list of beaten choices. Every edge
        goes through add_rule, so a mapping containing a self-loop or a
        contradiction raises InvalidRuleError.
        """
        try:
            board = _board_adapter.validate_python(board)
        except ValidationError as e:
            raise InvalidRuleError(
                f"rules must map each choice to a list of choices "
                f"({e.error_count()} error(s))"
            )

        graph = cls()
        for beater, beaten_list in board.items():
            graph.add_choice(beater)
            for beaten in beaten_list:
                graph.add_rule(beater, beaten)
        return graph

    @classmethod
    def from_json(cls, text: str) -> "RuleGraph":
        data = json.loads(text) if text else {}
        if not isinstance(data, dict):
            raise InvalidRuleError("rules must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def classic(cls) -> "RuleGraph":
        """Plain Rock-Paper-Scissors."""
        graph = cls()
        graph.add_rule("Rock", "Scissors")
        graph.add_rule("Scissors", "Paper")
        graph.add_rule("Paper", "Rock")
        return graph

    def to_dict(self) -> Dict[str, List[str]]:
        return {choice: list(beaten) for choice, beaten in self._board.items()}

    def to_json(self) -> str:
        return json.dumps(self._board)

    def copy(self) -> "RuleGraph":
        graph = RuleGraph()
        graph._board = self.to_dict()
        return graph

    # ── Choices ──────────────────────────────────────────────

    def choices(self) -> List[str]:
        """The choices a player can make, in insertion order."""
        return list(self._board)

    def add_choice(self, name: str) -> None:
        """Add a choice. Does nothing if it already exists."""
        if name in self._board:
            return
        self._board[name] = []

    def del_choice(self, name: str) -> None:
        """Delete a choice and every rule that mentions it."""
        if name not in self._board:
            return

        for choice in self._board:
            self._board[choice] = [c for c in self._board[choice] if c != name]

        del self._board[name]

    # ── Rules ────────────────────────────────────────────────

    def rules(self) -> List[Rule]:
        return [
            Rule(beater, beaten)
            for beater, beaten_list in self._board.items()
            for beaten in beaten_list
        ]

    def add_rule(self, beater: str, beaten: str) -> None:
        """
        Add the rule ``beater`` beats ``beaten``.

        Missing choices are created. Adding an existing rule is a no-op.

        Raises
        ------
        InvalidRuleError
            If beater and beaten are the same, or if the contradicting
            rule (beaten beats beater) already exists. The graph is left
            untouched in both cases.
        """
        if beater == beaten:
            raise InvalidRuleError(
                "cannot create rule where beater and beaten are the same"
            )

        if self.beats(beaten, beater):
            raise InvalidRuleError(
                f"contradicting rule {beaten} > {beater} exists"
            )

        self.add_choice(beater)
        self.add_choice(beaten)

        if beaten in self._board[beater]:
            return

        self._board[beater].append(beaten)

    def del_rule(self, beater: str, beaten: str) -> None:
        """Delete a rule. Does nothing if it does not exist."""
        if beater not in self._board:
            return
        self._board[beater] = [c for c in self._board[beater] if c != beaten]

    def beats(self, beater: str, beaten: str) -> bool:
        return beaten in self._board.get(beater, ())

    def loses_against(self, choice: str) -> List[str]:
        """
        The choices that ``choice`` beats.

        An unknown choice beats nothing, so an empty list is returned.
        """
        return list(self._board.get(choice, ()))

    # ── Resolution ───────────────────────────────────────────

    def resolve(self, choices: Sequence[str]) -> Optional[int]:
        """
        Find the winner of a round of simultaneous choices.

        A choice wins only if it beats every other choice in the round.
        Candidates are checked in input order and the first one that
        qualifies wins. Identical choices never beat each other, so a
        round of one repeated choice is a tie unless it has a single
        entry.

        Returns
        -------
        Optional[int]
            Index of the winning choice, or None for a tie.
        """
        for i, candidate in enumerate(choices):
            beaten = self._board.get(candidate, ())
            for j, other in enumerate(choices):
                if i == j:
                    continue
                if other not in beaten:
                    break
            else:
                return i

        return None

    # ── Dunder helpers ───────────────────────────────────────

    def __contains__(self, choice: object) -> bool:
        return choice in self._board

    def __len__(self) -> int:
        return len(self._board)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleGraph):
            return NotImplemented
        return self._board == other._board

    def __repr__(self) -> str:
        return f"RuleGraph({self._board!r})"

# Area: Players
"""
rps_lobby.players — Sources of choices
=======================================

Every player exposes a single capability, ``get_choice()``. The
session layer only ever depends on that capability, never on the
concrete variant:

- AiPlayer: picks uniformly at random from the live choice set.
- PseudoPlayer: returns a choice that was set from outside (e.g. by a
  network submission). Each get_choice() needs its own set_choice().
- InteractivePlayer: blocks, prompting until a valid choice is typed.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .errors import AlreadySubmittedError, ChoiceUnsetError, InvalidChoiceError
from .rules import RuleGraph


class Player(ABC):
    """
    A player of an RPS-style game.

    Attributes:
        name: Display name, unique within a game
        rules: The live rule graph (choices may change between rounds)
        score: Number of rounds won
    """

    def __init__(self, name: str, rules: RuleGraph):
        self.name = name
        self.rules = rules
        self.score = 0

    @abstractmethod
    def get_choice(self) -> str:
        """Return the choice the player makes this round (e.g. "Rock")."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, score={self.score})"


class AiPlayer(Player):
    """A computer player picking uniformly at random."""

    def __init__(self, number: int, rules: RuleGraph,
                 rng: Optional[random.Random] = None):
        super().__init__(f"Robot {number}", rules)
        self._rng = rng or random.Random()

    def get_choice(self) -> str:
        choices = self.rules.choices()
        if not choices:
            raise InvalidChoiceError("no choices available")
        return self._rng.choice(choices)


class ChoiceSlot:
    """
    Holds at most one pending choice.

    Two states: empty, or pending with a value. ``submit`` moves
    empty -> pending, ``consume`` moves pending -> empty and returns the
    value. Any other move is a protocol violation and raises.
    """

    def __init__(self):
        self._choice: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._choice is not None

    def submit(self, choice: str) -> None:
        if self._choice is not None:
            raise AlreadySubmittedError()
        self._choice = choice

    def consume(self) -> str:
        if self._choice is None:
            raise ChoiceUnsetError()
        choice, self._choice = self._choice, None
        return choice

    def clear(self) -> None:
        self._choice = None


class PseudoPlayer(Player):
    """
    A player whose choice is set by an external source.

    Useful when the choice arrives asynchronously (over the network, from
    a UI callback) rather than being produced by the player itself. It is
    up to the caller to make sure the choice is valid for the rules.
    """

    def __init__(self, name: str, rules: RuleGraph):
        super().__init__(name, rules)
        self._slot = ChoiceSlot()

    @property
    def has_choice(self) -> bool:
        return self._slot.pending

    def set_choice(self, choice: str) -> None:
        """
        Set the choice returned by the next get_choice call.

        Raises:
            AlreadySubmittedError: If a choice is already pending
        """
        self._slot.submit(choice)

    def get_choice(self) -> str:
        """
        Consume the pending choice.

        Raises:
            ChoiceUnsetError: If no choice was set since the last call
        """
        return self._slot.consume()

    def clear_choice(self) -> None:
        self._slot.clear()


class InteractivePlayer(Player):
    """A human at a terminal. get_choice blocks until a valid answer."""

    def __init__(self, name: str, rules: RuleGraph,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        super().__init__(name, rules)
        self._input = input_fn
        self._output = output_fn

    def get_choice(self) -> str:
        while True:
            choices = self.rules.choices()
            if not choices:
                raise InvalidChoiceError("no choices available")
            self._output(f"Hello {self.name}! Choose one of {', '.join(choices)}!")
            choice = self._input("Choice: ").strip()
            if choice in choices:
                return choice

"""
rps_lobby.errors — Custom exception classes
============================================

Defines the exception hierarchy for rule edits and session protocol
violations. Each exception carries the human-readable message that is
sent back to the offending connection inside an ``error`` frame.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ._shared.messages import ErrorMessage


class RpsLobbyError(Exception):
    """Base exception for all rps_lobby errors."""

    default_message = "error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_message(self) -> "ErrorMessage":
        """Build the wire ``error`` frame for this error."""
        from ._shared.messages import ErrorMessage
        return ErrorMessage(message=self.message)


class InvalidRuleError(RpsLobbyError):
    """Raised for a self-beating or contradictory rule."""

    default_message = "invalid rule"

    def __init__(self, message: Optional[str] = None):
        super().__init__(f"Invalid rule: {message}" if message else None)


class GameNotOpenError(RpsLobbyError):
    """Raised when a join or start arrives while a round is in flight."""

    default_message = "game is not open"


class GameNotStartedError(RpsLobbyError):
    """Raised when a choice is submitted outside a round."""

    default_message = "the game has not started"


class NotEnoughPlayersError(RpsLobbyError):
    """Raised when the controller starts a round with an empty roster."""

    default_message = "not enough players"


class BadPasswordError(RpsLobbyError):
    """Raised when a join request carries the wrong game password."""

    default_message = "incorrect password"


class NameTakenError(RpsLobbyError):
    """Raised when a game or player name is already in use."""

    default_message = "player with that name already exists"


class NotFoundError(RpsLobbyError):
    """Raised when a join request names an unknown game."""

    default_message = "game does not exist"


class ChoiceUnsetError(RpsLobbyError):
    """Raised when a pending choice is consumed before one was submitted."""

    default_message = "no choice has been submitted"


class AlreadySubmittedError(RpsLobbyError):
    """Raised on a second submission within the same round."""

    default_message = "choice already submitted"


class InvalidChoiceError(RpsLobbyError):
    """Raised when a submitted choice is not part of the rules."""

    default_message = "invalid choice submitted"


class InvalidRequestError(RpsLobbyError):
    """Raised for malformed or out-of-place requests."""

    default_message = "invalid request"

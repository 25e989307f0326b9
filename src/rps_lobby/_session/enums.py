# Area: Session
"""
rps_lobby._session.enums — Session State Machine Enums
======================================================

Defines the states and events of a game session, the roles a
connection can take, and the outcomes of a participant leaving.
"""

from enum import Enum


class SessionState(Enum):
    """
    States of a game session.

    State transitions:
    OPEN -> STARTED (on START_GAME)
    STARTED -> OPEN (on ROUND_RESOLVED)
    OPEN -> CLOSED (on CLOSE)
    STARTED -> CLOSED (on CLOSE)
    """
    OPEN = "open"
    STARTED = "started"
    CLOSED = "closed"


class SessionEvent(Enum):
    """
    Events that trigger state transitions.

    Events are triggered by:
    - START_GAME: controller sent start-game with a non-empty roster
    - ROUND_RESOLVED: every participant submitted a choice
    - CLOSE: controller left, or a participant left mid-round
    """
    START_GAME = "START_GAME"
    ROUND_RESOLVED = "ROUND_RESOLVED"
    CLOSE = "CLOSE"


class Departure(Enum):
    """Outcome of removing a participant from a session."""
    NOT_FOUND = "not_found"
    LEFT = "left"
    SESSION_CLOSED = "session_closed"


class ConnectionRole(Enum):
    """
    Role of one client connection.

    INITIAL -> CONTROLLER (create accepted)
    INITIAL -> PLAYER (join accepted)
    Any role -> CLOSED
    """
    INITIAL = "initial"
    CONTROLLER = "controller"
    PLAYER = "player"
    CLOSED = "closed"

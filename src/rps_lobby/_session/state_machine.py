# Area: Session
"""
rps_lobby._session.state_machine — Session State Machine
=========================================================

Tracks the lifecycle of one game session: open for joins, a round in
flight, or closed for good.
"""

import logging
from typing import Optional

from .enums import SessionEvent, SessionState

logger = logging.getLogger("rps_lobby.session.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    SessionState.OPEN: {
        SessionEvent.START_GAME: SessionState.STARTED,
        SessionEvent.CLOSE: SessionState.CLOSED,
    },
    SessionState.STARTED: {
        SessionEvent.ROUND_RESOLVED: SessionState.OPEN,
        SessionEvent.CLOSE: SessionState.CLOSED,
    },
    SessionState.CLOSED: {},
}


class SessionStateMachine:
    """
    State machine for a session's lifecycle.

    Attributes:
        current_state: The current state of the session
    """

    def __init__(self, name: Optional[str] = None):
        """Initialize state machine in OPEN."""
        self.name = name
        self.current_state = SessionState.OPEN

    def can_transition(self, event: SessionEvent) -> bool:
        """
        Check if a transition is valid from current state.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        return event in TRANSITIONS.get(self.current_state, {})

    def transition(self, event: SessionEvent) -> SessionState:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_state.value}"
            )

        next_state = TRANSITIONS[self.current_state][event]
        logger.debug(
            f"[{self.name}] State: {self.current_state.value} → {next_state.value}"
        )
        self.current_state = next_state
        return next_state

    @property
    def is_open(self) -> bool:
        return self.current_state == SessionState.OPEN

    @property
    def is_started(self) -> bool:
        return self.current_state == SessionState.STARTED

    @property
    def is_closed(self) -> bool:
        return self.current_state == SessionState.CLOSED

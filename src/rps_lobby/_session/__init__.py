# Area: Session
"""
Multiplayer session layer.

This package contains:
- The session state machine
- Session (one hosted game) and its remote participants
- The registry of active games
- Per-connection request routing
"""

from .channel import Channel, send_message
from .connection import Connection
from .enums import ConnectionRole, Departure, SessionEvent, SessionState
from .registry import Registry
from .session import RemotePlayer, Session
from .state_machine import SessionStateMachine

__all__ = [
    "Channel",
    "send_message",
    "Connection",
    "ConnectionRole",
    "Departure",
    "SessionEvent",
    "SessionState",
    "Registry",
    "RemotePlayer",
    "Session",
    "SessionStateMachine",
]

# Area: Shared
"""
Shared utilities used by the session layer, the server and the CLI.

This package contains:
- Wire message schemas
- Logging configuration
"""

from .logging_config import setup_logging
from .messages import (
    ChoicePrompt,
    CreateRequest,
    ErrorMessage,
    JoinRequest,
    JoinResponse,
    MakeChoiceRequest,
    NotifyJoin,
    NotifyLeave,
    PlayerListRequest,
    PlayerListResponse,
    Results,
    StartGameRequest,
    decode_client_message,
    encode_message,
)

__all__ = [
    "setup_logging",
    "ChoicePrompt",
    "CreateRequest",
    "ErrorMessage",
    "JoinRequest",
    "JoinResponse",
    "MakeChoiceRequest",
    "NotifyJoin",
    "NotifyLeave",
    "PlayerListRequest",
    "PlayerListResponse",
    "Results",
    "StartGameRequest",
    "decode_client_message",
    "encode_message",
]

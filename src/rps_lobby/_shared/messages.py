# Area: Shared
"""
rps_lobby._shared.messages — Wire message schemas
==================================================

Every frame exchanged over a session channel is a JSON object with a
``type`` discriminator. Client requests are parsed with
``decode_client_message``; server messages are encoded with
``encode_message``.

Client → server:  create, join, player-list, start-game, make-choice
Server → client:  join-response, notify-join, notify-leave,
                  player-list-response, choice, results, error
"""

from __future__ import annotations
import json
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


# ══════════════════════════════════════════════════════════════
# CLIENT → SERVER
# ══════════════════════════════════════════════════════════════

class CreateRequest(BaseModel):
    """Create a game; the sending connection becomes its controller."""
    type: Literal["create"] = "create"
    name: str = Field(min_length=1)
    password: Optional[str] = None
    rules: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("rules", mode="before")
    @classmethod
    def _decode_rules_string(cls, value):
        # Older clients send the rules as a JSON-encoded string
        if isinstance(value, str):
            return json.loads(value) if value else {}
        return value


class JoinRequest(BaseModel):
    """Join an existing game as a participant."""
    type: Literal["join"] = "join"
    player_name: str = Field(min_length=1)
    game_name: str = Field(min_length=1)
    game_password: Optional[str] = None


class PlayerListRequest(BaseModel):
    type: Literal["player-list"] = "player-list"


class StartGameRequest(BaseModel):
    type: Literal["start-game"] = "start-game"


class MakeChoiceRequest(BaseModel):
    type: Literal["make-choice"] = "make-choice"
    choice: str


ClientMessage = Annotated[
    Union[
        CreateRequest,
        JoinRequest,
        PlayerListRequest,
        StartGameRequest,
        MakeChoiceRequest,
    ],
    Field(discriminator="type"),
]

_client_adapter: TypeAdapter = TypeAdapter(ClientMessage)


# ══════════════════════════════════════════════════════════════
# SERVER → CLIENT
# ══════════════════════════════════════════════════════════════

class ErrorMessage(BaseModel):
    """Sent to the offending connection only."""
    type: Literal["error"] = "error"
    message: str


class JoinResponse(BaseModel):
    """Sent to a newly joined participant."""
    type: Literal["join-response"] = "join-response"
    rules: Dict[str, List[str]]
    players: List[str]


class NotifyJoin(BaseModel):
    type: Literal["notify-join"] = "notify-join"
    name: str


class NotifyLeave(BaseModel):
    type: Literal["notify-leave"] = "notify-leave"
    name: str


class PlayerListResponse(BaseModel):
    type: Literal["player-list-response"] = "player-list-response"
    players: List[str]


class ChoicePrompt(BaseModel):
    """Asks every participant to submit a choice for the new round."""
    type: Literal["choice"] = "choice"


class Results(BaseModel):
    """Outcome of a round. ``winner`` is None for a tie."""
    type: Literal["results"] = "results"
    choices: Dict[str, str]
    winner: Optional[str] = None


ServerMessage = Union[
    ErrorMessage,
    JoinResponse,
    NotifyJoin,
    NotifyLeave,
    PlayerListResponse,
    ChoicePrompt,
    Results,
]


# ══════════════════════════════════════════════════════════════
# PUBLIC API
# ══════════════════════════════════════════════════════════════

def decode_client_message(raw: Union[str, bytes]):
    """
    Parse a raw client frame into its request model.

    Raises
    ------
    pydantic.ValidationError
        If the frame is not valid JSON or matches no request schema.
    """
    return _client_adapter.validate_json(raw)


def encode_message(message: BaseModel) -> str:
    """Serialize a message model into a JSON text frame."""
    return message.model_dump_json()

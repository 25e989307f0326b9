"""
rps_lobby — Rock-Paper-Scissors-style games with custom rules
=============================================================

Quick Start (local game):
    from rps_lobby import RuleGraph, AiPlayer, LocalGame
    rules = RuleGraph.classic()
    rules.add_rule("Fire", "Rock")
    game = LocalGame(rules, [AiPlayer(1, rules), AiPlayer(2, rules)])
    game.play_round()

Multiplayer server:
    rps-lobby serve --port 8080

Two layers:
1. Rules - RuleGraph (choices + "beats" relation) and the players
2. Sessions - Registry of hosted games, joined over WebSockets
"""

__version__ = "1.0.0"

from .rules import Rule, RuleGraph, parse_rule
from .players import (
    AiPlayer,
    ChoiceSlot,
    InteractivePlayer,
    Player,
    PseudoPlayer,
)
from .local_game import LocalGame, RoundResult
from ._session import (
    Connection,
    Departure,
    Registry,
    RemotePlayer,
    Session,
    SessionState,
)
from .errors import (
    RpsLobbyError,
    InvalidRuleError,
    GameNotOpenError,
    GameNotStartedError,
    NotEnoughPlayersError,
    BadPasswordError,
    NameTakenError,
    NotFoundError,
    ChoiceUnsetError,
    AlreadySubmittedError,
    InvalidChoiceError,
    InvalidRequestError,
)

__all__ = [
    # Rules
    "Rule",
    "RuleGraph",
    "parse_rule",
    # Players
    "AiPlayer",
    "ChoiceSlot",
    "InteractivePlayer",
    "Player",
    "PseudoPlayer",
    "LocalGame",
    "RoundResult",
    # Sessions
    "Connection",
    "Departure",
    "Registry",
    "RemotePlayer",
    "Session",
    "SessionState",
    # Errors
    "RpsLobbyError",
    "InvalidRuleError",
    "GameNotOpenError",
    "GameNotStartedError",
    "NotEnoughPlayersError",
    "BadPasswordError",
    "NameTakenError",
    "NotFoundError",
    "ChoiceUnsetError",
    "AlreadySubmittedError",
    "InvalidChoiceError",
    "InvalidRequestError",
]
__author__ = "RPS Lobby contributors"

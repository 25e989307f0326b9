# Area: Session
"""
rps_lobby._session.session — One hosted game
============================================

A session owns the rules, the controller's channel and the roster of
remote participants. It handles join/leave, starts rounds, collects
the simultaneous choices and broadcasts the outcome.

All methods run to completion without waiting on any participant: the
reveal check after each submission is a poll, not a wait.
"""

from __future__ import annotations
import hmac
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel

from ..errors import (
    AlreadySubmittedError,
    BadPasswordError,
    GameNotOpenError,
    GameNotStartedError,
    InvalidChoiceError,
    InvalidRequestError,
    NameTakenError,
    NotEnoughPlayersError,
    RpsLobbyError,
)
from ..players import PseudoPlayer
from ..rules import RuleGraph
from .._shared.messages import (
    ChoicePrompt,
    JoinResponse,
    MakeChoiceRequest,
    NotifyJoin,
    NotifyLeave,
    PlayerListRequest,
    PlayerListResponse,
    Results,
    StartGameRequest,
    encode_message,
)
from .channel import Channel, send_message
from .enums import Departure, SessionEvent, SessionState
from .state_machine import SessionStateMachine

logger = logging.getLogger("rps_lobby.session")


class RemotePlayer(PseudoPlayer):
    """A pseudo-player whose choices arrive over a channel."""

    def __init__(self, name: str, rules: RuleGraph, channel: Channel):
        super().__init__(name, rules)
        self.channel = channel


class Session:
    """
    An active game.

    Attributes:
        name: Game name, unique within the registry
        rules: The rule graph used to resolve rounds
        controller: The channel of the connection that created the game
        players: Roster in join order
    """

    def __init__(self, name: str, controller: Channel, rules: RuleGraph,
                 password: Optional[str] = None):
        self.name = name
        self.controller = controller
        self.rules = rules
        self.password = password
        self.players: Dict[str, RemotePlayer] = {}
        self.state_machine = SessionStateMachine(name)
        self.rounds_played = 0

    @property
    def state(self) -> SessionState:
        return self.state_machine.current_state

    def player_names(self) -> List[str]:
        return list(self.players)

    # ── Roster ───────────────────────────────────────────────

    def add_player(self, player_name: str, channel: Channel,
                   password: Optional[str] = None) -> RemotePlayer:
        """
        Add a participant to the game.

        Raises:
            GameNotOpenError: If a round is in flight or the game is closed
            BadPasswordError: If the game has a password and it does not match
            NameTakenError: If a participant already uses the name

        The roster is unchanged when an error is raised; the caller is
        expected to report it and close the connection.
        """
        if not self.state_machine.is_open:
            raise GameNotOpenError()

        if self.password and not hmac.compare_digest(
            self.password.encode(), (password or "").encode()
        ):
            raise BadPasswordError()

        if player_name in self.players:
            raise NameTakenError()

        player = RemotePlayer(player_name, self.rules, channel)
        self.players[player_name] = player
        logger.info(f"[{self.name}] {player_name} joined "
                    f"({len(self.players)} player(s))",
                    extra=self._log_extra(player_name))

        self._send(channel, JoinResponse(
            rules=self.rules.to_dict(), players=self.player_names(),
        ))
        self._broadcast(NotifyJoin(name=player_name), exclude=player_name)
        return player

    def remove_player(self, player_name: str) -> Departure:
        """
        Remove a participant whose connection went away.

        A departure while a round is in flight invalidates the round and
        closes the whole session.
        """
        if player_name not in self.players:
            return Departure.NOT_FOUND

        if not self.state_machine.is_open:
            logger.warning(f"[{self.name}] {player_name} left mid-round, "
                           "closing game",
                           extra=self._log_extra(player_name))
            self.close()
            return Departure.SESSION_CLOSED

        del self.players[player_name]
        logger.info(f"[{self.name}] {player_name} left",
                    extra=self._log_extra(player_name))
        self._broadcast(NotifyLeave(name=player_name))
        return Departure.LEFT

    # ── Requests ─────────────────────────────────────────────

    def controller_request(self, request: BaseModel) -> None:
        """Handle a request from the controller; errors go back to it."""
        try:
            if isinstance(request, PlayerListRequest):
                self._send_player_list(self.controller)
            elif isinstance(request, StartGameRequest):
                self.start_game()
            else:
                raise InvalidRequestError()
        except RpsLobbyError as e:
            logger.info(f"[{self.name}] Controller request rejected: {e.message}",
                        extra=self._log_extra())
            self._send(self.controller, e.to_message())

    def player_request(self, player_name: str, request: BaseModel) -> None:
        """Handle a request from a participant; errors go back to it."""
        player = self.players.get(player_name)
        if player is None:
            logger.debug(f"[{self.name}] Request from unknown player {player_name}",
                         extra=self._log_extra(player_name))
            return

        try:
            if isinstance(request, PlayerListRequest):
                self._send_player_list(player.channel)
            elif isinstance(request, MakeChoiceRequest):
                self.make_choice(player_name, request.choice)
            else:
                raise InvalidRequestError()
        except RpsLobbyError as e:
            logger.info(f"[{self.name}] Request from {player_name} rejected: "
                        f"{e.message}",
                        extra=self._log_extra(player_name))
            self._send(player.channel, e.to_message())

    # ── Round lifecycle ──────────────────────────────────────

    def start_game(self) -> None:
        """
        Start a round: prompt every participant for a choice.

        Raises:
            GameNotOpenError: If a round is already in flight
            NotEnoughPlayersError: If nobody has joined
        """
        if not self.state_machine.is_open:
            raise GameNotOpenError("game already started")

        if not self.players:
            raise NotEnoughPlayersError()

        self.state_machine.transition(SessionEvent.START_GAME)
        logger.info(f"[{self.name}] Round {self.rounds_played + 1} started "
                    f"with {len(self.players)} player(s)",
                    extra=self._log_extra())

        prompt = encode_message(ChoicePrompt())
        for player in self.players.values():
            self._send_text(player.channel, prompt, player.name)

    def make_choice(self, player_name: str, choice: str) -> Optional[Results]:
        """
        Record a participant's choice and try to reveal the round.

        Raises:
            GameNotStartedError: If no round is in flight
            AlreadySubmittedError: If the participant already chose
            InvalidChoiceError: If the choice is not in the rules

        Returns:
            The round results if this was the last missing choice
        """
        player = self.players[player_name]

        if not self.state_machine.is_started:
            raise GameNotStartedError()

        if player.has_choice:
            raise AlreadySubmittedError()

        if choice not in self.rules:
            raise InvalidChoiceError()

        player.set_choice(choice)
        logger.debug(f"[{self.name}] {player_name} submitted a choice",
                     extra=self._log_extra(player_name))

        return self.attempt_reveal()

    def attempt_reveal(self) -> Optional[Results]:
        """
        Resolve the round once every participant has a pending choice.

        Returns:
            The broadcast results, or None if choices are still missing
        """
        players = list(self.players.values())

        if not all(player.has_choice for player in players):
            return None

        # Consuming clears each pending choice, so check all first
        choices = [player.get_choice() for player in players]

        self.state_machine.transition(SessionEvent.ROUND_RESOLVED)
        self.rounds_played += 1

        winner_idx = self.rules.resolve(choices)
        winner = players[winner_idx] if winner_idx is not None else None
        if winner is not None:
            winner.score += 1

        results = Results(
            choices={player.name: choice for player, choice in zip(players, choices)},
            winner=winner.name if winner else None,
        )
        logger.info(f"[{self.name}] Round {self.rounds_played} resolved: "
                    f"{'tie' if winner is None else winner.name + ' wins'}",
                    extra=self._log_extra())

        self._broadcast(results)
        return results

    # ── Shutdown ─────────────────────────────────────────────

    def close(self) -> None:
        """Close the controller and every participant connection."""
        if self.state_machine.can_transition(SessionEvent.CLOSE):
            self.state_machine.transition(SessionEvent.CLOSE)
            logger.info(f"[{self.name}] Game closed", extra=self._log_extra())

        for player in self.players.values():
            player.clear_choice()

        channels = [self.controller] + [p.channel for p in self.players.values()]
        for channel in channels:
            try:
                channel.close()
            except Exception as e:
                # The peer may already be gone
                logger.debug(f"[{self.name}] Ignoring close error: {e}",
                             extra=self._log_extra())

    # ── Delivery helpers ─────────────────────────────────────

    def _send_player_list(self, channel: Channel) -> None:
        self._send(channel, PlayerListResponse(players=self.player_names()))

    def _broadcast(self, message: BaseModel, exclude: Optional[str] = None) -> None:
        """Send to every participant (minus ``exclude``) and the controller."""
        text = encode_message(message)
        for player in self.players.values():
            if player.name == exclude:
                continue
            self._send_text(player.channel, text, player.name)
        self._send_text(self.controller, text, "controller")

    def _send(self, channel: Channel, message: BaseModel) -> None:
        try:
            send_message(channel, message)
        except Exception as e:
            logger.warning(f"[{self.name}] Failed to send {message.type}: {e}",
                           extra=self._log_extra())

    def _send_text(self, channel: Channel, text: str, recipient: str) -> None:
        try:
            channel.send(text)
        except Exception as e:
            logger.warning(f"[{self.name}] Failed to send to {recipient}: {e}",
                           extra=self._log_extra())

    def _log_extra(self, player_name: Optional[str] = None) -> Dict[str, str]:
        extra = {"game": self.name}
        if player_name is not None:
            extra["player"] = player_name
        return extra

    def __repr__(self) -> str:
        return (f"Session(name={self.name!r}, state={self.state.value}, "
                f"players={self.player_names()!r})")

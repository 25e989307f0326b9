# Area: Session
"""
rps_lobby._session.connection — Per-connection request routing
==============================================================

Every client connection starts in the INITIAL role. Its first frame
must be ``create`` (the connection becomes the game's controller) or
``join`` (it becomes a participant). Anything else is answered with an
``error`` frame and the connection is closed. Later frames are
forwarded to the owning session.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from pydantic import ValidationError

from ..errors import InvalidRequestError, RpsLobbyError
from ..rules import RuleGraph
from .._shared.messages import CreateRequest, JoinRequest, decode_client_message
from .channel import Channel, send_message
from .enums import ConnectionRole, Departure
from .registry import Registry
from .session import Session

logger = logging.getLogger("rps_lobby.connection")


class Connection:
    """
    Routes the frames of one client connection.

    Attributes:
        role: What the connection currently is (controller, player, ...)
        game_name: Name of the owning game once created/joined
        player_name: Participant name for player connections
    """

    def __init__(self, registry: Registry, channel: Channel):
        self.registry = registry
        self.channel = channel
        self.role = ConnectionRole.INITIAL
        self.game_name: Optional[str] = None
        self.player_name: Optional[str] = None
        self.session: Optional[Session] = None

    # ── Inbound ──────────────────────────────────────────────

    def on_message(self, raw: Union[str, bytes]) -> None:
        """Handle one inbound text frame."""
        if self.role == ConnectionRole.CLOSED:
            return

        try:
            request = decode_client_message(raw)
        except ValidationError as e:
            logger.debug(f"Undecodable frame ({self.role.value}): {e}")
            request = None

        if self.role == ConnectionRole.INITIAL:
            self._handle_initial(request)
            return

        session = self._session()
        if session is None:
            return

        if request is None:
            send_message(self.channel, InvalidRequestError().to_message())
            return

        if self.role == ConnectionRole.CONTROLLER:
            session.controller_request(request)
        elif self.role == ConnectionRole.PLAYER:
            session.player_request(self.player_name, request)

    def on_close(self) -> None:
        """Handle the connection going away."""
        role, self.role = self.role, ConnectionRole.CLOSED

        if role == ConnectionRole.CONTROLLER:
            logger.info(f"Controller of {self.game_name} disconnected")
            if self._session() is not None:
                self.registry.destroy(self.game_name)
            return

        if role == ConnectionRole.PLAYER:
            session = self._session()
            if session is None:
                return
            if session.remove_player(self.player_name) == Departure.SESSION_CLOSED:
                self.registry.destroy(self.game_name)

    # ── INITIAL role ─────────────────────────────────────────

    def _handle_initial(self, request) -> None:
        try:
            if isinstance(request, CreateRequest):
                self._create(request)
            elif isinstance(request, JoinRequest):
                self._join(request)
            else:
                raise InvalidRequestError()
        except RpsLobbyError as e:
            logger.info(f"Rejected connection: {e.message}")
            self._reject(e)

    def _create(self, request: CreateRequest) -> None:
        rules = RuleGraph.from_dict(request.rules)
        self.session = self.registry.create(request.name, self.channel, rules,
                                            password=request.password)
        self.role = ConnectionRole.CONTROLLER
        self.game_name = request.name

    def _join(self, request: JoinRequest) -> None:
        self.registry.join(request.game_name, request.player_name,
                           self.channel, password=request.game_password)
        self.session = self.registry.get(request.game_name)
        self.role = ConnectionRole.PLAYER
        self.game_name = request.game_name
        self.player_name = request.player_name

    def _reject(self, error: RpsLobbyError) -> None:
        self.role = ConnectionRole.CLOSED
        try:
            send_message(self.channel, error.to_message())
            self.channel.close()
        except Exception as e:
            logger.debug(f"Ignoring error while rejecting connection: {e}")

    def _session(self) -> Optional[Session]:
        """The owning session, unless it has since been destroyed."""
        if self.session is None or self.registry.get(self.game_name) is not self.session:
            return None
        return self.session

# Area: Session
"""
rps_lobby._session.registry — Active game registry
==================================================

Maps game names to live sessions. The server creates one registry at
startup and hands it to every connection. All mutation happens on the
event loop thread, one message at a time, so no lock is taken.
"""

import logging
from typing import Dict, List, Optional

from ..errors import NameTakenError, NotFoundError
from ..rules import RuleGraph
from .channel import Channel
from .session import RemotePlayer, Session

logger = logging.getLogger("rps_lobby.registry")


class Registry:
    """
    Name → Session mapping for one server process.

    Usage:
        registry = Registry()
        session = registry.create("friday", controller_channel, rules)
        registry.join("friday", "alice", alice_channel)
        registry.destroy("friday")
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._sessions: Dict[str, Session] = {}

    def create(self, name: str, channel: Channel, rules: RuleGraph,
               password: Optional[str] = None) -> Session:
        """
        Create a game and claim its name.

        Raises:
            NameTakenError: If a game with that name is already active
        """
        if name in self._sessions:
            raise NameTakenError("game already exists")

        session = Session(name=name, controller=channel, rules=rules,
                          password=password)
        self._sessions[name] = session
        logger.info(f"Game created: {name} "
                    f"({len(rules)} choice(s), "
                    f"{'password' if password else 'no password'})",
                    extra={"game": name})
        return session

    def join(self, game_name: str, player_name: str, channel: Channel,
             password: Optional[str] = None) -> RemotePlayer:
        """
        Add a participant to a named game.

        Raises:
            NotFoundError: If no game has that name
            GameNotOpenError, BadPasswordError, NameTakenError:
                Propagated from Session.add_player
        """
        session = self._sessions.get(game_name)
        if session is None:
            raise NotFoundError()
        return session.add_player(player_name, channel, password)

    def get(self, name: str) -> Optional[Session]:
        return self._sessions.get(name)

    def destroy(self, name: str) -> Optional[Session]:
        """Release a game name and close its session."""
        session = self._sessions.pop(name, None)
        if session is None:
            return None
        session.close()
        logger.info(f"Game destroyed: {name}", extra={"game": name})
        return session

    def names(self) -> List[str]:
        return list(self._sessions)

    def __contains__(self, name: object) -> bool:
        return name in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

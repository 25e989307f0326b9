# Area: Session
"""
rps_lobby._session.channel — Message channel contract
=====================================================

A channel is one client connection as seen by a session. Sessions call
``send`` and ``close`` synchronously while handling a request, so an
implementation must not block: the WebSocket channel queues frames and
drains them from its own task.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from .._shared.messages import encode_message


@runtime_checkable
class Channel(Protocol):
    """Protocol for a bidirectional client connection."""

    def send(self, text: str) -> None:
        """Queue one text frame for delivery."""
        ...

    def close(self) -> None:
        """Close the connection. Must tolerate being called twice."""
        ...


def send_message(channel: Channel, message: BaseModel) -> None:
    """Encode a message model and send it on a channel."""
    channel.send(encode_message(message))

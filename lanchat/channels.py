"""Thread-safe channels and the managers that fan messages in and out."""

from __future__ import annotations

import queue
from typing import Generic, TypeVar

from .message import Message

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised when sending into a channel whose receiving side is gone."""


class Channel(Generic[T]):
    """An unbounded, thread-safe FIFO that can be closed by its receiver."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[T] = queue.SimpleQueue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> None:
        """Queue an item; raise ChannelClosed if the receiver has gone away."""
        if self._closed:
            raise ChannelClosed("channel is closed")
        self._queue.put(item)

    def try_receive(self) -> T | None:
        """Return the next item without blocking, or None if there is none."""
        if self._closed:
            return None
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        """Mark the receiving side as gone; later sends fail."""
        self._closed = True


class ServerChannelManager:
    """Collects messages from client handlers and broadcasts to all of them."""

    def __init__(self, inbox: Channel[Message] | None = None) -> None:
        self.inbox: Channel[Message] = inbox if inbox is not None else Channel()
        self.senders: list[Channel[Message]] = []

    @property
    def sender(self) -> Channel[Message]:
        """The channel handlers use to reach the server."""
        return self.inbox

    def add_sender(self, channel: Channel[Message]) -> None:
        self.senders.append(channel)

    def receive_message(self) -> Message | None:
        """Non-blocking: the next message from any handler, or None."""
        return self.inbox.try_receive()

    def send_message(self, message: Message) -> None:
        """Send to every handler, dropping those that have disconnected."""
        alive = []
        for channel in self.senders:
            try:
                channel.send(message)
            except ChannelClosed:
                continue
            alive.append(channel)
        self.senders = alive


class ClientChannelManager:
    """Holds the channel that carries typed input lines to the client loop."""

    def __init__(self, channel: Channel[str] | None = None) -> None:
        self.sender: Channel[str] = channel if channel is not None else Channel()

    def receive(self) -> str | None:
        """Non-blocking: the next queued line, or None."""
        return self.sender.try_receive()
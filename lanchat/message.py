"""Chat messages exchanged between the server and its client handlers."""

from __future__ import annotations

import re
from dataclasses import dataclass

_MAX_SENDER_ID = 0xFFFF
_ID_PATTERN = re.compile(r"\+?[0-9]+")


class MessageParseError(ValueError):
    """Raised when a string is not of the form ``"<id> <text>"``."""


def _parse_sender_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw):
        raise MessageParseError(f"invalid sender id: {raw!r}")
    value = int(raw)
    if value > _MAX_SENDER_ID:
        raise MessageParseError(f"sender id out of range: {raw!r}")
    return value


@dataclass(frozen=True)
class Message:
    """A piece of chat text tagged with the id of the connection that sent it."""

    text: str
    sender_id: int

    def __post_init__(self) -> None:
        if not 0 <= self.sender_id <= _MAX_SENDER_ID:
            raise ValueError(
                f"sender_id must be between 0 and {_MAX_SENDER_ID}, got {self.sender_id}"
            )

    @classmethod
    def parse(cls, text: str) -> Message:
        """Build a message from ``"<id> <text>"``."""
        raw_id, sep, content = text.partition(" ")
        if not sep:
            raise MessageParseError(f"missing separator in {text!r}")
        return cls(content, _parse_sender_id(raw_id))

    def __str__(self) -> str:
        return f"{self.sender_id} {self.text}"
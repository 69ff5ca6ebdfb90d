"""Storing and loading the server's socket address in a JSON file."""

from __future__ import annotations

import ipaddress
import json
import re
from pathlib import Path
from typing import Sequence

_PORT_PATTERN = re.compile(r"\+?[0-9]+")


def ensure_file(path: str | Path) -> None:
    """Create an empty file at ``path`` if nothing exists there."""
    path = Path(path)
    if not path.exists():
        print(f"No {str(path)!r} found, attempting to create file...")
        path.touch()
        print("file created!")


def _format_address(address: Sequence) -> str:
    host, port = address[0], int(address[1])
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    ip = ipaddress.ip_address(host)
    if ip.version == 6:
        return f"[{ip}]:{port}"
    return f"{ip}:{port}"


def _parse_address(text: str) -> tuple[str, int]:
    if text.startswith("["):
        host, sep, port = text[1:].partition("]:")
        if not sep:
            raise ValueError(f"invalid socket address: {text!r}")
        ip = ipaddress.IPv6Address(host)
    else:
        host, sep, port = text.rpartition(":")
        if not sep:
            raise ValueError(f"invalid socket address: {text!r}")
        ip = ipaddress.IPv4Address(host)
    if not _PORT_PATTERN.fullmatch(port) or int(port) > 0xFFFF:
        raise ValueError(f"invalid port in socket address: {text!r}")
    return str(ip), int(port)


def write_address(path: str | Path, address: Sequence) -> None:
    """Write ``(host, port)`` to ``path`` as a JSON string, replacing its content."""
    ensure_file(path)
    Path(path).write_text(json.dumps(_format_address(address)), encoding="utf-8")


def read_address(path: str | Path) -> tuple[str, int] | None:
    """Load ``(host, port)`` from ``path``; None if the file is empty.

    Raises ValueError if the content is not a socket address.
    """
    ensure_file(path)
    data = Path(path).read_text(encoding="utf-8")
    if not data:
        return None
    value = json.loads(data)
    if not isinstance(value, str):
        raise ValueError(f"expected a socket address string, got {value!r}")
    return _parse_address(value)
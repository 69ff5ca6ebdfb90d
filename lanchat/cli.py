"""Command line entry point: start a server, a client, or whichever fits."""

from __future__ import annotations

import enum
import sys
from pathlib import Path
from typing import Sequence

from .server import Server, try_connection

_MODE_HELP = "Selecione o modo [server|client|default]"
_JSON_PATH = Path("socket.json")


class InitMode(enum.Enum):
    SERVER = "server"
    CLIENT = "client"
    DEFAULT = "default"


def parse_mode(arg: str) -> InitMode:
    """Map a case-insensitive mode name to an InitMode."""
    try:
        return InitMode(arg.lower())
    except ValueError:
        raise ValueError(_MODE_HELP) from None


def _serve(path: Path) -> None:
    with Server() as server:
        server.serve_forever(path)


def init_on_mode(mode: InitMode, path: str | Path) -> None:
    """Run as server or client depending on the mode and whether a server is up."""
    path = Path(path)
    test_client = try_connection(path)

    if mode is InitMode.SERVER:
        if test_client is not None:
            print("Já há um servidor online")
            test_client.close()
        else:
            _serve(path)
    elif mode is InitMode.CLIENT:
        if test_client is not None:
            test_client.run()
        else:
            print("Não há nenhum servidor ativo!")
    elif test_client is not None:
        test_client.run()
    else:
        _serve(path)


def main(argv: Sequence[str] | None = None) -> int:
    print("Starting")
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        mode = parse_mode(args[0] if args else InitMode.DEFAULT.value)
    except ValueError as exc:
        raise SystemExit(str(exc)) from None
    try:
        init_on_mode(mode, _JSON_PATH)
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
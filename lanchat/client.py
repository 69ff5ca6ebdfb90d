"""Chat client: forwards typed lines to the server and prints what it relays."""

from __future__ import annotations

import socket
import sys
import threading
import time
from pathlib import Path

from .addrfile import read_address
from .channels import Channel, ClientChannelManager

_IDLE_DELAY = 0.005
_RECV_SIZE = 4096


class StreamHandler:
    """Non-blocking line reader and writer over a connected socket."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self.sock.setblocking(False)
        self._buffer = b""
        self.eof = False

    def _fill(self) -> None:
        while not self.eof:
            try:
                chunk = self.sock.recv(_RECV_SIZE)
            except BlockingIOError:
                return
            except OSError:
                self.eof = True
                return
            if not chunk:
                self.eof = True
                return
            self._buffer += chunk

    def read_stream(self) -> str | None:
        """Join the available lines up to a blank line; None if nothing arrived."""
        self._fill()
        parts: list[str] = []
        while True:
            line, sep, rest = self._buffer.partition(b"\n")
            if not sep:
                if self.eof and self._buffer:
                    parts.append(self._buffer.decode("utf-8", errors="replace"))
                    self._buffer = b""
                break
            self._buffer = rest
            line = line.removesuffix(b"\r")
            if not line:
                break
            parts.append(line.decode("utf-8", errors="replace"))
        text = "".join(parts)
        return text or None

    def write_message(self, message: str) -> None:
        """Send ``message``; raises OSError if the peer has gone away."""
        if not message:
            return
        self.sock.sendall(message.encode("utf-8"))

    def close(self) -> None:
        self.sock.close()


def read_stdin(channel: Channel[str]) -> None:
    """Prompt for lines on stdin and queue them until input ends."""
    while True:
        print("->", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            return
        channel.send(line)


class Client:
    """A connection to the chat server plus the queue of typed input."""

    def __init__(
        self, stream_handler: StreamHandler, channels: ClientChannelManager | None = None
    ) -> None:
        self.stream_handler = stream_handler
        self.channels = channels if channels is not None else ClientChannelManager()

    @classmethod
    def connect(cls, path: str | Path) -> Client | None:
        """Connect to the address stored in ``path``; None if no server answers."""
        address = read_address(path)
        if address is None:
            return None
        try:
            sock = socket.create_connection(address)
        except OSError:
            return None
        return cls(StreamHandler(sock))

    def run(self) -> None:
        """Relay stdin to the server and print incoming messages until it leaves."""
        print("Conectado !")
        threading.Thread(
            target=read_stdin, args=(self.channels.sender,), daemon=True
        ).start()

        while True:
            io_input = self.channels.receive()
            stream_message = self.stream_handler.read_stream()

            if io_input is not None:
                try:
                    self.stream_handler.write_message(io_input)
                except OSError:
                    break

            if stream_message is not None:
                print(f"<-{stream_message}")

            if self.stream_handler.eof:
                break
            if io_input is None and stream_message is None:
                time.sleep(_IDLE_DELAY)

        print("servidor se desconectou")
        self.close()

    def close(self) -> None:
        self.stream_handler.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
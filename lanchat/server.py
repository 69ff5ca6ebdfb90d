"""Chat server: accepts clients and broadcasts each message to the others."""

from __future__ import annotations

import socket
import threading
import time
from pathlib import Path

from .addrfile import write_address
from .channels import Channel, ChannelClosed, ServerChannelManager
from .client import Client, StreamHandler
from .message import Message

_IDLE_DELAY = 0.005
_MAX_ID = 0xFFFF


class ClientHandler:
    """Serves one connected client on its own thread."""

    def __init__(
        self,
        sock: socket.socket,
        to_server: Channel[Message],
        from_server: Channel[Message],
        handler_id: int,
        stop: threading.Event | None = None,
    ) -> None:
        self.stream = StreamHandler(sock)
        self.to_server = to_server
        self.from_server = from_server
        self.id = handler_id
        self._stop = stop if stop is not None else threading.Event()

    def read_stream(self) -> Message | None:
        """Non-blocking: the client's next text tagged with this handler's id."""
        text = self.stream.read_stream()
        if text is None:
            return None
        print(f"{self.id} Mensagem recebida: {text}")
        return Message(text, self.id)

    def read_channel(self) -> Message | None:
        return self.from_server.try_receive()

    def write_channel(self, message: Message) -> None:
        """Pass a message to the server; raises ChannelClosed if it is gone."""
        self.to_server.send(message)

    def write_stream(self, message: Message) -> None:
        """Send a message's text to the client, framed by a blank line."""
        print(f"{self.id} mandando mensagem para o cliente")
        self.stream.sock.sendall((message.text + "\r\n\r\n").encode("utf-8"))

    def handle(self) -> None:
        """Relay between the client and the server until either side leaves."""
        print(f"New client connected! id: {self.id}")
        try:
            while not self._stop.is_set():
                stream_message = self.read_stream()
                channel_message = self.read_channel()

                if stream_message is not None:
                    print(f"{self.id} Nova mensagem: {stream_message!r}")
                    self.write_channel(stream_message)

                if channel_message is not None:
                    print(f"{self.id} Nova mensagem da main")
                    if channel_message.sender_id != self.id:
                        self.write_stream(channel_message)

                if self.stream.eof:
                    break
                if stream_message is None and channel_message is None:
                    time.sleep(_IDLE_DELAY)
        except (OSError, ChannelClosed):
            pass
        finally:
            self.from_server.close()
            self.stream.close()


class Server:
    """Listens for clients and fans their messages out to everyone else."""

    def __init__(self, host: str = "localhost", port: int = 0) -> None:
        self._listener = socket.create_server((host, port))
        self._listener.setblocking(False)
        self.channels = ServerChannelManager()
        self._next_id = 0
        self._stop = threading.Event()
        print("\nServidor online")
        print(f'Listening on "localhost:{self.address()[1]}"')

    def address(self) -> tuple[str, int]:
        host, port = self._listener.getsockname()[:2]
        return host, port

    def _set_up_handler(self, sock: socket.socket) -> ClientHandler:
        inbox: Channel[Message] = Channel()
        self.channels.add_sender(inbox)
        return ClientHandler(sock, self.channels.sender, inbox, self._next_id, self._stop)

    def poll(self) -> bool:
        """Accept one pending client and relay one message; True if anything happened."""
        active = False
        try:
            conn, _ = self._listener.accept()
        except BlockingIOError:
            conn = None
        if conn is not None:
            active = True
            print("Novo cliente")
            handler = self._set_up_handler(conn)
            threading.Thread(target=handler.handle, daemon=True).start()
            self._next_id = (self._next_id + 1) & _MAX_ID

        message = self.channels.receive_message()
        if message is not None:
            active = True
            print("Mensagem recebida no server")
            self.channels.send_message(message)
        return active

    def serve_forever(self, json_path: str | Path) -> None:
        """Publish the address to ``json_path`` and serve until closed."""
        write_address(json_path, self.address())
        while not self._stop.is_set():
            try:
                busy = self.poll()
            except OSError:
                if self._stop.is_set():
                    break
                raise
            if not busy:
                time.sleep(_IDLE_DELAY)

    def close(self) -> None:
        self._stop.set()
        self._listener.close()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def try_connection(json_path: str | Path) -> Client | None:
    """Connect to the server recorded in ``json_path``, if one is running."""
    return Client.connect(json_path)
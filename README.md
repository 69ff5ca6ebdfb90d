# lanchat

A small chat that runs on your own machine. One process acts as the server.
Every other process connects to it as a client. Each line a client types is
sent to every other connected client.

## Installation

```
pip install .
```

## Usage

```
lanchat [server|client|default]
```

- `server` starts a server. If a server is already running, it prints
  `Já há um servidor online` and exits.
- `client` joins the running server. If no server is running, it prints
  `Não há nenhum servidor ativo!` and exits.
- `default` is used when no mode is given. It joins the running server if there
  is one and starts a server if there is not.

The mode name is not case sensitive. Any other value stops the program with the
message `Selecione o modo [server|client|default]`.

The server listens on `localhost`, on a free port it picks itself. It writes
the address it listens on to `socket.json` in the current directory, as a JSON
string such as `"127.0.0.1:50123"`. Clients read that file to find the server;
if the file does not exist, an empty one is created. Start every instance from
the same directory so that they all use the same `socket.json`.

In a client, type a line at the `->` prompt to send it. Messages from the
other clients are shown with a `<-` prefix. The client stops when the server
goes away. The server runs until it is interrupted (Ctrl+C), and it prints a
line to the console for each connection and message it handles.

## Library use

The parts can also be used from Python:

- `lanchat.message.Message` holds a text and the sender's id (0 to 65535).
  `str(message)` gives `"<id> <text>"`, and `Message.parse` reads that form
  back, raising `MessageParseError` if it cannot.
- `lanchat.channels.Channel` is a thread-safe, non-blocking queue that its
  receiver can close; sending into a closed channel raises `ChannelClosed`.
  `ServerChannelManager` collects messages from all client handlers and
  broadcasts to them, dropping closed channels. `ClientChannelManager` carries
  typed lines to the client loop.
- `lanchat.addrfile.write_address` stores a `(host, port)` pair in a JSON file
  and `lanchat.addrfile.read_address` reads it back (returning `None` for an
  empty file). `ensure_file` creates the file if it is missing.
- `lanchat.server.Server` accepts clients and relays their messages; `poll`
  does one step of that work and `serve_forever` publishes the address and
  loops until `close` is called. Each client is served by a `ClientHandler` on
  its own thread. `lanchat.server.try_connection` returns a connected `Client`
  if a server is already running, or `None`.
- `lanchat.client.Client.connect` joins the server named in an address file,
  and `Client.run` relays stdin to the server and prints what it sends back.

## What it does not do

- Clients see only the text of other clients' messages, not who sent them;
  there are no user names.
- There is no message history: a client sees only what is sent while it is
  connected.
- The server has no command to shut it down; it stops when interrupted.
- It is meant for one machine: the server listens on `localhost` only, and
  clients find it through the shared `socket.json` file.

## Running the tests

```
pip install .[test]
pytest
```
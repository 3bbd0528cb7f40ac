# lanchat

lanchat is a small chat system for a local network. It has two parts:

- a server. It listens on TCP port 8888 on all interfaces. It sends the text it
  receives from one client to every other connected client. It accepts up to
  10 clients at a time.
- a client. It connects to the server and shows the conversation in a pygame
  window. With `--nogui` it shows the conversation in the terminal instead.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
lanchat-server
```

The server prints `Server started on port 8888`. It then prints
`New client connected: <ip>:<port>` for each connection and `Received: <text>`
for each message. When a client goes away it prints `Client disconnected`.

When 10 clients are already connected, a new connection gets
`*** Server is full, try again later ***` and is closed at once.

Ctrl+C or SIGTERM stops the server. It prints `Shutting down server...` and
closes every connection. The command takes no options except `--help`.

## Running a client

```
lanchat-client <server_ip> <username> [--nogui]
```

- `server_ip` must be a dotted IPv4 address. The client always connects to
  port 8888.
- `username` goes in front of each message you send, as `username: text`.
  Usernames longer than 31 characters are cut to 31.
- `--nogui` turns off the window. Any other third argument is ignored, and the
  client opens the window.

If the arguments are wrong, the address is not valid, the connection fails or
the window cannot be opened, the client prints an error and exits with status 1.

On start the client sends `*** <username> has joined the chat ***`. On exit it
sends `*** <username> has left the chat ***`.

### Terminal mode (`--nogui`)

Type a line and press Enter to send it. The client ignores empty lines.
Messages from other people are printed as they arrive. Ctrl+C or end of input
(Ctrl+D) leaves the chat. If the server closes the connection, the client
prints `*** Server disconnected ***`.

### Window mode

| Key                          | Action                              |
|------------------------------|-------------------------------------|
| typing                       | adds text to the input box          |
| Backspace                    | deletes the last character          |
| Enter / keypad Enter         | sends the input line, if not empty  |
| Escape or closing the window | leaves the chat                     |

Your own messages are blue and other people's are red. The newest message is at
the bottom. The window keeps the last 100 messages. The input line holds at most
1022 characters. Text is drawn in DejaVu Sans, looked up at
`/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf` and then at
`/usr/share/fonts/TTF/DejaVuSans.ttf`. If neither font file exists, the window
still opens and works, but it draws no text.

## Using it from Python

- `lanchat.session.ChatSession` holds the message history (`messages`, a list
  of `Message` objects) and the input line (`input_text`). It does not use
  sockets or pygame. You give it a username and a callable that sends text:

  ```python
  from lanchat.session import ChatSession, Key

  sent = []
  session = ChatSession("alice", sent.append)
  session.handle_text_input("hello")
  session.handle_key(Key.RETURN)
  # sent == ["alice: hello"]
  # session.messages[-1].content == "alice: hello"
  ```

- `lanchat.network` has the socket helpers: `connect_to_server`,
  `create_server_socket`, `receive_text` and `send_text`.
- `lanchat.server.ChatServer(host="", port=8888, max_clients=10)` binds its
  socket when you create it. `serve_forever()` runs it until `shutdown()` is
  called. With port 0 the system picks a free port, and `port` holds the port
  in use.
- `lanchat.client.ChatClient` connects a socket to a `ChatSession`.
  `lanchat.gui.ChatWindow` is the pygame window.

## Limitations

- Text has no framing. Each chunk that one read returns (up to 1023 bytes) is
  treated as one message, so messages sent close together may arrive joined
  or split.
- Messages are not stored. The history exists only in a running client.
- There are no private messages, rooms, nickname checks or authentication, and
  the traffic is not encrypted.
- Only IPv4 is supported, and the client's port cannot be changed.
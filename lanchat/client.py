"""Chat client: connects to a server, sends typed lines and shows replies."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from socket import SHUT_RDWR, socket
from typing import TextIO

from lanchat.network import connect_to_server, receive_text, send_text
from lanchat.session import ChatSession

USAGE = "Usage: lanchat-client <server_ip> <username> [--nogui]"
DISCONNECTED = "*** Server disconnected ***"
TERMINAL_BANNER = (
    "Chat started. Type your messages and press Enter. Use Ctrl+C to exit."
)


@dataclass(frozen=True)
class ClientOptions:
    """Command-line settings of the client."""

    server_ip: str
    username: str
    nogui: bool = False


def parse_args(argv: list[str]) -> ClientOptions:
    """Read ``<server_ip> <username> [--nogui]``; raise ValueError otherwise."""
    if len(argv) not in (2, 3):
        raise ValueError(USAGE)
    nogui = len(argv) == 3 and argv[2] == "--nogui"
    return ClientOptions(argv[0], argv[1], nogui)


class ChatClient:
    """Ties a connected socket to a chat session.

    Incoming text is added to the session's history; with ``echo`` it is
    also printed to standard output.
    """

    def __init__(self, sock: socket, session: ChatSession, echo: bool = False) -> None:
        self.sock = sock
        self.session = session
        self.echo = echo
        self._thread: threading.Thread | None = None

    def receive_loop(self) -> None:
        """Read from the server until it disconnects or the session stops."""
        while self.session.running:
            try:
                text = receive_text(self.sock)
            except OSError as exc:
                if self.session.running:
                    print(f"recv failed: {exc}", file=sys.stderr)
                    self.session.stop()
                break
            if text is None:
                self.session.add_message(DISCONNECTED)
                if self.echo:
                    print(DISCONNECTED)
                self.session.stop()
                break
            self.session.add_message(text)
            if self.echo:
                print(text)

    def start(self) -> None:
        """Run the receive loop in a background thread."""
        self._thread = threading.Thread(target=self.receive_loop, daemon=True)
        self._thread.start()

    def announce_join(self) -> None:
        """Tell the other participants that this user has arrived."""
        send_text(self.sock, f"*** {self.session.username} has joined the chat ***")

    def announce_leave(self) -> None:
        """Tell the other participants that this user is leaving."""
        send_text(self.sock, f"*** {self.session.username} has left the chat ***")

    def run_terminal(self, stream: TextIO) -> None:
        """Send each non-empty line read from ``stream`` until it ends."""
        print(TERMINAL_BANNER)
        for line in stream:
            if not self.session.running:
                break
            text = line[:-1] if line.endswith("\n") else line
            if text:
                self.session.send_message(text)

    def close(self) -> None:
        """Stop the session, wake the receiver and release the socket."""
        self.session.stop()
        try:
            self.sock.shutdown(SHUT_RDWR)
        except OSError:
            pass
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self.sock.close()


def main(argv: list[str] | None = None) -> int:
    """Start the chat client."""
    args = sys.argv[1:] if argv is None else argv
    try:
        options = parse_args(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        sock = connect_to_server(options.server_ip)
    except (ValueError, OSError) as exc:
        print(f"Failed to connect to server! ({exc})", file=sys.stderr)
        return 1

    session = ChatSession(options.username, lambda text: send_text(sock, text))
    client = ChatClient(sock, session, echo=options.nogui)
    window = None
    status = 0
    try:
        if not options.nogui:
            from lanchat.gui import ChatWindow

            try:
                window = ChatWindow(session)
            except Exception as exc:
                print(f"Failed to initialize the window! ({exc})", file=sys.stderr)
                return 1
        client.start()
        client.announce_join()
        if window is None:
            client.run_terminal(sys.stdin)
        else:
            window.run()
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        print(f"Connection error: {exc}", file=sys.stderr)
        status = 1
    finally:
        session.stop()
        try:
            client.announce_leave()
        except OSError:
            pass
        client.close()
        if window is not None:
            window.close()
    return status


if __name__ == "__main__":
    sys.exit(main())
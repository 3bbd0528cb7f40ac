"""TCP helpers shared by the chat client and server."""

from __future__ import annotations

import socket

PORT = 8888
BUFFER_SIZE = 1024
LISTEN_BACKLOG = 5


def create_socket() -> socket.socket:
    """Create an IPv4 TCP socket."""
    return socket.socket(socket.AF_INET, socket.SOCK_STREAM)


def connect_to_server(server_ip: str, port: int = PORT) -> socket.socket:
    """Connect to a chat server at a dotted IPv4 address.

    Raises ValueError for an address that is not IPv4 and OSError when the
    connection cannot be made.
    """
    try:
        socket.inet_pton(socket.AF_INET, server_ip)
    except OSError as exc:
        raise ValueError(f"invalid address: {server_ip!r}") from exc

    sock = create_socket()
    try:
        sock.connect((server_ip, port))
    except OSError:
        sock.close()
        raise
    return sock


def create_server_socket(
    host: str = "", port: int = PORT, backlog: int = LISTEN_BACKLOG
) -> socket.socket:
    """Create a listening socket bound to ``host`` and ``port``."""
    sock = create_socket()
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(backlog)
    except OSError:
        sock.close()
        raise
    return sock


def receive_text(sock: socket.socket) -> str | None:
    """Read one chunk of text, or return None when the peer has closed."""
    data = sock.recv(BUFFER_SIZE - 1)
    if not data:
        return None
    return data.decode("utf-8", errors="replace")


def send_text(sock: socket.socket, text: str) -> None:
    """Send ``text`` encoded as UTF-8."""
    sock.sendall(text.encode("utf-8"))
"""Chat server: relays each client's text to every other client."""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from socket import SHUT_RDWR, socket

from lanchat.network import PORT, create_server_socket, receive_text, send_text

MAX_CLIENTS = 10
SERVER_FULL = "*** Server is full, try again later ***"
_ACCEPT_POLL_SECONDS = 0.5


class ChatServer:
    """A relay server for up to ``max_clients`` connections.

    The listening socket is bound on construction; ``port`` holds the port
    actually in use.
    """

    def __init__(
        self, host: str = "", port: int = PORT, max_clients: int = MAX_CLIENTS
    ) -> None:
        self.max_clients = max_clients
        self._listener = create_server_socket(host, port)
        self.port = self._listener.getsockname()[1]
        self._clients: list[tuple[socket, tuple]] = []
        self._lock = threading.Lock()
        self.running = True

    def client_count(self) -> int:
        """Number of connected clients."""
        with self._lock:
            return len(self._clients)

    def add_client(self, conn: socket, address: tuple) -> bool:
        """Register a connection, or turn it away when the server is full."""
        with self._lock:
            accepted = len(self._clients) < self.max_clients
            if accepted:
                self._clients.append((conn, address))
        if not accepted:
            try:
                send_text(conn, SERVER_FULL)
            except OSError:
                pass
            conn.close()
            return False
        print(f"New client connected: {address[0]}:{address[1]}")
        return True

    def remove_client(self, conn: socket) -> bool:
        """Forget and close a connection; return False if it was not known."""
        with self._lock:
            for index, (known, _) in enumerate(self._clients):
                if known is conn:
                    del self._clients[index]
                    break
            else:
                return False
        conn.close()
        return True

    def broadcast(self, message: str, sender: socket | None) -> None:
        """Send ``message`` to every client except ``sender``."""
        with self._lock:
            targets = [conn for conn, _ in self._clients if conn is not sender]
        for conn in targets:
            try:
                send_text(conn, message)
            except OSError:
                pass

    def handle_client(self, conn: socket) -> None:
        """Relay one client's messages until it disconnects."""
        while self.running:
            try:
                text = receive_text(conn)
            except OSError as exc:
                if self.running:
                    print(f"recv failed: {exc}", file=sys.stderr)
                    self.remove_client(conn)
                break
            if text is None:
                print("Client disconnected")
                self.remove_client(conn)
                break
            print(f"Received: {text}")
            self.broadcast(text, conn)

    def serve_forever(self) -> None:
        """Accept clients until ``shutdown`` is called."""
        print(f"Server started on port {self.port}")
        self._listener.settimeout(_ACCEPT_POLL_SECONDS)
        try:
            while self.running:
                try:
                    conn, address = self._listener.accept()
                except TimeoutError:
                    continue
                except OSError as exc:
                    if self.running:
                        print(f"Accept failed: {exc}", file=sys.stderr)
                        continue
                    break
                conn.settimeout(None)
                if self.add_client(conn, address):
                    threading.Thread(
                        target=self.handle_client, args=(conn,), daemon=True
                    ).start()
        finally:
            print("\nShutting down server...")
            self.shutdown()

    def shutdown(self) -> None:
        """Stop accepting, and close every connection and the listener."""
        self.running = False
        with self._lock:
            clients = [conn for conn, _ in self._clients]
            self._clients.clear()
        for conn in clients:
            try:
                conn.shutdown(SHUT_RDWR)
            except OSError:
                pass
            conn.close()
        self._listener.close()


def main(argv: list[str] | None = None) -> int:
    """Run the chat server until interrupted."""
    parser = argparse.ArgumentParser(description="Relay chat messages between clients.")
    parser.parse_args(argv)
    try:
        server = ChatServer()
    except OSError as exc:
        print(f"Failed to start server: {exc}", file=sys.stderr)
        return 1

    def _stop(signum, frame):
        server.running = False

    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)
    server.serve_forever()
    return 0


if __name__ == "__main__":
    sys.exit(main())
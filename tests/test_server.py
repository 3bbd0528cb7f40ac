import socket
import threading
import time

import pytest

from lanchat.network import receive_text
from lanchat.server import ChatServer, main

FULL = b"*** Server is full, try again later ***"


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def _read_exactly(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


@pytest.fixture
def running_server():
    server = ChatServer("127.0.0.1", 0, 2)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server, thread
    server.shutdown()
    thread.join(timeout=5)


def _connect(server):
    sock = socket.create_connection(("127.0.0.1", server.port), timeout=5)
    return sock


def test_message_relayed_to_others_only(running_server):
    server, _ = running_server
    a = _connect(server)
    b = _connect(server)
    try:
        assert _wait_for(lambda: server.client_count() == 2)
        a.sendall(b"alice: hi")
        assert _read_exactly(b, len(b"alice: hi")) == b"alice: hi"
        a.settimeout(0.3)
        with pytest.raises(TimeoutError):
            a.recv(64)
    finally:
        a.close()
        b.close()


def test_full_server_turns_client_away(running_server):
    server, _ = running_server
    a = _connect(server)
    b = _connect(server)
    try:
        assert _wait_for(lambda: server.client_count() == 2)
        c = _connect(server)
        try:
            assert _read_exactly(c, len(FULL) + 1) == FULL
        finally:
            c.close()
        assert server.client_count() == 2
    finally:
        a.close()
        b.close()


def test_disconnect_removes_client(running_server):
    server, _ = running_server
    a = _connect(server)
    b = _connect(server)
    try:
        _wait_for(lambda: server.client_count() == 2)
        assert server.client_count() == 2
        a.close()
        _wait_for(lambda: server.client_count() == 1)
        assert server.client_count() == 1
    finally:
        b.close()


def test_shutdown_ends_serve_forever(running_server):
    server, thread = running_server
    a = _connect(server)
    try:
        assert _wait_for(lambda: server.client_count() == 1)
        server.shutdown()
        thread.join(timeout=5)
        assert not thread.is_alive()
        assert server.client_count() == 0
        assert _read_exactly(a, 8) == b""
    finally:
        a.close()


def test_add_and_remove_client_directly():
    server = ChatServer("127.0.0.1", 0, 1)
    a1, a2 = socket.socketpair()
    b1, b2 = socket.socketpair()
    try:
        assert server.add_client(a1, ("127.0.0.1", 1)) is True
        assert server.client_count() == 1
        assert server.add_client(b1, ("127.0.0.1", 2)) is False
        assert _read_exactly(b2, len(FULL) + 1) == FULL
        assert server.remove_client(a1) is True
        assert server.client_count() == 0
        assert server.remove_client(a1) is False
    finally:
        server.shutdown()
        for s in (a1, a2, b1, b2):
            s.close()


def test_broadcast_skips_sender():
    server = ChatServer("127.0.0.1", 0, 5)
    a1, a2 = socket.socketpair()
    b1, b2 = socket.socketpair()
    try:
        assert server.add_client(a1, ("127.0.0.1", 1)) is True
        assert server.add_client(b1, ("127.0.0.1", 2)) is True
        assert server.client_count() == 2
        server.broadcast("hello", a1)
        assert receive_text(b2) == "hello"
        a2.settimeout(0.2)
        with pytest.raises(TimeoutError):
            a2.recv(16)
    finally:
        server.shutdown()
        for s in (a1, a2, b1, b2):
            s.close()


def test_handle_client_removes_on_eof(capsys):
    server = ChatServer("127.0.0.1", 0, 5)
    a1, a2 = socket.socketpair()
    try:
        server.add_client(a1, ("127.0.0.1", 1))
        a2.sendall(b"bob: yo")
        a2.shutdown(socket.SHUT_WR)
        server.handle_client(a1)
        assert server.client_count() == 0
        out = capsys.readouterr().out
        assert "Received: bob: yo" in out
        assert "Client disconnected" in out
    finally:
        server.shutdown()
        a2.close()


def test_main_rejects_extra_arguments():
    with pytest.raises(SystemExit):
        main(["unexpected"])
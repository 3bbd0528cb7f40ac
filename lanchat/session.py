"""Chat state: message history, input line and sending."""

from __future__ import annotations

import enum
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable

BUFFER_SIZE = 1024
MAX_MESSAGES = 100
MAX_USERNAME_LEN = 32


@dataclass(frozen=True)
class Message:
    """One line of chat history."""

    content: str
    is_self: bool = False


class Key(enum.Enum):
    """Editing keys understood by a chat session."""

    BACKSPACE = enum.auto()
    RETURN = enum.auto()
    ESCAPE = enum.auto()


def truncate_username(name: str) -> str:
    """Cut a user name to the longest length the chat accepts."""
    return name[: MAX_USERNAME_LEN - 1]


def _clip(text: str) -> str:
    return text[: BUFFER_SIZE - 1]


class ChatSession:
    """History and input state of one chat participant.

    ``sender`` is called with each outgoing line of text.
    """

    def __init__(self, username: str, sender: Callable[[str], None]) -> None:
        self.username = truncate_username(username)
        self._sender = sender
        self._messages: deque[Message] = deque(maxlen=MAX_MESSAGES)
        self._lock = threading.Lock()
        self.input_text = ""
        self.running = True

    @property
    def messages(self) -> list[Message]:
        """A snapshot of the history, oldest first."""
        with self._lock:
            return list(self._messages)

    def add_message(self, content: str, is_self: bool = False) -> Message:
        """Append a message, dropping the oldest once the history is full."""
        message = Message(_clip(content), bool(is_self))
        with self._lock:
            self._messages.append(message)
        return message

    def send_message(self, text: str) -> str:
        """Send ``text`` under this user's name and record it."""
        formatted = _clip(f"{self.username}: {text}")
        self._sender(formatted)
        self.add_message(formatted, True)
        return formatted

    def handle_text_input(self, text: str) -> bool:
        """Append typed text to the input line if it still fits."""
        if len(self.input_text) + len(text) < BUFFER_SIZE - 1:
            self.input_text += text
            return True
        return False

    def handle_key(self, key: Key) -> None:
        """Apply an editing key to the input line."""
        if key is Key.BACKSPACE:
            self.input_text = self.input_text[:-1]
        elif key is Key.RETURN:
            if self.input_text:
                self.send_message(self.input_text)
                self.input_text = ""
        elif key is Key.ESCAPE:
            self.stop()

    def stop(self) -> None:
        """Mark the session as finished."""
        self.running = False
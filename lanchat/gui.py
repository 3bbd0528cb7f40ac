"""Graphical chat window drawn with pygame."""

from __future__ import annotations

import sys

import pygame

from lanchat.session import ChatSession, Key

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
FONT_SIZE = 16
FONT_PATHS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
)
FRAME_DELAY_MS = 16

BACKGROUND = (200, 200, 200)
HISTORY_BACKGROUND = (240, 240, 240)
INPUT_BACKGROUND = (255, 255, 255)
BORDER = (0, 0, 0)
TEXT_COLOR = (0, 0, 0)
SELF_COLOR = (0, 0, 200)
OTHER_COLOR = (200, 0, 0)

_KEYMAP = {
    pygame.K_BACKSPACE: Key.BACKSPACE,
    pygame.K_RETURN: Key.RETURN,
    pygame.K_KP_ENTER: Key.RETURN,
    pygame.K_ESCAPE: Key.ESCAPE,
}


def translate_key(keycode: int) -> Key | None:
    """Map a pygame key code to a session key, or None if it has no meaning."""
    return _KEYMAP.get(keycode)


def _load_font() -> pygame.font.Font | None:
    for path in FONT_PATHS:
        try:
            return pygame.font.Font(path, FONT_SIZE)
        except (OSError, FileNotFoundError):
            continue
    print("Failed to load font; text will not be drawn", file=sys.stderr)
    return None


class ChatWindow:
    """A window showing a session's history and its input line."""

    def __init__(self, session: ChatSession) -> None:
        self.session = session
        pygame.display.init()
        pygame.font.init()
        try:
            self.surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        except pygame.error:
            pygame.quit()
            raise
        pygame.display.set_caption("Chat Application")
        self.font = _load_font()

    def process_events(self) -> None:
        """Handle every pending window event."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.session.stop()
            elif event.type == pygame.TEXTINPUT:
                self.session.handle_text_input(event.text)
            elif event.type == pygame.KEYDOWN:
                key = translate_key(event.key)
                if key is not None:
                    self.session.handle_key(key)

    def render_messages(self) -> None:
        """Draw the history, newest at the bottom, until the area is full."""
        area = pygame.Rect(10, 10, WINDOW_WIDTH - 20, WINDOW_HEIGHT - 60)
        self.surface.fill(HISTORY_BACKGROUND, area)
        if self.font is None:
            return
        y_pos = WINDOW_HEIGHT - 80
        for message in reversed(self.session.messages):
            color = SELF_COLOR if message.is_self else OTHER_COLOR
            text = self.font.render(message.content, True, color)
            height = text.get_height()
            self.surface.blit(text, (20, y_pos - height))
            y_pos -= height + 5
            if y_pos < 20:
                break

    def render_input(self) -> None:
        """Draw the input box and the text typed so far."""
        area = pygame.Rect(10, WINDOW_HEIGHT - 40, WINDOW_WIDTH - 20, 30)
        self.surface.fill(INPUT_BACKGROUND, area)
        pygame.draw.rect(self.surface, BORDER, area, 1)
        if self.font is None:
            return
        text = self.font.render(self.session.input_text, True, TEXT_COLOR)
        self.surface.blit(text, (15, WINDOW_HEIGHT - 35))

    def render(self) -> None:
        """Draw a whole frame and show it."""
        self.surface.fill(BACKGROUND)
        self.render_messages()
        self.render_input()
        pygame.display.flip()

    def run(self) -> None:
        """Process events and redraw until the session stops."""
        pygame.key.start_text_input()
        try:
            while self.session.running:
                self.process_events()
                self.render()
                pygame.time.delay(FRAME_DELAY_MS)
        finally:
            pygame.key.stop_text_input()

    def close(self) -> None:
        """Release the window and pygame."""
        pygame.quit()
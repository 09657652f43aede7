"""Small OLED user-interface panels: menus, a text terminal and a big number."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

SCREEN_WIDTH = 128
SCREEN_HEIGHT = 64
TERMINAL_ROWS = 4
TERMINAL_COLUMNS = 21
MAX_PENDING = 255

CHECK_BITMAP = bytes([0x01, 0x03, 0x02, 0xC6, 0x64, 0x34, 0x18, 0x08])


@dataclass(frozen=True)
class _Font:
    name: str
    char_width: int
    height: int


SMALL_FONT = _Font("6x13", 6, 11)
BIG_FONT = _Font("fub35n", 28, 36)


class Display:
    """A page-mode monochrome display that records what is drawn on it.

    Drawing commands are tuples: ``("str", x, y, text, color)``,
    ``("box", x, y, width, height)`` and ``("bitmap", x, y, rows)``.
    ``commands`` holds the drawing of the current page; after the last
    page it holds the drawing of the finished frame.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT, pages: int = 8) -> None:
        if pages < 1:
            raise ValueError("a display needs at least one page")
        self.width = width
        self.height = height
        self.pages = pages
        self.font = SMALL_FONT
        self.color = 1
        self.page = 0
        self.frames = 0
        self.commands: list[tuple] = []

    def first_page(self) -> None:
        self.page = 0
        self.commands = []

    def next_page(self) -> bool:
        """Advance to the next page; return False once the frame is complete."""
        self.page += 1
        if self.page < self.pages:
            self.commands = []
            return True
        self.frames += 1
        return False

    def set_font(self, font: _Font) -> None:
        self.font = font

    @property
    def font_height(self) -> int:
        return self.font.height

    def str_width(self, text: str) -> int:
        return len(text) * self.font.char_width

    def set_foreground(self) -> None:
        self.color = 1

    def set_background(self) -> None:
        self.color = 0

    def draw_str(self, x: int, y: int, text: str) -> None:
        self.commands.append(("str", x, y, text, self.color))

    def draw_box(self, x: int, y: int, width: int, height: int) -> None:
        self.commands.append(("box", x, y, width, height))

    def draw_bitmap(self, x: int, y: int, bitmap: Iterable[int]) -> None:
        self.commands.append(("bitmap", x, y, bytes(bitmap)))

    @property
    def strings(self) -> list[str]:
        """Texts drawn on the current page, in drawing order."""
        return [command[3] for command in self.commands if command[0] == "str"]


class Screen:
    """Redraws a panel a little at a time, one step per refresh call."""

    def __init__(self, display: Display) -> None:
        self.display = display
        self._pending = 0
        self._state = 0

    @property
    def pending(self) -> int:
        """Number of redraws requested and not yet completed."""
        return self._pending

    def reload(self) -> None:
        """Request a redraw, restarting any redraw in progress."""
        self._state = 0
        if self._pending < MAX_PENDING:
            self._pending += 1

    def refresh(self, panel: "Panel") -> None:
        """Perform one step of a pending redraw of ``panel``."""
        if not self._pending:
            return
        if self._state == 0:
            self.display.first_page()
            self._state = 1
            return
        if self._state == 1:
            panel.draw(self.display)
            self._state = 2
            return
        if self._state == 2 and self.display.next_page():
            self._state = 1
            return
        self._pending -= 1
        self._state = 0


class Panel:
    """Something that can be shown on the display; the base panel is blank."""

    def draw(self, display: Display) -> None:
        display.set_foreground()


class Menu(Panel):
    """A vertical list of items with a highlighted cursor."""

    def __init__(self, items: Iterable[str]) -> None:
        self.items = tuple(items)
        if not self.items:
            raise ValueError("a menu needs at least one item")
        self.current = 0

    def update(self, direction: int) -> None:
        """Move the cursor one item down (1) or up (-1), wrapping around."""
        if direction == 1:
            self.current += 1
            if self.current >= len(self.items):
                self.current = 0
        elif direction == -1:
            if self.current == 0:
                self.current = len(self.items)
            self.current -= 1

    def set_current(self, pos: int) -> None:
        self.current = pos
        if self.current > len(self.items):
            self.current = 0
        elif self.current < 0:
            self.current = len(self.items) - 1

    def draw(self, display: Display) -> None:
        display.set_font(SMALL_FONT)
        height = display.font_height
        width = display.width
        for row, item in enumerate(self.items):
            offset = (width - display.str_width(item)) // 2
            display.set_foreground()
            if row == self.current:
                display.draw_box(0, row * height + 1, width, height)
                display.set_background()
            display.draw_str(offset, row * height, item)


class CheckMenu(Menu):
    """A menu that marks one item, the chosen one, with a check mark."""

    def __init__(self, items: Iterable[str], checked: int = 0) -> None:
        super().__init__(items)
        self.checked = checked

    def draw(self, display: Display) -> None:
        super().draw(display)
        if 0 <= self.checked < len(self.items):
            display.draw_bitmap(2, self.checked * display.font_height + 2, CHECK_BITMAP)


class Terminal(Panel):
    """A four-line scrolling text log."""

    def __init__(self) -> None:
        self.clear()

    @staticmethod
    def _blank_row() -> list[str]:
        return ["\0"] * TERMINAL_COLUMNS

    def clear(self) -> None:
        self._x = 0
        self._y = 0
        self._rows = [self._blank_row() for _ in range(TERMINAL_ROWS)]

    @property
    def lines(self) -> list[str]:
        """The visible text, one string per row."""
        return ["".join(row).split("\0", 1)[0] for row in self._rows]

    def puts(self, text: str) -> None:
        """Append text; newline moves to the next row, carriage return clears the row."""
        for char in text:
            if char not in "\n\r":
                self._rows[self._y][self._x] = char
            self._x += 1
            if self._x >= TERMINAL_COLUMNS or char == "\n":
                self._x = 0
                self._y += 1
                if self._y >= TERMINAL_ROWS:
                    self._y = TERMINAL_ROWS - 1
                    del self._rows[0]
                    self._rows.append(self._blank_row())
            if char == "\r":
                self._x = 0
                self._rows[self._y] = self._blank_row()

    def printf(self, fmt: str, *args) -> int:
        """Format with %-style placeholders, append, and return the text length."""
        text = fmt % args
        self.puts(text)
        return len(text)

    def draw(self, display: Display) -> None:
        display.set_font(SMALL_FONT)
        display.set_foreground()
        height = display.font_height
        for row, line in enumerate(self.lines):
            display.draw_str(0, row * height, line)


class BigNumber(Panel):
    """A number in a large font under an optional title."""

    def __init__(self, title: str = "", number: int = 0) -> None:
        self.title = title
        self.number = number

    def draw(self, display: Display) -> None:
        if self.title:
            display.set_font(SMALL_FONT)
            width = display.str_width(self.title)
            display.draw_str((display.width - width) // 2, display.font_height, self.title)

        display.set_font(BIG_FONT)
        display.set_foreground()
        text = str(self.number)
        height = display.font_height
        width = display.str_width(text)
        display.draw_str(
            (display.width - width) // 2,
            display.height - (display.height - height) // 2,
            text,
        )
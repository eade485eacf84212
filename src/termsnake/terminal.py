# terminal.py
"""curses frontend: display sink and input source for a text terminal."""
from __future__ import annotations
import curses
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Tuple

from .config import BORDER, FRAME_MS, INFO_ROWS, Preset
from .intents import Intent
from .simulation import Snapshot, Status

logger = logging.getLogger(__name__)

# ----- Color pairs -----
SNAKE_PAIR, FOOD_PAIR, BORDER_PAIR, TEXT_PAIR = 1, 2, 3, 4

KEYMAP = {
    curses.KEY_UP: Intent.UP,
    curses.KEY_DOWN: Intent.DOWN,
    curses.KEY_LEFT: Intent.LEFT,
    curses.KEY_RIGHT: Intent.RIGHT,
    ord("p"): Intent.PAUSE,
    ord("P"): Intent.PAUSE,
    ord("q"): Intent.QUIT,
    ord("Q"): Intent.QUIT,
    ord("r"): Intent.RESTART,
    ord("R"): Intent.RESTART,
}


def key_to_intent(key: int) -> Intent:
    return KEYMAP.get(key, Intent.NONE)


@contextmanager
def open_terminal() -> Iterator["curses.window"]:
    """
    Take over the terminal for the duration of the block. endwin() runs on
    every way out, exceptions included.
    """
    screen = curses.initscr()
    try:
        curses.noecho()
        curses.cbreak()
        screen.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor
        if curses.has_colors():
            curses.start_color()
            curses.init_pair(SNAKE_PAIR, curses.COLOR_GREEN, curses.COLOR_BLACK)
            curses.init_pair(FOOD_PAIR, curses.COLOR_RED, curses.COLOR_BLACK)
            curses.init_pair(BORDER_PAIR, curses.COLOR_YELLOW, curses.COLOR_BLACK)
            curses.init_pair(TEXT_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
        screen.timeout(0)
        yield screen
    finally:
        screen.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()


class TerminalInput:
    def __init__(self, screen):
        self.screen = screen

    def poll(self) -> Intent:
        # timeout(0) makes getch return -1 when nothing is pending
        return key_to_intent(self.screen.getch())


class TerminalDisplay:
    def __init__(self, screen):
        self.screen = screen

    # ---------- Helpers ----------
    def _size(self) -> Tuple[int, int]:
        rows, cols = self.screen.getmaxyx()
        return cols, rows

    def _put(self, y: int, x: int, text: str, pair: int = 0) -> None:
        attr = curses.color_pair(pair) if pair and curses.has_colors() else 0
        try:
            self.screen.addstr(y, x, text, attr)
        except curses.error:
            pass  # clipped at the screen edge

    def _offsets(self, width: int, height: int) -> Tuple[int, int]:
        cols, rows = self._size()
        need_cols, need_rows = Preset("", width, height).required_display_area
        return max((cols - need_cols) // 2, 0), max((rows - need_rows) // 2, 0)

    # ---------- Capacity ----------
    def fits(self, preset: Preset) -> bool:
        cols, rows = self._size()
        return preset.fits(cols, rows)

    # ---------- Menu ----------
    def select_preset(self, presets: Sequence[Preset]) -> Optional[Preset]:
        self.screen.timeout(-1)  # block while in the menu
        try:
            while True:
                self._draw_menu(presets)
                key = self.screen.getch()
                if key in (ord("q"), ord("Q")):
                    return None
                idx = key - ord("1")
                if 0 <= idx < len(presets):
                    preset = presets[idx]
                    if self.fits(preset):
                        return preset
                    logger.info("Preset %s does not fit a %dx%d terminal", preset.name, *self._size())
                    self._show_size_error(preset)
        finally:
            self.screen.timeout(0)

    def _draw_menu(self, presets: Sequence[Preset]) -> None:
        self.screen.erase()
        y, x = 2, 2
        self._put(y, x, "=== TERMSNAKE - SELECT FIELD SIZE ===", TEXT_PAIR)
        for i, preset in enumerate(presets):
            line = f"  {i + 1}. {preset.name} ({preset.width}x{preset.height})"
            if self.fits(preset):
                self._put(y + 2 + 2 * i, x, line, SNAKE_PAIR)
            else:
                self._put(y + 2 + 2 * i, x, f"{line} [TOO LARGE]", FOOD_PAIR)
        y += 3 + 2 * len(presets)
        self._put(y, x, f"Press 1-{len(presets)} to select a size, or Q to quit")
        cols, rows = self._size()
        self._put(y + 1, x, f"Terminal size: {cols}x{rows}")
        self.screen.refresh()

    def _show_size_error(self, preset: Preset) -> None:
        need_cols, need_rows = preset.required_display_area
        cols, rows = self._size()
        self.screen.erase()
        self._put(2, 2, "ERROR: Terminal too small for this field size!", FOOD_PAIR)
        self._put(4, 2, f"Selected: {preset.name} ({preset.width}x{preset.height})")
        self._put(5, 2, f"Required: {need_cols}x{need_rows}")
        self._put(6, 2, f"Current:  {cols}x{rows}")
        self._put(8, 2, "Please resize your terminal or select a smaller field size.")
        self._put(9, 2, "Press any key to return to the menu...")
        self.screen.refresh()
        self.screen.getch()

    # ---------- Game ----------
    def render(self, snap: Snapshot) -> None:
        self.screen.erase()
        ox, oy = self._offsets(snap.width, snap.height)
        self._draw_info(snap, ox + 1, oy)
        # arena origin: below the info panel and the top border
        ax, ay = ox + BORDER, oy + INFO_ROWS + BORDER
        self._draw_arena(snap, ax, ay)
        self._draw_status(snap, ax, ay + snap.height + BORDER)
        self.screen.refresh()

    def _draw_info(self, snap: Snapshot, x: int, y: int) -> None:
        self._put(y, x, "=== TERMSNAKE ===", TEXT_PAIR)
        self._put(y + 1, x, f"Score: {snap.score}  |  Length: {snap.length}  |  Speed: {FRAME_MS}ms", TEXT_PAIR)
        self._put(y + 2, x, "Controls: Arrow Keys=Move  P=Pause  R=Restart  Q=Quit", TEXT_PAIR)

    def _draw_arena(self, snap: Snapshot, ax: int, ay: int) -> None:
        edge = "#" * (snap.width + 2)
        self._put(ay - 1, ax - 1, edge, BORDER_PAIR)
        self._put(ay + snap.height, ax - 1, edge, BORDER_PAIR)
        for row in range(snap.height):
            self._put(ay + row, ax - 1, "#", BORDER_PAIR)
            self._put(ay + row, ax + snap.width, "#", BORDER_PAIR)

        if snap.food is not None:
            self._put(ay + snap.food.y, ax + snap.food.x, "@", FOOD_PAIR)
        for i, (x, y) in enumerate(snap.snake):
            self._put(ay + y, ax + x, "O" if i == 0 else "o", SNAKE_PAIR)

    def _draw_status(self, snap: Snapshot, x: int, y: int) -> None:
        msg, pair = status_message(snap)
        if msg:
            self._put(y, x, msg, pair)


def status_message(snap: Snapshot) -> Tuple[str, int]:
    """Text and color pair for the line under the arena ('' when playing)."""
    if snap.waiting_for_first_move:
        return "*** Press arrow key to start ***", BORDER_PAIR
    if snap.status is Status.PAUSED:
        return "*** PAUSED - Press P to continue ***", BORDER_PAIR
    if snap.status is Status.GAME_OVER:
        if snap.won:
            return f"*** YOU WIN! Final Score: {snap.score} - Press Q to quit or R to restart ***", SNAKE_PAIR
        return f"*** GAME OVER! Final Score: {snap.score} - Press Q to quit or R to restart ***", FOOD_PAIR
    return "", 0

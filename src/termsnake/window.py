# window.py
"""pygame frontend: the same game drawn in a desktop window."""
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Tuple
import logging

import pygame  # type: ignore

from .config import BG, CELL_SIZE, FRAME_MS, GREEN, HEAD, INFO_ROWS, RED, TEXT, YELLOW, Preset
from .intents import Intent
from .simulation import Snapshot, Status

logger = logging.getLogger(__name__)

HUD_PX = INFO_ROWS * CELL_SIZE  # text strip above the arena
MENU_SIZE = (520, 320)

KEYMAP = {
    pygame.K_UP: Intent.UP,
    pygame.K_DOWN: Intent.DOWN,
    pygame.K_LEFT: Intent.LEFT,
    pygame.K_RIGHT: Intent.RIGHT,
    pygame.K_p: Intent.PAUSE,
    pygame.K_q: Intent.QUIT,
    pygame.K_ESCAPE: Intent.QUIT,
    pygame.K_r: Intent.RESTART,
}


def key_to_intent(key: int) -> Intent:
    return KEYMAP.get(key, Intent.NONE)


def event_to_intent(event) -> Intent:
    if event.type == pygame.QUIT:
        return Intent.QUIT
    if event.type == pygame.KEYDOWN:
        return key_to_intent(event.key)
    return Intent.NONE


def window_size(width: int, height: int) -> Tuple[int, int]:
    """Pixel size of the window for a width x height arena."""
    return width * CELL_SIZE, height * CELL_SIZE + HUD_PX


@contextmanager
def open_window() -> Iterator[pygame.Surface]:
    """Open the game window; pygame is shut down on every way out."""
    pygame.init()
    try:
        screen = pygame.display.set_mode(MENU_SIZE)
        pygame.display.set_caption("termsnake")
        yield screen
    finally:
        pygame.quit()


class WindowInput:
    def poll(self) -> Intent:
        """Next key press (or window close), skipping mouse and window events."""
        while True:
            # pygame.event.poll() hands back one event, or NOEVENT without waiting
            event = pygame.event.poll()
            if event.type == pygame.NOEVENT:
                return Intent.NONE
            if event.type in (pygame.QUIT, pygame.KEYDOWN):
                return event_to_intent(event)


class WindowDisplay:
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = pygame.font.SysFont(None, 24)

    # ---------- Helpers ----------
    def _desktop(self) -> Tuple[int, int]:
        sizes = pygame.display.get_desktop_sizes()
        return sizes[0] if sizes else self.screen.get_size()

    def _ensure_size(self, size: Tuple[int, int]) -> None:
        if self.screen.get_size() != size:
            self.screen = pygame.display.set_mode(size)

    def _text(self, text: str, pos: Tuple[int, int], color=TEXT, center: bool = False) -> None:
        surf = self.font.render(text, True, color)
        rect = surf.get_rect(center=pos) if center else surf.get_rect(topleft=pos)
        self.screen.blit(surf, rect)

    def _cell(self, gx: int, gy: int, color) -> None:
        rect = pygame.Rect(gx * CELL_SIZE, HUD_PX + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(self.screen, color, rect)

    # ---------- Capacity ----------
    def fits(self, preset: Preset) -> bool:
        w, h = window_size(preset.width, preset.height)
        dw, dh = self._desktop()
        return w <= dw and h <= dh

    # ---------- Menu ----------
    def select_preset(self, presets: Sequence[Preset]) -> Optional[Preset]:
        self._ensure_size(MENU_SIZE)
        message = ""
        while True:
            self._draw_menu(presets, message)
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                return None
            if event.type != pygame.KEYDOWN:
                continue
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                return None
            idx = event.key - pygame.K_1
            if 0 <= idx < len(presets):
                preset = presets[idx]
                if self.fits(preset):
                    return preset
                w, h = window_size(preset.width, preset.height)
                logger.info("Preset %s needs a %dx%d window", preset.name, w, h)
                message = f"{preset.name} needs {w}x{h} px, desktop is {'x'.join(map(str, self._desktop()))}"

    def _draw_menu(self, presets: Sequence[Preset], message: str) -> None:
        self.screen.fill(BG)
        self._text("TERMSNAKE - SELECT FIELD SIZE", (20, 20))
        for i, preset in enumerate(presets):
            line = f"{i + 1}. {preset.name} ({preset.width}x{preset.height})"
            if self.fits(preset):
                self._text(line, (40, 60 + 32 * i), GREEN)
            else:
                self._text(f"{line} [TOO LARGE]", (40, 60 + 32 * i), RED)
        y = 70 + 32 * len(presets)
        self._text(f"Press 1-{len(presets)} to select a size, or Q to quit", (20, y))
        if message:
            self._text(message, (20, y + 30), RED)
        pygame.display.flip()

    # ---------- Game ----------
    def render(self, snap: Snapshot) -> None:
        self._ensure_size(window_size(snap.width, snap.height))
        self.screen.fill(BG)

        # HUD
        self._text(f"Score: {snap.score}   Length: {snap.length}   Speed: {FRAME_MS}ms", (8, 6))
        self._text("Arrows=Move  P=Pause  R=Restart  Q=Quit", (8, 6 + CELL_SIZE + 4))
        pygame.draw.line(
            self.screen, YELLOW, (0, HUD_PX - 1), (self.screen.get_width(), HUD_PX - 1)
        )

        # food
        if snap.food is not None:
            self._cell(snap.food.x, snap.food.y, RED)
        # snake
        for i, (x, y) in enumerate(snap.snake):
            self._cell(x, y, HEAD if i == 0 else GREEN)

        self._draw_status(snap)
        pygame.display.flip()

    def _draw_status(self, snap: Snapshot) -> None:
        w, h = self.screen.get_size()
        center = (w // 2, HUD_PX + (h - HUD_PX) // 2)
        if snap.waiting_for_first_move:
            self._text("Press an arrow key to start", center, YELLOW, center=True)
        elif snap.status is Status.PAUSED:
            self._text("PAUSED - press P to continue", center, YELLOW, center=True)
        elif snap.status is Status.GAME_OVER:
            # Dim with translucent overlay
            overlay = pygame.Surface((w, h), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 140))
            self.screen.blit(overlay, (0, 0))
            title = "YOU WIN" if snap.won else "GAME OVER"
            self._text(title, (center[0], center[1] - 16), (240, 240, 250), center=True)
            self._text("Press R to restart", (center[0], center[1] + 16), center=True)
            self._text(f"Score: {snap.score}", (center[0], center[1] + 44), center=True)

from dataclasses import dataclass
from typing import Optional, Tuple

# ----- Timing -----
FRAME_MS = 100          # one tick per frame, 10 ticks/second
POINTS_PER_FOOD = 10

# ----- Display chrome (terminal cells) -----
INFO_ROWS = 3           # title, score line, controls line
BORDER = 1              # '#' frame around the arena

# ----- Window frontend -----
CELL_SIZE = 16          # pixels per grid cell

# ----- Colors -----
BG    = (20, 20, 24)
GREEN = (80, 200, 80)
HEAD  = (140, 240, 140)
RED   = (200, 70, 70)
YELLOW = (220, 200, 60)
TEXT  = (220, 220, 230)


# ----- Arena presets -----
@dataclass(frozen=True)
class Preset:
    name: str
    width: int
    height: int

    @property
    def required_display_area(self) -> Tuple[int, int]:
        """(columns, rows) needed to show the arena with its border and info panel."""
        cols = self.width + 2 * BORDER
        rows = self.height + 2 * BORDER + INFO_ROWS
        return cols, rows

    def fits(self, cols: int, rows: int) -> bool:
        need_cols, need_rows = self.required_display_area
        return cols >= need_cols and rows >= need_rows


PRESETS: Tuple[Preset, ...] = (
    Preset("Tiny", 20, 10),
    Preset("Small", 30, 20),
    Preset("Medium", 40, 30),
    Preset("Large", 60, 40),
)


def get_preset(name: str) -> Preset:
    for preset in PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    valid = ", ".join(p.name for p in PRESETS)
    raise KeyError(f"Unknown preset {name!r} (choose from: {valid})")


# ----- Tunables (what you'd pass on the command line) -----
@dataclass
class Config:
    seed: Optional[int] = None
    frontend: str = "terminal"
    preset: Optional[str] = None
    log_file: Optional[str] = None
    log_level: str = "INFO"

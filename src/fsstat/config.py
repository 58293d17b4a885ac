from __future__ import annotations

from dataclasses import dataclass

ANSI_GREEN = "\033[32m"
ANSI_GRAY = "\033[90m"
ANSI_RESET = "\033[0m"

TARGET_PATH = "/"
DF_COMMAND: tuple[str, ...] = ("df", TARGET_PATH)
BLOCK_SIZE = 512

HEADER_COLUMNS: tuple[str, ...] = ("Size", "Used", "Avail", "Use%", "Mount")


@dataclass(frozen=True)
class DisplayConfig:
    indent: str = "  "
    name_width: int = 14
    column_width: int = 10
    mount_width: int = 9
    bar_width: int = 60
    bar_char: str = "="
    active_color: str = ANSI_GREEN
    muted_color: str = ANSI_GRAY
    reset_color: str = ANSI_RESET
    size_precision: int = 4
    percent_precision: int = 3
    percent_floor: float = 1.0e-3
    gb: float = 1.0e9
    mb: float = 1.0e6
    kb: float = 1.0e3


DEFAULT_CONFIG = DisplayConfig()

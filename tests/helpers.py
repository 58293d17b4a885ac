from __future__ import annotations

from pathlib import Path

DATA = Path(__file__).parent / "data"

SAMPLE_ROW = "/dev/disk1  20971520  10485760  10485760    50%  0  0  0%  /"
SAMPLE_RAW = "Filesystem 512-blocks Used Available Capacity iused ifree %iused Mounted on\n" + SAMPLE_ROW + "\n"

HEADER_SET = ["Filesystem", "Size", "Used", "Avail", "Use%", "Mount"]


def read_data(name: str) -> str:
    return (DATA / name).read_text(encoding="utf-8")


def macos_raw() -> str:
    return read_data("df_macos.txt")


def linux_raw() -> str:
    return read_data("df_linux.txt")

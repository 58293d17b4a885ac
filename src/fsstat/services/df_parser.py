from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from fsstat.config import BLOCK_SIZE
from fsstat.errors import MalformedRowError
from fsstat.models.filesystem import FilesystemRow

logger = logging.getLogger(__name__)

# BSD/macOS layout: Filesystem 512-blocks Used Available Capacity iused ifree %iused Mounted on
NAME_IDX = 0
TOTAL_IDX = 1
USED_IDX = 2
AVAIL_IDX = 3
CAPACITY_IDX = 4
MOUNT_IDX = 8
MIN_FIELDS = MOUNT_IDX + 1

_RX_BLOCKS = re.compile(r"^(\d+)([KMG]?)-blocks$", re.IGNORECASE)
_UNIT_FACTORS = {"": 1, "K": 1024, "M": 1024**2, "G": 1024**3}


def split_fields(line: str) -> list[str]:
    return line.split()


def split_lines(raw: str) -> tuple[str, list[str]]:
    """Return the header line and the non-empty data lines of ``df`` output."""
    lines = raw.split("\n")
    body = [line for line in lines[1:] if line.strip()]
    return lines[0], body


def _to_blocks(value: str, line: str, column: str) -> int:
    # ASCII digits only; int() also accepts "1_000", "+5" and non-Latin digits
    if not (value.isascii() and value.isdigit()):
        raise MalformedRowError(line, f"{column} is not a block count: {value!r}")
    return int(value)


def parse_line(line: str) -> FilesystemRow:
    fields = split_fields(line)
    if len(fields) < MIN_FIELDS:
        raise MalformedRowError(line, f"expected at least {MIN_FIELDS} fields, got {len(fields)}")

    return FilesystemRow(
        name=fields[NAME_IDX],
        total_blocks=_to_blocks(fields[TOTAL_IDX], line, "size"),
        used_blocks=_to_blocks(fields[USED_IDX], line, "used"),
        avail_blocks=_to_blocks(fields[AVAIL_IDX], line, "avail"),
        capacity=fields[CAPACITY_IDX],
        mountpoint=fields[MOUNT_IDX],
        block_size=BLOCK_SIZE,
    )


def parse_header(header: str) -> list[str]:
    tokens = split_fields(header)
    columns: list[str] = []
    i = 0
    while i < len(tokens):
        if tokens[i] == "Mounted" and i + 1 < len(tokens) and tokens[i + 1] == "on":
            columns.append("Mounted on")
            i += 2
            continue
        columns.append(tokens[i])
        i += 1
    return columns


@dataclass(frozen=True)
class HeaderLayout:
    columns: list[str]
    size_column: str
    used_column: str
    avail_column: str
    capacity_column: str | None
    block_size: int

    @property
    def mount_column(self) -> str:
        return self.columns[-1]


def block_size_of(column: str) -> int | None:
    m = _RX_BLOCKS.match(column)
    if not m:
        return None
    return int(m.group(1)) * _UNIT_FACTORS[m.group(2).upper()]


def header_layout(header: str) -> HeaderLayout:
    columns = parse_header(header)
    if len(columns) < 2:
        raise MalformedRowError(header, "header has too few columns")

    size_column = ""
    block_size = 0
    for c in columns:
        bs = block_size_of(c)
        if bs:
            size_column, block_size = c, bs
            break
    if not size_column:
        raise MalformedRowError(header, "no block-count column in header")

    def find(*names: str) -> str | None:
        return next((c for c in columns if c in names), None)

    used_column = find("Used")
    avail_column = find("Avail", "Available")
    if used_column is None or avail_column is None:
        raise MalformedRowError(header, "header lacks Used/Available columns")

    return HeaderLayout(
        columns=columns,
        size_column=size_column,
        used_column=used_column,
        avail_column=avail_column,
        capacity_column=find("Capacity", "Use%"),
        block_size=block_size,
    )


def parse_keyed_line(line: str, layout: HeaderLayout) -> FilesystemRow:
    tokens = split_fields(line)
    n = len(layout.columns)
    if len(tokens) < n:
        raise MalformedRowError(line, f"expected at least {n} fields, got {len(tokens)}")

    # surplus tokens belong to a mount point containing spaces
    values = dict(zip(layout.columns[:-1], tokens[: n - 1]))
    values[layout.mount_column] = " ".join(tokens[n - 1 :])

    capacity = values.get(layout.capacity_column, "") if layout.capacity_column else ""
    return FilesystemRow(
        name=values[layout.columns[0]],
        total_blocks=_to_blocks(values[layout.size_column], line, "size"),
        used_blocks=_to_blocks(values[layout.used_column], line, "used"),
        avail_blocks=_to_blocks(values[layout.avail_column], line, "avail"),
        capacity=capacity,
        mountpoint=values[layout.mount_column],
        block_size=layout.block_size,
    )


def parse_rows(raw: str, portable: bool = False) -> list[FilesystemRow]:
    return list(iter_rows(raw, portable=portable))


def iter_rows(raw: str, portable: bool = False):
    """Yield one row per data line. A malformed line raises when it is reached."""
    header, body = split_lines(raw)
    if portable:
        if not body:
            return
        layout = header_layout(header)
        logger.debug("df header columns: %s (block size %d)", layout.columns, layout.block_size)
        for line in body:
            yield parse_keyed_line(line, layout)
    else:
        for line in body:
            yield parse_line(line)

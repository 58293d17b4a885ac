from __future__ import annotations

from dataclasses import dataclass, field

from fsstat.config import BLOCK_SIZE


@dataclass(frozen=True)
class FilesystemRow:
    name: str
    total_blocks: int
    used_blocks: int
    avail_blocks: int
    capacity: str
    mountpoint: str
    block_size: int = BLOCK_SIZE

    @property
    def total_bytes(self) -> int:
        return self.total_blocks * self.block_size

    @property
    def used_bytes(self) -> int:
        return self.used_blocks * self.block_size

    @property
    def avail_bytes(self) -> int:
        return self.avail_blocks * self.block_size


@dataclass(frozen=True)
class RenderedRow:
    name: str
    size: str
    used: str
    avail: str
    percent: str
    mountpoint: str
    fill: int
    bar: str


@dataclass(frozen=True)
class FilesystemData:
    raw: str
    rows: list[FilesystemRow]
    notes: list[str] = field(default_factory=list)

from __future__ import annotations

import logging
from datetime import datetime

import psutil

from fsstat.config import BLOCK_SIZE, TARGET_PATH
from fsstat.errors import ProcessRunnerError
from fsstat.models.common import CollectorResult
from fsstat.models.filesystem import FilesystemData, FilesystemRow

logger = logging.getLogger(__name__)


class NativeCollector:
    """Reads filesystem statistics straight from the OS instead of parsing ``df``."""

    def __init__(self, path: str = TARGET_PATH, block_size: int = BLOCK_SIZE) -> None:
        self.path = path
        self.block_size = int(block_size)

    def collect(self) -> CollectorResult[FilesystemData]:
        ts = datetime.now()
        warnings: list[str] = []
        notes: list[str] = []

        try:
            u = psutil.disk_usage(self.path)
        except OSError as e:
            raise ProcessRunnerError("statfs", f"{self.path}: {e.strerror or e}") from e

        device = self._device_for(self.path, notes)
        row = FilesystemRow(
            name=device,
            total_blocks=int(u.total) // self.block_size,
            used_blocks=int(u.used) // self.block_size,
            avail_blocks=int(u.free) // self.block_size,
            capacity=f"{int(u.percent)}%",
            mountpoint=self.path,
            block_size=self.block_size,
        )
        logger.debug("statfs %s: total=%d used=%d free=%d", self.path, u.total, u.used, u.free)

        data = FilesystemData(raw="", rows=[row], notes=notes)
        return CollectorResult.build(ts, data, warnings)

    def _device_for(self, path: str, notes: list[str]) -> str:
        try:
            parts = psutil.disk_partitions(all=False)
        except OSError as e:
            notes.append(f"disk_partitions failed: {e}")
            return path
        for p in parts:
            if p.mountpoint == path:
                return str(p.device)
        notes.append(f"no partition mounted at {path}")
        return path

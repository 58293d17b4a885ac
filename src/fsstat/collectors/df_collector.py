from __future__ import annotations

import errno
import logging
import subprocess
from datetime import datetime

from fsstat.config import DF_COMMAND
from fsstat.errors import ProcessRunnerError
from fsstat.models.common import CollectorResult
from fsstat.models.filesystem import FilesystemData
from fsstat.services.df_parser import parse_rows

logger = logging.getLogger(__name__)

_PIPE_ERRNOS = (errno.EMFILE, errno.ENFILE)
_EXEC_ERRNOS = (errno.ENOEXEC, errno.ELOOP, errno.ENAMETOOLONG)


class DfCollector:
    def __init__(
        self,
        command: tuple[str, ...] = DF_COMMAND,
        portable: bool = False,
    ) -> None:
        self.command = tuple(command)
        self.portable = bool(portable)
        self.returncode: int | None = None

    def collect(self) -> CollectorResult[FilesystemData]:
        ts = datetime.now()
        warnings: list[str] = []
        notes: list[str] = []

        raw = self.run()
        if self.returncode:
            warnings.append(f"{self.command[0]} exited with status {self.returncode}")
        if not raw.strip():
            notes.append(f"{self.command[0]} produced no output")

        rows = parse_rows(raw, portable=self.portable)
        logger.debug("parsed %d filesystem rows", len(rows))

        data = FilesystemData(raw=raw, rows=rows, notes=notes)
        return CollectorResult.build(ts, data, warnings)

    def run(self) -> str:
        """Run the command and return everything it wrote to stdout."""
        cmd = list(self.command)
        logger.debug("running: %s", " ".join(cmd))
        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE)
        except (FileNotFoundError, PermissionError) as e:
            raise ProcessRunnerError("exec", f"{cmd[0]}: {e.strerror}") from e
        except OSError as e:
            if e.errno in _EXEC_ERRNOS:
                raise ProcessRunnerError("exec", f"{cmd[0]}: {e.strerror}") from e
            step = "pipe" if e.errno in _PIPE_ERRNOS else "spawn"
            raise ProcessRunnerError(step, e.strerror or str(e)) from e

        with proc:
            # drain to EOF before reaping so a full pipe cannot block the child
            try:
                out = proc.stdout.read() if proc.stdout else b""
            except OSError as e:
                raise ProcessRunnerError("read", e.strerror or str(e)) from e
            try:
                self.returncode = proc.wait()
            except OSError as e:
                raise ProcessRunnerError("wait", e.strerror or str(e)) from e

        if self.returncode:
            logger.warning("%s exited with status %d", cmd[0], self.returncode)
        return out.decode("utf-8", errors="replace")

from __future__ import annotations


class FsstatError(Exception):
    pass


class ProcessRunnerError(FsstatError):
    """An OS-level step of collecting filesystem statistics failed."""

    def __init__(self, step: str, reason: str) -> None:
        super().__init__(f"{step}: {reason}")
        self.step = step
        self.reason = reason


class MalformedRowError(FsstatError, ValueError):
    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"malformed row {line.strip()!r}: {reason}")
        self.line = line
        self.reason = reason

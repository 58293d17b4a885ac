from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CollectorResult(Generic[T]):
    ts: datetime
    status: str
    warning_count: int
    data: T
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def build(cls, ts: datetime, data: T, warnings: list[str]) -> CollectorResult[T]:
        status = "OK" if not warnings else "WARN"
        return cls(
            ts=ts,
            status=status,
            warning_count=len(warnings),
            warnings=list(warnings),
            data=data,
        )

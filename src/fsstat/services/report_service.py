from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from fsstat.config import DEFAULT_CONFIG, HEADER_COLUMNS, DisplayConfig
from fsstat.models.filesystem import FilesystemRow, RenderedRow


def human_bytes(n: int, config: DisplayConfig = DEFAULT_CONFIG) -> str:
    """Scale a byte count to GB/MB/kB with a fixed number of significant digits."""
    if n >= config.gb:
        v, unit = n / config.gb, "GB"
    elif n >= config.mb:
        v, unit = n / config.mb, "MB"
    else:
        v, unit = n / config.kb, "kB"
    return f"{v:.{config.size_precision}g}{unit}"


def usage_percent(used_bytes: int, total_bytes: int, config: DisplayConfig = DEFAULT_CONFIG) -> float:
    if total_bytes <= 0:
        return 0.0
    p = (1.0 * used_bytes / total_bytes) * 100
    if p < config.percent_floor:
        p = 0.0
    return p


def format_percent(p: float, config: DisplayConfig = DEFAULT_CONFIG) -> str:
    return f"{p:.{config.percent_precision}g}%"


def bar_fill(p: float, config: DisplayConfig = DEFAULT_CONFIG) -> int:
    fill = math.floor(config.bar_width * (p / 100))
    return min(max(fill, 0), config.bar_width)


def render_bar(fill: int, config: DisplayConfig = DEFAULT_CONFIG, color: bool = True) -> str:
    active = config.bar_char * fill
    # the muted run spans fill..bar_width inclusive, one cell wider than the bar
    muted = config.bar_char * (config.bar_width + 1 - fill)
    if not color:
        return f"[{active}{muted}]"
    return f"[{config.active_color}{active}{config.muted_color}{muted}{config.reset_color}]"


class ReportService:
    def __init__(
        self,
        config: DisplayConfig = DEFAULT_CONFIG,
        wide: bool = False,
        color: bool = True,
    ) -> None:
        self.config = config
        self.wide = bool(wide)
        self.color = bool(color)

    def name_width(self, rows: Iterable[FilesystemRow] = ()) -> int:
        if not self.wide:
            return self.config.name_width
        return max([self.config.name_width, *(len(r.name) for r in rows)])

    def header(self, name_width: int | None = None) -> str:
        c = self.config
        w = len(c.indent) + (c.name_width if name_width is None else name_width)
        cols = "".join(f"{x:>{c.column_width}}" for x in HEADER_COLUMNS)
        return f"{'Filesystem':<{w}}{cols}"

    def render_row(self, row: FilesystemRow) -> RenderedRow:
        c = self.config
        p = usage_percent(row.used_bytes, row.total_bytes, c)
        fill = bar_fill(p, c)
        return RenderedRow(
            name=row.name,
            size=human_bytes(row.total_bytes, c),
            used=human_bytes(row.used_bytes, c),
            avail=human_bytes(row.avail_bytes, c),
            percent=format_percent(p, c),
            mountpoint=row.mountpoint,
            fill=fill,
            bar=render_bar(fill, c, color=self.color),
        )

    def format_row(self, r: RenderedRow, name_width: int | None = None) -> str:
        c = self.config
        nw = c.name_width if name_width is None else name_width
        cw = c.column_width
        line = (
            f"{c.indent}{r.name:<{nw}}"
            f"{r.size:>{cw}}{r.used:>{cw}}{r.avail:>{cw}}"
            f"{r.percent:>{cw}}{r.mountpoint:>{c.mount_width}}"
        )
        return f"{line}\n{c.indent}{r.bar}"

    def iter_report(self, rows: Iterable[FilesystemRow]) -> Iterator[str]:
        """Yield the header, then one fully rendered block per row.

        Rows are pulled lazily in the default mode, so an error raised by a
        later row stops the report after the rows already yielded. The wide
        mode needs every name up front to size the first column.
        """
        if self.wide:
            rows = list(rows)
        nw = self.name_width(rows)
        yield self.header(nw)
        for row in rows:
            yield self.format_row(self.render_row(row), nw)

    def build_report(self, rows: Iterable[FilesystemRow]) -> str:
        return "\n".join(self.iter_report(rows)) + "\n"

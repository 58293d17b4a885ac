from __future__ import annotations

import argparse
import faulthandler
import logging
import os
import sys

from fsstat.collectors.df_collector import DfCollector
from fsstat.collectors.native_collector import NativeCollector
from fsstat.errors import FsstatError
from fsstat.services.report_service import ReportService

logger = logging.getLogger("fsstat")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsstat",
        description="Report filesystem usage with a colored usage bar per filesystem.",
    )
    parser.add_argument("--wide", action="store_true", help="size the name column to the longest filesystem name")
    parser.add_argument("--portable", action="store_true", help="read df columns by header name instead of position")
    parser.add_argument("--native", action="store_true", help="query the OS directly instead of running df")
    parser.add_argument("--no-color", action="store_true", help="draw usage bars without ANSI colors")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details to stderr")
    return parser


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="fsstat: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    collector = NativeCollector() if args.native else DfCollector(portable=args.portable)
    report = ReportService(wide=args.wide, color=not args.no_color)

    try:
        result = collector.collect()
        for note in result.data.notes:
            logger.debug(note)
        for block in report.iter_report(result.data.rows):
            print(block)
    except FsstatError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        return 130
    except BrokenPipeError:
        _discard_stdout()
        return 1
    return 0


def _discard_stdout() -> None:
    # the reader went away; point stdout at devnull so the exit-time flush stays quiet
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def run() -> None:
    faulthandler.enable()
    raise SystemExit(main())

"""
cli.py - history-recall command line entry point
Features:
- Loads shell history once at startup and builds the search corpus
- JSON mode (default): one request object per stdin line, one response object per stdout line
- Human mode (--human): plain-text queries, results printed one per line with timing
- Startup configuration from a JSON config file, overridden by flags
- Uses Rich for terminal output and logging
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence, TextIO

from rich.console import Console

from history_recall import __version__
from history_recall.core.engine import SearchEngine, SearchRequest
from history_recall.errors import MalformedRequestError, RecallError
from history_recall.history.locator import HistoryLocator
from history_recall.utils.config_manager import Config, Settings
from history_recall.utils.logger_utils import Log, format_duration, logger, setup_logging


# REQUEST DECODING ------------------------------------------------------------------
def decode_request(line: str, settings: Settings) -> SearchRequest:
    """
    Decode one JSON request line.
    Missing or null case_sensitive / max_results fall back to the startup
    settings; a missing or null query is the empty query.
    """
    try:
        raw = json.loads(line)
    except ValueError as e:
        raise MalformedRequestError(line, str(e)) from None
    if not isinstance(raw, dict):
        raise MalformedRequestError(line, "expected a JSON object")

    query = _field(raw, "query", "")
    case_sensitive = _field(raw, "case_sensitive", settings.case_sensitive)
    max_results = _field(raw, "max_results", settings.max_results)
    if not isinstance(query, str):
        raise MalformedRequestError(line, "query must be a string")
    if not isinstance(case_sensitive, bool):
        raise MalformedRequestError(line, "case_sensitive must be a boolean")
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise MalformedRequestError(line, "max_results must be an integer")
    return SearchRequest(query, case_sensitive, max_results)


def _field(raw: dict, key: str, default):
    val = raw.get(key)
    return default if val is None else val


# TRANSPORTS -----------------------------------------------------------------------------
def serve_json(engine: SearchEngine, settings: Settings,
               stdin: TextIO, stdout: TextIO) -> int:
    """Answer JSON requests until EOF. Returns the process exit code."""
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        try:
            req = decode_request(line, settings)
        except MalformedRequestError as e:
            if settings.skip_malformed:
                logger.warning("%s", e)
                continue
            logger.error("%s", e)
            return 1
        resp = engine.handle(req)
        stdout.write(json.dumps(resp.to_payload(), ensure_ascii=False) + "\n")
        stdout.flush()
    return 0


def serve_human(engine: SearchEngine, settings: Settings,
                stdin: TextIO, console: Console) -> int:
    """Plain-text queries; case sensitivity and result count come from settings."""
    for line in stdin:
        req = SearchRequest(line.rstrip("\r\n"), settings.case_sensitive, settings.max_results)
        resp = engine.handle(req)
        for cmd in resp.results:
            # rich expands tabs to spaces, so the indent is written straight to the stream
            console.file.write(f"\t {cmd}\n")
        console.file.flush()
        console.print(f"in {format_duration(resp.elapsed_ns / 1e9)}", style="dim", highlight=False)
    return 0


# STARTUP -----------------------------------------------------------------------
def utf8_text(stream: TextIO, errors: str = "replace") -> TextIO:
    """
    Switch a standard stream to UTF-8 in place. Undecodable input bytes become
    U+FFFD instead of aborting the read loop. Streams that cannot be
    reconfigured (StringIO in tests) are returned as they are.
    """
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding="utf-8", errors=errors)
    return stream


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="history-recall",
        description="Search your shell history. Reads queries on stdin, one per line.",
    )
    p.add_argument("-H", "--human", action="store_true", default=None,
                   help="human at the wheel: stdin reads plain text queries")
    p.add_argument("--case-sensitive", action="store_true", default=None,
                   help="case sensitive search, only used with --human")
    p.add_argument("--max", dest="max_results", type=int, default=None,
                   help="maximum number of results, only used with --human (default 10)")
    p.add_argument("--histfile", action="append", default=None, metavar="PATH",
                   help="extra history file to read, may be repeated")
    p.add_argument("--skip-malformed", action="store_true", default=None,
                   help="skip undecodable JSON requests instead of exiting")
    p.add_argument("--config", metavar="PATH", help="JSON config file")
    p.add_argument("--show-config", action="store_true", help="print effective configuration and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def load_settings(args: argparse.Namespace) -> Settings:
    cfg = Config(args.config)
    settings = cfg.settings(
        human=args.human,
        case_sensitive=args.case_sensitive,
        max_results=args.max_results,
        history_files=args.histfile,
        skip_malformed=args.skip_malformed,
    )
    if args.show_config:
        cfg.show()
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    err = Console(stderr=True, emoji=False)

    try:
        settings = load_settings(args)
        if args.show_config:
            return 0
        with Log.time_block("startup") as t:
            engine = SearchEngine.from_source(HistoryLocator(settings.history_files))
    except RecallError as e:
        logger.error("%s", e)
        return 1

    if settings.human:
        err.print(f"loaded {len(engine)} commands in {format_duration(t.elapsed)}", highlight=False)

    stdin = utf8_text(sys.stdin)
    stdout = utf8_text(sys.stdout, errors="backslashreplace")
    try:
        if settings.human:
            return serve_human(engine, settings, stdin, Console(file=stdout, emoji=False))
        return serve_json(engine, settings, stdin, stdout)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())

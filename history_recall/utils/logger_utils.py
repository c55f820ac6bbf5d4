# logger_utils.py - logging setup and block timing
# Everything goes to stderr: stdout carries the search responses.

import logging
import time

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("history_recall")


def setup_logging(verbose: bool = False, console: Console = None) -> None:
    """Route history_recall logs through rich on stderr. Safe to call more than once."""
    console = console or Console(stderr=True, emoji=False)
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def format_duration(seconds: float) -> str:
    """Short human duration: 812ns, 45.1µs, 1.234ms, 2.5s."""
    if seconds < 1e-6:
        return f"{seconds * 1e9:.0f}ns"
    if seconds < 1e-3:
        return f"{seconds * 1e6:.1f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


class Log:
    """Helpers shared by the CLI for timing startup work."""

    @staticmethod
    def time_block(label):
        """
        Measure how long a block takes:
            with Log.time_block("load history") as t:
                do_some_work()
            print(t.elapsed)
        The duration is logged at DEBUG level.
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label):
        self.label = label
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        logger.debug("%s done in %s", self.label, format_duration(self.elapsed))
        return False

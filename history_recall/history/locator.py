# history_recall/history/locator.py
"""
Finds the user's shell history and loads it.

Candidates are tried in order: explicitly configured files, $HISTFILE,
~/.zsh_history, ~/.bash_history, the fish history file, then per-session zsh
files under ~/.zsh_sessions. Records from every file that exists are
concatenated in that order. A file that exists but cannot be read or parsed is
skipped with a warning; only "nothing exists at all" is an error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from history_recall.errors import HistoryNotFoundError, HistoryParseError
from history_recall.history.parser import parse_file
from history_recall.history.records import CommandRecord

logger = logging.getLogger(__name__)


def candidate_paths(extra: Iterable[str] = (), home: Optional[Path] = None) -> List[str]:
    """Ordered list of places to look for history; empty entries removed."""
    home = home or Path.home()
    paths: List[str] = [os.path.expanduser(str(p)) for p in extra]
    histfile = os.environ.get("HISTFILE")
    if histfile:
        paths.append(os.path.expanduser(histfile))
    paths.append(str(home / ".zsh_history"))
    paths.append(str(home / ".bash_history"))
    paths.append(str(home / ".local" / "share" / "fish" / "fish_history"))
    paths.extend(str(p) for p in sorted((home / ".zsh_sessions").glob("*.history")))

    # same file listed twice (e.g. HISTFILE=~/.zsh_history) is read once
    out: List[str] = []
    for p in paths:
        if p and p not in out:
            out.append(p)
    return out


class HistoryLocator:
    """History source backed by the shell's history files."""

    def __init__(self, extra: Sequence[str] = (), home: Optional[Path] = None):
        self.extra = list(extra)
        self.home = home

    def parse(self) -> List[CommandRecord]:
        candidates = candidate_paths(self.extra, self.home)
        records: List[CommandRecord] = []
        found = False
        for candidate in candidates:
            if not os.path.isfile(candidate):
                continue
            found = True
            try:
                add = parse_file(candidate)
            except (OSError, HistoryParseError) as e:
                logger.warning("skipping %s: %s", candidate, e)
                continue
            logger.debug("read %d commands from %s", len(add), candidate)
            records.extend(add)
        if not found:
            raise HistoryNotFoundError(candidates)
        return records


def parse(extra: Sequence[str] = ()) -> List[CommandRecord]:
    """Load all shell history, oldest first within each file."""
    return HistoryLocator(extra).parse()

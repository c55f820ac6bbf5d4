# history_recall/history/parser.py
"""
Shell history file parsers.

Supported formats:
 - zsh extended history   ": 1647655063:0;cd .."  (multi-line commands allowed)
 - plain history (bash)   one command per line, optional "#<epoch>" lines
 - fish history           "- cmd: ..." entries with "when: <epoch>"

All parsers return CommandRecords oldest first, in file order.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Union

from history_recall.errors import HistoryParseError
from history_recall.history.records import CommandRecord

logger = logging.getLogger(__name__)

ZSH_ENTRY_SEP = "\n: "
ZSH_META = 0x83

_zsh_line_re = re.compile(r"^: \d+:\d+;")
_bash_ts_re = re.compile(r"^#(\d+)\s*$")


def unmetafy(data: bytes) -> bytes:
    """
    Undo zsh metafication: zsh writes certain bytes as 0x83 followed by byte ^ 32.
    """
    if ZSH_META not in data:
        return data
    out = bytearray()
    it = iter(data)
    for b in it:
        if b == ZSH_META:
            nxt = next(it, None)
            if nxt is None:
                break
            out.append(nxt ^ 32)
        else:
            out.append(b)
    return bytes(out)


# zsh --------------------------------------------------------------------------
def _parse_zsh_entry(entry: str) -> CommandRecord:
    # entry looks like "1647655063:0;cd .." once the leading ": " is gone
    ts_raw, sep, rest = entry.partition(":")
    if not sep:
        raise HistoryParseError(f"invalid line: {entry!r}, expected timestamp followed by `:`")
    et_raw, sep, cmd = rest.partition(";")
    if not sep:
        raise HistoryParseError(f"invalid line: {entry!r}, expected execution time followed by `;`")
    try:
        ts = int(ts_raw)
    except ValueError:
        raise HistoryParseError(f"invalid line: {entry!r}, expected timestamp to be an integer") from None
    try:
        et = int(et_raw)
    except ValueError:
        raise HistoryParseError(f"invalid line: {entry!r}, expected execution time to be an integer") from None
    return CommandRecord(ts, et, cmd.strip())


def parse_zsh_extended(text: str) -> List[CommandRecord]:
    """Parse zsh EXTENDED_HISTORY text. Raises HistoryParseError on a bad entry."""
    out: List[CommandRecord] = []
    # a fake newline up front lets the first entry split like the others
    for entry in ("\n" + text).split(ZSH_ENTRY_SEP):
        if not entry.strip():
            continue
        rec = _parse_zsh_entry(entry)
        if rec.command:
            out.append(rec)
    return out


def is_zsh_extended(text: str) -> bool:
    for line in text.splitlines():
        if line.strip():
            return bool(_zsh_line_re.match(line))
    return False


# bash / plain -----------------------------------------------------------------
def parse_plain(text: str) -> List[CommandRecord]:
    """One command per line. "#<epoch>" lines (HISTTIMEFORMAT) timestamp the next command."""
    out: List[CommandRecord] = []
    ts = 0
    for line in text.splitlines():
        m = _bash_ts_re.match(line)
        if m:
            ts = int(m.group(1))
            continue
        cmd = line.strip()
        if not cmd:
            continue
        out.append(CommandRecord(ts, 0, cmd))
        ts = 0
    return out


# fish -------------------------------------------------------------------------
def _unescape_fish(s: str) -> str:
    # fish writes newlines as "\n" and backslashes as "\\"
    out = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch == "\\" and i + 1 < len(s):
            nxt = s[i + 1]
            if nxt == "n":
                out.append("\n")
                i += 2
                continue
            if nxt == "\\":
                out.append("\\")
                i += 2
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def parse_fish(text: str) -> List[CommandRecord]:
    """Parse the YAML-like fish_history format without a YAML dependency."""
    out: List[CommandRecord] = []
    cmd = None
    ts = 0

    def flush():
        if cmd:
            out.append(CommandRecord(ts, 0, cmd))

    for line in text.splitlines():
        if line.startswith("- cmd:"):
            flush()
            cmd = _unescape_fish(line[len("- cmd:"):].strip())
            ts = 0
        elif line.strip().startswith("when:") and cmd is not None:
            try:
                ts = int(line.split(":", 1)[1].strip())
            except ValueError:
                logger.debug("fish history: bad timestamp line %r", line)
    flush()
    return out


# files ------------------------------------------------------------------------
def parse_file(path: Union[str, Path]) -> List[CommandRecord]:
    """
    Read one history file and pick the matching parser.
    Raises OSError if unreadable, HistoryParseError if malformed.
    """
    p = Path(path)
    text = unmetafy(p.read_bytes()).decode("utf-8", errors="replace")
    if p.name == "fish_history":
        return parse_fish(text)
    if is_zsh_extended(text):
        return parse_zsh_extended(text)
    return parse_plain(text)

# history_recall/history/records.py
# A single executed shell command as read from a history file.

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandRecord:
    """
    timestamp: unix seconds when the command started (0 when the shell did not record it)
    execution_time: seconds the command ran (zsh extended history only)
    command: raw command text
    """

    timestamp: int
    execution_time: int
    command: str

# history_recall/history/__init__.py
# shell history acquisition: locating files and parsing them into CommandRecords

from .records import CommandRecord
from .parser import parse_file, parse_fish, parse_plain, parse_zsh_extended
from .locator import HistoryLocator, candidate_paths, parse

__all__ = [
    "CommandRecord",
    "parse_file",
    "parse_fish",
    "parse_plain",
    "parse_zsh_extended",
    "HistoryLocator",
    "candidate_paths",
    "parse",
]

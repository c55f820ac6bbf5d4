# corpus.py
# Builds the in-memory search corpus from raw history records.
# - newest command first, each distinct command kept once
# - a lowercased view, index-aligned with the commands
# - a map from lowercased command back to its original spellings
# Built once at startup, never mutated afterwards.

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from history_recall.history.records import CommandRecord

# characters trimmed from the right end of every command
TRAILING_JUNK = ";\\ \t\n\r"

RecordLike = Union[CommandRecord, str]


def normalize(cmd: str) -> str:
    """Drop trailing separators, line continuations and whitespace."""
    return cmd.rstrip(TRAILING_JUNK)


def fold(text: str) -> str:
    """Case fold used for both the corpus view and incoming queries."""
    return text.lower()


@dataclass(frozen=True)
class Corpus:
    """
    commands: unique normalized commands, most recently used first
    folded:   fold(commands[i]) for every i
    restore:  folded command -> distinct original commands, in corpus order
    """

    commands: Tuple[str, ...] = ()
    folded: Tuple[str, ...] = ()
    restore: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.commands)

    def view(self, case_sensitive: bool) -> Tuple[str, ...]:
        return self.commands if case_sensitive else self.folded


def _text(rec: RecordLike) -> str:
    if isinstance(rec, CommandRecord):
        return rec.command
    return rec


def build_corpus(records: Iterable[RecordLike]) -> Corpus:
    """
    Build a Corpus from history records given oldest first.
    Plain strings are accepted in place of records.
    """
    ordered = list(records)
    ordered.reverse()  # newest first, so the first occurrence is the most recent one

    commands: List[str] = []
    seen = set()
    for rec in ordered:
        cmd = normalize(_text(rec))
        if not cmd or cmd in seen:
            continue
        seen.add(cmd)
        commands.append(cmd)

    folded = [fold(cmd) for cmd in commands]

    variants: Dict[str, List[str]] = {}
    for cmd, low in zip(commands, folded):
        bucket = variants.setdefault(low, [])
        if cmd not in bucket:
            bucket.append(cmd)

    return Corpus(
        commands=tuple(commands),
        folded=tuple(folded),
        restore=MappingProxyType({k: tuple(v) for k, v in variants.items()}),
    )

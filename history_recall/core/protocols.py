# history_recall/core/protocols.py
"""
Protocol interfaces and typed payloads shared by the engine, the history
collaborator and the transport.

The engine depends on these Protocols rather than on concrete classes, so tests
can drive it with plain lists and stub history sources.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from typing_extensions import TypedDict

from history_recall.history.records import CommandRecord


# Typed structures used on the wire ------------------------------------------

class RequestPayload(TypedDict, total=False):
    """
    One decoded JSON request line. Only `query` is required on the wire;
    missing fields fall back to the startup defaults.
    """
    query: str
    case_sensitive: bool
    max_results: int


class ResponsePayload(TypedDict):
    """One JSON response line. `elapsed` is in nanoseconds."""
    query: str
    results: List[str]
    elapsed: int


# Protocols ------------------------------------------------------------------

class Strategy(Protocol):
    """A cascade step: return matching entries of `view`, at most max_results of them."""

    def __call__(self, view: Sequence[str], query: str, max_results: int) -> List[str]:
        ...


class HistorySource(Protocol):
    """Anything that can produce the command history, oldest first."""

    def parse(self) -> List[CommandRecord]:
        ...

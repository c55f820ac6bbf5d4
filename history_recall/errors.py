# history_recall/errors.py
"""
Error types used across history_recall.

Ordinary failures (missing history, bad config, undecodable requests) derive from
RecallError and are handled at the CLI boundary. RestorationError is an internal
consistency fault raised by the search engine; it derives from RuntimeError so
that `except RecallError` never catches it.
"""

from __future__ import annotations

from typing import Sequence


class RecallError(Exception):
    """Base class for ordinary, reportable errors."""


class HistoryNotFoundError(RecallError):
    """No shell history file exists at any candidate location."""

    def __init__(self, tried: Sequence[str]):
        self.tried = list(tried)
        super().__init__(f"no history file found, tried: {self.tried}")


class HistoryParseError(RecallError):
    """A history file could not be parsed."""


class MalformedRequestError(RecallError):
    """A transport line could not be decoded into a search request."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"malformed request {line!r}: {reason}")


class ConfigError(RecallError):
    """Config file or value is invalid."""


class RestorationError(RuntimeError):
    """A folded match has no original-case entry. Indicates a corpus builder defect."""

    def __init__(self, folded: str):
        self.folded = folded
        super().__init__(f"internal error: missing restore case for {folded!r}")

# strategies.py
# The matcher strategies tried by the search cascade, in priority order.
# Every strategy has the signature
#     strategy(view, query, max_results) -> list[str]
# and returns entries of `view` verbatim. The view is shared between
# concurrent searches: strategies only read it and always build a new list.

from __future__ import annotations

from typing import List, Sequence, Tuple

from history_recall.core.fuzzy import fuzzy_match
from history_recall.core.protocols import Strategy
from history_recall.core.subsequence import Predicate, contains, match_ordered, starts_with


def recent(view: Sequence[str], query: str, max_results: int) -> List[str]:
    """Empty query: the most recent commands, as they are."""
    if query or max_results <= 0:
        return []
    return list(view[:max_results])


# whole-command matching -------------------------------------------------------
def _single_match(view: Sequence[str], query: str, max_results: int,
                  fn) -> List[str]:
    results: List[str] = []
    if max_results <= 0:
        return results
    for cmd in view:
        if fn(cmd, query):
            results.append(cmd)
            if len(results) >= max_results:
                break
    return results


def prefix_match(view: Sequence[str], query: str, max_results: int) -> List[str]:
    return _single_match(view, query, max_results, str.startswith)


def substring_match(view: Sequence[str], query: str, max_results: int) -> List[str]:
    return _single_match(view, query, max_results, str.__contains__)


# word-level matching ----------------------------------------------------------
def _multi_match(view: Sequence[str], needles: Sequence[str], max_results: int,
                 predicate: Predicate) -> List[str]:
    """Commands whose whitespace-separated words match needles in order."""
    results: List[str] = []
    if max_results <= 0:
        return results
    for cmd in view:
        if match_ordered(cmd.split(), needles, predicate):
            results.append(cmd)
            if len(results) >= max_results:
                break
    return results


def multi_prefix_match(view: Sequence[str], query: str, max_results: int) -> List[str]:
    """'git c' matches 'git commit -m x': each query word prefixes a later command word."""
    return _multi_match(view, query.split(), max_results, starts_with)


def multi_substring_match(view: Sequence[str], query: str, max_results: int) -> List[str]:
    return _multi_match(view, query.split(), max_results, contains)


def anchored_prefix_match(view: Sequence[str], query: str, max_results: int) -> List[str]:
    """
    Acronym matching: every query character must start a word, in order.
    'gc' matches 'git commit'. Whitespace characters are kept as needles,
    and since no split word starts with whitespace they never match.
    """
    return _multi_match(view, list(query), max_results, starts_with)


STRATEGIES: Tuple[Strategy, ...] = (
    recent,
    prefix_match,
    substring_match,
    multi_prefix_match,
    multi_substring_match,
    anchored_prefix_match,
    fuzzy_match,
)

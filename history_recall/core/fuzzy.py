# fuzzy.py
# Approximate matching for the last cascade step.
# rank_find() plays the role of an external fuzzy-find capability:
#  - a target matches when every query character appears in it, in order
#  - distance is the Levenshtein distance between query and target (rapidfuzz)
# fuzzy_match() layers the recall tie-break policy on top of it.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from rapidfuzz.distance import Levenshtein

# distances in the same bucket of this width are treated as equal
DISTANCE_DISCOUNT = 64


@dataclass(frozen=True)
class Rank:
    source: str
    target: str
    distance: int
    original_index: int


def is_subsequence(query: str, target: str) -> bool:
    """True if the characters of query occur in target in the same order."""
    it = iter(target)
    return all(ch in it for ch in query)


def rank_find(query: str, targets: Sequence[str]) -> List[Rank]:
    """Return a Rank for every target query fuzzily matches, in target order."""
    out: List[Rank] = []
    for idx, target in enumerate(targets):
        if is_subsequence(query, target):
            out.append(Rank(query, target, Levenshtein.distance(query, target), idx))
    return out


def _rank_key(r: Rank):
    # minor differences in distance are not interesting; then prefer more recent commands
    return (r.distance // DISTANCE_DISCOUNT, r.original_index)


def fuzzy_match(view: Sequence[str], query: str, max_results: int) -> List[str]:
    """Cascade strategy: whitespace-free fuzzy find, bucketed by distance, newest first."""
    if max_results <= 0:
        return []
    query = "".join(query.split())  # spaces carry no meaning here
    matches = sorted(rank_find(query, view), key=_rank_key)  # sorted() is stable
    return [m.target for m in matches[:max_results]]

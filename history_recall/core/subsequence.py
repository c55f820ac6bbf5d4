# subsequence.py
# Ordered subsequence matching over token lists.
# Used by the multi-word and anchored-letter strategies.

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

Predicate = Callable[[T, T], bool]


def match_ordered(haystack: Sequence[T], needles: Sequence[T], predicate: Predicate) -> bool:
    """
    Report whether needles can be assigned to strictly increasing haystack
    positions such that predicate(haystack[i_j], needles[j]) holds for each j.

    Single greedy left-to-right scan: each needle takes the first remaining
    haystack element it matches and the cursor moves past it. Linear and
    deterministic. There is no backtracking: this is only sound while the
    predicate looks at one (element, needle) pair at a time, and a predicate
    whose answer depends on what earlier needles consumed is not supported.

    >>> match_ordered(["git", "commit"], ["g", "c"], starts_with)
    True
    """
    if len(needles) > len(haystack):
        return False
    if not needles:
        return True

    i = 0
    n = len(haystack)
    for needle in needles:
        while i < n and not predicate(haystack[i], needle):
            i += 1
        if i == n:
            return False
        i += 1  # consume the matched element
    return True


def starts_with(word: str, needle: str) -> bool:
    return word.startswith(needle)


def contains(word: str, needle: str) -> bool:
    return needle in word

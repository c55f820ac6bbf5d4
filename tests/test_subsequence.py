# tests/test_subsequence.py
# ordered subsequence matcher, with the predicates the strategies use

import pytest

from history_recall.core.subsequence import contains, match_ordered, starts_with


@pytest.mark.parametrize(
    "haystack, needles, want",
    [
        (["a"], ["a"], True),
        (["b"], ["a"], False),
        (["a", "b"], ["a", "b"], True),
        (["b", "a"], ["a", "b"], False),  # order matters
        (["a", "b", "c"], ["a", "b"], True),
        (["a", "c", "b"], ["a", "b"], True),  # gaps allowed
        (["a", "c", "d"], ["a", "b"], False),
        (["aa", "bb", "c", "d"], ["a", "b"], True),  # prefix, not equality
    ],
)
def test_match_ordered_prefix_table(haystack, needles, want):
    assert match_ordered(haystack, needles, starts_with) is want


def test_empty_needles_always_match():
    assert match_ordered([], [], starts_with)
    assert match_ordered(["x"], [], starts_with)


def test_more_needles_than_haystack_never_calls_predicate():
    calls = []

    def spy(word, needle):
        calls.append((word, needle))
        return True

    assert match_ordered(["a"], ["a", "a"], spy) is False
    assert calls == []


def test_each_haystack_element_used_once():
    # both needles prefix "git" but there is only one such word
    assert match_ordered(["git"], ["g", "gi"], starts_with) is False
    assert match_ordered(["git", "gist"], ["g", "gi"], starts_with) is True


def test_contains_predicate():
    assert match_ordered(["checkout", "main"], ["heck", "ai"], contains)
    assert not match_ordered(["checkout", "main"], ["ai", "heck"], contains)


def test_works_on_any_sequence_type():
    assert match_ordered(("one", "two"), ("o", "t"), starts_with)

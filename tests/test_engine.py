# tests/test_engine.py
# cascade orchestration: ordering, dedup, restoration, budget handling

import pytest

from history_recall.core.corpus import Corpus, build_corpus, fold
from history_recall.core.engine import SearchEngine, SearchRequest, SearchResponse
from history_recall.errors import RecallError, RestorationError
from history_recall.history.records import CommandRecord


@pytest.fixture
def engine():
    records = [
        CommandRecord(1, 0, "cd .."),
        CommandRecord(2, 0, "git commit -m x"),
        CommandRecord(3, 0, "git checkout main"),
    ]
    return SearchEngine.from_records(records)


@pytest.fixture
def mixed_case():
    return SearchEngine.from_records([
        "make test",
        "git commit",
        "Docker ps",
        "GIT COMMIT",
        "docker ps -a",
    ])


def test_corpus_from_records(engine):
    assert engine.corpus.commands == ("git checkout main", "git commit -m x", "cd ..")
    assert len(engine) == 3


def test_multi_word_prefix_keeps_recency(engine):
    out = engine.search(SearchRequest("git c", case_sensitive=False, max_results=10))
    assert out == ["git checkout main", "git commit -m x"]


def test_empty_query_returns_recent(engine):
    out = engine.search(SearchRequest("", max_results=2))
    assert out == ["git checkout main", "git commit -m x"]


def test_acronym_and_fuzzy(engine):
    out = engine.search(SearchRequest("gcm", case_sensitive=False, max_results=5))
    # anchored-letter finds "git checkout main", fuzzy then adds "git commit -m x"
    assert out == ["git checkout main", "git commit -m x"]


def test_no_match_is_empty_list(engine):
    assert engine.search(SearchRequest("zzzz", max_results=5)) == []


def test_case_insensitive_restores_every_variant(mixed_case):
    out = mixed_case.search(SearchRequest("git", max_results=10))
    assert out == ["GIT COMMIT", "git commit"]


def test_case_insensitive_query_is_folded(mixed_case):
    out = mixed_case.search(SearchRequest("DOCKER", max_results=10))
    assert out[:2] == ["docker ps -a", "Docker ps"]


def test_case_sensitive_uses_original_view(mixed_case):
    out = mixed_case.search(SearchRequest("git", case_sensitive=True, max_results=10))
    assert out[0] == "git commit"
    assert "GIT COMMIT" not in out


def test_restored_results_fold_into_corpus(mixed_case):
    for q in ("", "git", "dock", "p", "dp", "mkt"):
        out = mixed_case.search(SearchRequest(q, max_results=10))
        for cmd in out:
            assert fold(cmd) in mixed_case.corpus.folded


@pytest.mark.parametrize("q", ["", "g", "git", "c", "m", "gcm", "x", "git checkout"])
@pytest.mark.parametrize("n", [1, 2, 3, 10])
def test_results_bounded_unique_and_stable(engine, q, n):
    req = SearchRequest(q, max_results=n)
    first = engine.search(req)
    assert len(first) <= n
    assert len(set(first)) == len(first)
    assert engine.search(req) == first
    for cmd in first:
        assert cmd in engine.corpus.commands


@pytest.mark.parametrize("n", [0, -1, -100])
def test_non_positive_budget(engine, n):
    assert engine.search(SearchRequest("", max_results=n)) == []
    assert engine.search(SearchRequest("git", max_results=n)) == []


def test_missing_restore_entry_is_a_fault():
    broken = Corpus(commands=("Ls",), folded=("ls",), restore={})
    eng = SearchEngine(broken)
    with pytest.raises(RestorationError) as exc:
        eng.search(SearchRequest("l", case_sensitive=False, max_results=5))
    assert exc.value.folded == "ls"
    assert not isinstance(exc.value, RecallError)


def test_cascade_passes_full_budget_and_stops_when_full():
    seen_budgets = []
    calls = []

    def first(view, query, max_results):
        seen_budgets.append(max_results)
        return ["a"]

    def second(view, query, max_results):
        seen_budgets.append(max_results)
        return ["a", "b", "c"]

    def third(view, query, max_results):
        calls.append(query)
        return ["d"]

    eng = SearchEngine(build_corpus(["c", "b", "a"]), strategies=[first, second, third])
    out = eng.search(SearchRequest("q", case_sensitive=True, max_results=2))
    assert out == ["a", "b"]
    assert seen_budgets == [2, 2]
    assert calls == []


def test_cascade_runs_all_strategies_when_short():
    eng = SearchEngine(build_corpus(["x"]), strategies=[lambda v, q, n: [], lambda v, q, n: list(v)])
    assert eng.search(SearchRequest("", case_sensitive=True, max_results=5)) == ["x"]


def test_strategies_never_mutate_corpus(engine):
    before = engine.corpus.commands, engine.corpus.folded
    engine.search(SearchRequest("", max_results=1))
    engine.search(SearchRequest("git", max_results=1))
    assert (engine.corpus.commands, engine.corpus.folded) == before


def test_handle_reports_timing(engine):
    resp = engine.handle(SearchRequest("cd", max_results=3))
    assert isinstance(resp, SearchResponse)
    assert resp.query == "cd"
    assert resp.results == ["cd .."]
    assert resp.elapsed_ns >= 0
    assert resp.to_payload() == {"query": "cd", "results": ["cd .."], "elapsed": resp.elapsed_ns}


def test_search_many_matches_sequential(engine):
    reqs = [SearchRequest(q, max_results=n) for q in ("", "git", "gcm", "cd", "nope") for n in (1, 3)]
    responses = engine.search_many(reqs, max_workers=4)
    assert [r.query for r in responses] == [r.query for r in reqs]
    assert [r.results for r in responses] == [engine.search(r) for r in reqs]


class StubSource:
    def __init__(self, cmds):
        self.cmds = cmds
        self.calls = 0

    def parse(self):
        self.calls += 1
        return [CommandRecord(i, 0, c) for i, c in enumerate(self.cmds)]


def test_from_source_reads_history_once():
    src = StubSource(["ls", "pwd", "ls"])
    eng = SearchEngine.from_source(src)
    eng.search(SearchRequest("", max_results=5))
    eng.search(SearchRequest("l", max_results=5))
    assert src.calls == 1
    assert eng.corpus.commands == ("ls", "pwd")

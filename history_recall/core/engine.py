# history_recall/core/engine.py
"""
SearchEngine - the search cascade over a prebuilt Corpus.

For each request:
 - pick the view: original commands (case sensitive) or the folded view
 - run each strategy in priority order with the full result budget
 - map folded hits back to their original spellings, dropping duplicates
 - stop as soon as the budget is reached

The engine holds no per-request state. The corpus is immutable, so one engine
can serve concurrent callers without locking (see search_many).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from history_recall.core.corpus import Corpus, build_corpus, fold
from history_recall.core.protocols import HistorySource, ResponsePayload, Strategy
from history_recall.core.strategies import STRATEGIES
from history_recall.errors import RestorationError
from history_recall.utils.threaded_runner import run_parallel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    query: str
    case_sensitive: bool = False
    max_results: int = 10


@dataclass(frozen=True)
class SearchResponse:
    query: str
    results: List[str] = field(default_factory=list)
    elapsed_ns: int = 0

    def to_payload(self) -> ResponsePayload:
        return {"query": self.query, "results": list(self.results), "elapsed": self.elapsed_ns}


class SearchEngine:
    """
    Public API:
      search(request) -> list[str]
      handle(request) -> SearchResponse (search + timing)
      search_many(requests, max_workers) -> list[SearchResponse]
    """

    def __init__(self, corpus: Corpus, strategies: Sequence[Strategy] = STRATEGIES):
        self.corpus = corpus
        self.strategies = tuple(strategies)

    @classmethod
    def from_records(cls, records: Iterable, **kwargs) -> "SearchEngine":
        return cls(build_corpus(records), **kwargs)

    @classmethod
    def from_source(cls, source: HistorySource, **kwargs) -> "SearchEngine":
        """Load history once and build the engine; the corpus is fixed from then on."""
        records = source.parse()
        logger.debug("building corpus from %d history records", len(records))
        return cls.from_records(records, **kwargs)

    def __len__(self) -> int:
        return len(self.corpus)

    # cascade -------------------------------------------------------------------
    def search(self, request: SearchRequest) -> List[str]:
        """Return at most request.max_results distinct commands matching request.query."""
        budget = request.max_results
        if budget <= 0:
            return []

        case_sensitive = request.case_sensitive
        view = self.corpus.view(case_sensitive)
        query = request.query if case_sensitive else fold(request.query)

        results: List[str] = []
        seen = set()
        for strategy in self.strategies:
            # Always pass the full budget: some hits may duplicate earlier ones.
            for hit in strategy(view, query, budget):
                for cmd in self._restore(hit, case_sensitive):
                    if cmd in seen:
                        continue
                    seen.add(cmd)
                    results.append(cmd)
            if len(results) >= budget:
                logger.debug("query %r satisfied by %s", request.query, getattr(strategy, "__name__", strategy))
                return results[:budget]
        return results

    def _restore(self, hit: str, case_sensitive: bool) -> Sequence[str]:
        if case_sensitive:
            return (hit,)
        originals = self.corpus.restore.get(hit)
        if not originals:
            raise RestorationError(hit)
        return originals

    def handle(self, request: SearchRequest) -> SearchResponse:
        start = time.perf_counter_ns()
        results = self.search(request)
        return SearchResponse(request.query, results, time.perf_counter_ns() - start)

    def search_many(self, requests: Iterable[SearchRequest], max_workers: int = 4) -> List[SearchResponse]:
        """Serve several requests concurrently; responses are in request order."""
        return run_parallel([lambda r=r: self.handle(r) for r in requests], max_workers=max_workers)

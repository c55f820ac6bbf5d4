"""
history_recall.core

The search engine behind history-recall.
Contains:
 - corpus construction: dedup, recency order, case folding (build_corpus)
 - the ordered subsequence matcher shared by word-level strategies
 - the seven cascade strategies and the fuzzy tie-break policy
 - the cascade orchestrator (SearchEngine)
"""

from .corpus import Corpus, build_corpus, normalize
from .engine import SearchEngine, SearchRequest, SearchResponse
from .strategies import STRATEGIES
from .subsequence import match_ordered

__all__ = [
    "Corpus",
    "build_corpus",
    "normalize",
    "SearchEngine",
    "SearchRequest",
    "SearchResponse",
    "STRATEGIES",
    "match_ordered",
]

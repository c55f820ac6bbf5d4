"""
history_recall

Interactive shell-history search: load every command you have run, then answer
queries with an ordered, deduplicated, bounded list of matching commands.
"""

__version__ = "0.1.0"

from .core import SearchEngine, SearchRequest, SearchResponse, build_corpus  # noqa: E402

__all__ = ["SearchEngine", "SearchRequest", "SearchResponse", "build_corpus", "__version__"]

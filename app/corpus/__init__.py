"""
Corpus store abstractions and factories.
"""

from app.config import settings
from app.corpus.json_store import JsonCorpusStore


def get_corpus_store():
    """
    Factory to obtain the configured CorpusStore instance.
    Currently the corpus is a single precomputed JSON file.
    """
    return JsonCorpusStore(path=settings.corpus_path, cache_enabled=settings.corpus_cache_enabled)


__all__ = ["get_corpus_store", "JsonCorpusStore"]

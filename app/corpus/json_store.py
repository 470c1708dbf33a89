"""
JSON-file corpus store for the precomputed syllabus embeddings.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

from app.config import settings
from app.corpus.base import Chunk, CorpusStore, parse_chunks
from app.errors import CorpusUnavailable

CORPUS_PATH = settings.corpus_path

logger = logging.getLogger(__name__)


def _read_chunks(path: Path) -> List[Chunk]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CorpusUnavailable(f"Corpus file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusUnavailable(f"Corpus file is not readable: {path} ({exc})") from exc

    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise CorpusUnavailable(f"Corpus file is not valid JSON: {path} ({exc.msg} at line {exc.lineno})") from exc

    return parse_chunks(raw)


@lru_cache(maxsize=4)
def _read_chunks_cached(path: str, mtime_ns: int) -> Tuple[Chunk, ...]:
    # mtime_ns is part of the key only; a modified file misses the cache.
    return tuple(_read_chunks(Path(path)))


class JsonCorpusStore(CorpusStore):
    def __init__(self, path: str | Path | None = None, cache_enabled: bool | None = None) -> None:
        self.path = Path(path or CORPUS_PATH)
        self.cache_enabled = settings.corpus_cache_enabled if cache_enabled is None else cache_enabled

    def load(self) -> List[Chunk]:
        if not self.cache_enabled:
            chunks = _read_chunks(self.path)
        else:
            try:
                mtime_ns = self.path.stat().st_mtime_ns
            except FileNotFoundError as exc:
                raise CorpusUnavailable(f"Corpus file not found: {self.path}") from exc
            except OSError as exc:
                raise CorpusUnavailable(f"Corpus file is not readable: {self.path} ({exc})") from exc
            chunks = list(_read_chunks_cached(str(self.path.resolve()), mtime_ns))

        logger.debug(
            "Corpus loaded",
            extra={"path": str(self.path), "chunks": len(chunks), "cached": self.cache_enabled},
        )
        return chunks

    def describe(self) -> Dict[str, Any]:
        """Summary of the corpus for status endpoints and inspection scripts."""
        try:
            chunks = self.load()
        except CorpusUnavailable as exc:
            return {
                "available": False,
                "path": str(self.path.resolve()),
                "chunk_count": 0,
                "dimension": None,
                "message": exc.message,
            }

        return {
            "available": True,
            "path": str(self.path.resolve()),
            "chunk_count": len(chunks),
            "dimension": len(chunks[0].embedding) if chunks else None,
            "message": None,
        }


def clear_corpus_cache() -> None:
    _read_chunks_cached.cache_clear()


__all__ = ["JsonCorpusStore", "CORPUS_PATH", "clear_corpus_cache"]

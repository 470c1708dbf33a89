"""
CLI to run the retrieval pipeline for a text question.

Example:
    python -m scripts.search_query --question "When is the midterm?" --top-k 4
"""

from __future__ import annotations

import argparse
import logging
import sys

from app.config import settings, setup_logging
from app.corpus import get_corpus_store
from app.embeddings.client import EmbeddingsClient
from app.errors import RetrievalError
from app.rag.pipeline import RetrievalService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Retrieve syllabus chunks for a question.")
    parser.add_argument("--question", "-q", required=True, help="Question text")
    parser.add_argument("--top-k", type=int, default=settings.default_top_k, help="How many chunks to return")
    parser.add_argument("--snippet", type=int, default=300, help="Snippet length")
    parser.add_argument("--context", action="store_true", help="Print the assembled context string")
    return parser.parse_args()


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    service = RetrievalService(
        corpus_store=get_corpus_store(),
        embedder=EmbeddingsClient(),
        logger_=logger,
    )

    try:
        result = service.retrieve(args.question, top_k=args.top_k)
    except RetrievalError as exc:
        logger.error("Retrieval failed: [%s] %s", exc.kind, exc.message)
        sys.exit(1)

    if not result.top_chunks:
        print("No results")
        return

    for idx, chunk in enumerate(result.top_chunks, start=1):
        snippet = chunk.text[: args.snippet].replace("\n", " ")
        print(f"\n#{idx} similarity={chunk.similarity:.4f} chunk_id={chunk.chunk_id}")
        print("text:", snippet + ("..." if len(chunk.text) > args.snippet else ""))

    if args.context:
        print("\n=== Context ===")
        print(result.context)


if __name__ == "__main__":
    main()

"""
Utility script to inspect corpus chunks without embeddings.

Usage:
    python -m scripts.inspect_corpus --limit 5 --offset 0
"""

from __future__ import annotations

import argparse
import json
import sys

from app.corpus import get_corpus_store
from app.errors import CorpusUnavailable


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect chunks in the syllabus corpus.")
    parser.add_argument("--limit", type=int, default=5, help="Number of chunks to show")
    parser.add_argument("--offset", type=int, default=0, help="Offset for pagination")
    args = parser.parse_args()

    store = get_corpus_store()
    status = store.describe()
    print(json.dumps(status, ensure_ascii=False, indent=2))
    if not status["available"]:
        sys.exit(1)

    try:
        chunks = store.load()
    except CorpusUnavailable as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)

    page = chunks[args.offset : args.offset + args.limit]
    print(f"Showing {len(page)} chunks (offset={args.offset}, limit={args.limit})")
    for chunk in page:
        print(f"\n#{chunk.chunk_id} dim={len(chunk.embedding)}")
        snippet = chunk.text[:400].replace("\n", " ")
        print("Text:", snippet + ("..." if len(chunk.text) > 400 else ""))


if __name__ == "__main__":
    main()

import json
from pathlib import Path

import pytest

from app.corpus.json_store import clear_corpus_cache

SYLLABUS_RECORDS = [
    {"chunk_id": 1, "text": "CS 61A teaches the fundamentals of programming.", "embedding": [1.0, 0.0, 0.0, 0.0]},
    {"chunk_id": 2, "text": "Grades are based on homework, projects and exams.", "embedding": [0.0, 1.0, 0.0, 0.0]},
    {"chunk_id": 3, "text": "The midterm is held in week 8.", "embedding": [0.0, 0.0, 1.0, 0.0]},
    {"chunk_id": 4, "text": "Office hours are listed on the course calendar.", "embedding": [0.0, 0.0, 0.0, 1.0]},
    {"chunk_id": 5, "text": "Late homework is not accepted.", "embedding": [0.5, 0.5, 0.0, 0.0]},
]

# Closest to chunk 3; chunks 1 and 4 tie for second place.
MIDTERM_QUERY_VECTOR = [0.1, 0.0, 0.9, 0.1]


@pytest.fixture(autouse=True)
def _reset_corpus_cache():
    clear_corpus_cache()
    yield
    clear_corpus_cache()


@pytest.fixture
def write_corpus(tmp_path: Path):
    def _write(records=SYLLABUS_RECORDS, name: str = "corpus.json") -> Path:
        path = tmp_path / name
        if isinstance(records, str):
            path.write_text(records, encoding="utf-8")
        else:
            path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus_path(write_corpus) -> Path:
    return write_corpus()

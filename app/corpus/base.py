"""
Corpus record types and the schema used to validate the embeddings file.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from app.errors import CorpusUnavailable


@dataclass(frozen=True)
class Chunk:
    chunk_id: int
    text: str
    embedding: Tuple[float, ...]


class ChunkRecord(BaseModel):
    """One entry of the corpus JSON array as it is stored on disk."""

    model_config = ConfigDict(extra="ignore")

    chunk_id: StrictInt
    text: StrictStr = Field(..., min_length=1)
    embedding: List[Union[StrictInt, StrictFloat]] = Field(..., min_length=1)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value

    @field_validator("embedding")
    @classmethod
    def _embedding_finite(cls, value: List[float]) -> List[float]:
        if not all(math.isfinite(v) for v in value):
            raise ValueError("embedding must contain only finite numbers")
        return value

    def to_chunk(self) -> Chunk:
        return Chunk(
            chunk_id=self.chunk_id,
            text=self.text,
            embedding=tuple(float(v) for v in self.embedding),
        )


_RECORDS = TypeAdapter(List[ChunkRecord])


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = list(first.get("loc", ()))
    if loc and isinstance(loc[0], int):
        record, field = loc[0], ".".join(str(part) for part in loc[1:])
        where = f"record {record}" + (f", field '{field}'" if field else "")
    else:
        where = "corpus root"
    return f"{where}: {first.get('msg')} ({exc.error_count()} error(s) total)"


def parse_chunks(raw: Any) -> List[Chunk]:
    """
    Validate decoded JSON against the chunk schema.

    Fails fast with ``CorpusUnavailable`` naming the first offending record, and
    rejects embeddings whose dimension differs from the first record.
    """
    try:
        records = _RECORDS.validate_python(raw)
    except ValidationError as exc:
        raise CorpusUnavailable(f"Corpus does not match the expected shape: {_describe_validation_error(exc)}") from exc

    chunks = [record.to_chunk() for record in records]
    if chunks:
        dimension = len(chunks[0].embedding)
        for idx, chunk in enumerate(chunks):
            if len(chunk.embedding) != dimension:
                raise CorpusUnavailable(
                    f"Corpus does not match the expected shape: record {idx} has embedding dimension "
                    f"{len(chunk.embedding)}, expected {dimension}"
                )
    return chunks


class CorpusStore(Protocol):
    def load(self) -> Sequence[Chunk]:
        ...

    def describe(self) -> Dict[str, Any]:
        ...


__all__ = ["Chunk", "ChunkRecord", "CorpusStore", "parse_chunks"]

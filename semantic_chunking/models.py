"""
Data Models for the Semantic Chunking Pipeline

Defines:
1. Sentence / SentenceEmbedding - Units produced by segmentation and embedding
2. ChunkingConfig - Max-Min thresholds (hard_thr, init_const, c)
3. Chunk - A contiguous run of sentences emitted as one retrieval unit
4. ChunkingResult - Complete chunking output with statistics
5. ChunkRequest / ChunkResponse - HTTP payloads

Design Principles:
- Pydantic v2 for validation and serialization
- Chunk boundaries are sentence index ranges, validated as contiguous
- Save/load pattern for persisted results

Usage:
    config = ChunkingConfig.for_source(is_pdf=True)
    result = chunker.chunk(text, is_pdf=True, config=config)
    result.save("chunks.json")
"""

import json
import math
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sentence(BaseModel):
    """A sentence-like unit in original document order."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    text: str = Field(..., min_length=1)


class SentenceEmbedding(BaseModel):
    """Embedding vector for the sentence with the same index."""
    index: int = Field(..., ge=0)
    vector: list[float] = Field(..., min_length=1)


class ChunkingConfig(BaseModel):
    """
    Thresholds for the Max-Min chunk assembler.

    A two-sentence chunk admits the next sentence when
    ``init_const * similarity > hard_thr``. Larger chunks admit it when the
    best similarity to any member exceeds
    ``max(c * min_pairwise * sigmoid(size), hard_thr)``.

    PDFs use higher values (see ``for_source``) to favor merging, which
    compensates for extraction noise.
    """
    hard_thr: float = Field(
        0.4,
        description="Absolute similarity floor for admitting a sentence",
        ge=-1.0,
    )
    init_const: float = Field(
        1.5,
        description="Multiplier applied to the similarity of a one-sentence chunk",
        ge=0.0,
    )
    c: float = Field(
        0.9,
        description="Scale applied to the chunk's minimum pairwise similarity",
        ge=0.0,
    )

    @field_validator("hard_thr", "init_const", "c")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("threshold values must be finite")
        return value

    @classmethod
    def for_source(cls, is_pdf: bool, **overrides: float) -> "ChunkingConfig":
        """Default thresholds for the given source type, with optional overrides."""
        defaults: dict[str, float] = (
            {"hard_thr": 0.5, "init_const": 2.0, "c": 0.9}
            if is_pdf
            else {"hard_thr": 0.4, "init_const": 1.5, "c": 0.9}
        )
        defaults.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**defaults)


class ChunkingOverrides(BaseModel):
    """
    Partial threshold override from a caller.

    Fields left out keep the default for the document's source type, so a
    PDF request that only sets ``hard_thr`` still uses ``init_const=2.0``.
    """
    hard_thr: Optional[float] = Field(None, ge=-1.0)
    init_const: Optional[float] = Field(None, ge=0.0)
    c: Optional[float] = Field(None, ge=0.0)

    @field_validator("hard_thr", "init_const", "c")
    @classmethod
    def _finite(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isfinite(value):
            raise ValueError("threshold values must be finite")
        return value

    def resolve(self, is_pdf: bool) -> ChunkingConfig:
        return ChunkingConfig.for_source(is_pdf, **self.model_dump())


class ChunkingMethod(str, Enum):
    """How the chunks of a result were produced."""
    MAX_MIN_SEMANTIC = "max_min_semantic"
    SINGLE_SENTENCE = "single_sentence"
    PASSTHROUGH = "passthrough"
    FIXED_SIZE_FALLBACK = "fixed_size_fallback"
    TABLE_AWARE = "table_aware"
    TRADITIONAL_FIXED_SIZE = "traditional_fixed_size"


class Chunk(BaseModel):
    """
    A group of sentences emitted together as one retrieval unit.

    ``sentence_indices`` is always a contiguous, increasing run. Chunks that
    were not built from sentences (fallback windows, table pieces) carry an
    empty list.
    """
    sentence_indices: list[int] = Field(
        default_factory=list,
        description="Contiguous indices of the member sentences",
    )
    text: str = Field(
        ...,
        description="Member sentence texts joined by a single space",
    )

    @field_validator("sentence_indices")
    @classmethod
    def _contiguous(cls, value: list[int]) -> list[int]:
        for prev, cur in zip(value, value[1:]):
            if cur != prev + 1:
                raise ValueError(
                    f"sentence_indices must be contiguous, got {value}"
                )
        return value


class ChunkingStats(BaseModel):
    """Statistics about the chunking process."""
    total_chunks: int = 0
    total_sentences: int = 0
    embedding_calls: int = 0
    total_tokens: int = 0
    avg_chunk_chars: float = 0.0
    min_chunk_chars: int = 0
    max_chunk_chars: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking one document.

    ``texts`` is the ordered list of chunk strings handed to the
    downstream embedding and upsert step.
    """
    document_id: str = Field(
        ...,
        description="Identifier of the chunked document",
    )
    is_pdf: bool = Field(
        False,
        description="Whether the source was treated as PDF-extracted text",
    )
    method: ChunkingMethod = Field(
        ...,
        description="Strategy that produced the chunks",
    )
    config: ChunkingConfig = Field(
        default_factory=ChunkingConfig,
        description="Thresholds used for chunking",
    )
    chunks: list[Chunk] = Field(
        default_factory=list,
        description="Chunks in document order",
    )
    stats: ChunkingStats = Field(
        default_factory=ChunkingStats,
        description="Chunking statistics",
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def texts(self) -> list[str]:
        return [chunk.text for chunk in self.chunks]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


class ChunkRequest(BaseModel):
    text: str
    is_pdf: Optional[bool] = None
    file_name: Optional[str] = None
    extraction_method: Optional[str] = None
    document_id: Optional[str] = None
    config: Optional[ChunkingOverrides] = None
    save: bool = False


class ChunkResponse(BaseModel):
    document_id: str
    method: ChunkingMethod
    total_chunks: int
    chunks: list[str] = Field(default_factory=list)
    output_path: Optional[str] = None

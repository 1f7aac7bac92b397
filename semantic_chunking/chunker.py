"""
Semantic Chunker - Core chunking engine for the ingestion pipeline

Takes raw extracted document text and returns ordered chunks ready for
embedding and vector store upsert.

Algorithm:
1. PDF sources only: reconstruct hard-wrapped lines into sentences.
2. Separate tables from running text. Tables are chunked by rows; every
   text segment continues with the steps below.
3. Split the text into sentences (length-normalized, deduplicated).
4. Guard: more than 500 sentences means degenerate structure; fall back to
   fixed 2000-character windows without embedding anything.
5. Embed all sentences in ordered batches of 100.
6. Group sentences into chunks with the Max-Min assembler.

Usage:
    from semantic_chunking import SemanticChunker, OllamaEmbedder

    chunker = SemanticChunker(OllamaEmbedder())
    result = chunker.chunk(text, is_pdf=True)
    result.save("chunks.json")
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .assembler import assemble
from .embedder import DEFAULT_BATCH_SIZE, EmbeddingBatchClient, batch_count, embed_in_batches
from .fallback import FALLBACK_WINDOW_CHARS, fixed_size_chunks
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingMethod,
    ChunkingResult,
    ChunkingStats,
    Sentence,
)
from .pdf_reconstructor import reconstruct_pdf_text
from .sentence_splitter import split_sentences
from .tables import DEFAULT_TABLE_MAX_ROWS, chunk_table, segment_content
from .token_counter import count_tokens_batch

logger = logging.getLogger(__name__)

DEFAULT_MAX_SENTENCES = 500


@dataclass
class _SegmentOutcome:
    method: ChunkingMethod
    chunks: list[Chunk] = field(default_factory=list)
    sentence_count: int = 0
    embedding_calls: int = 0


class SemanticChunker:
    """
    Partitions document text into semantically coherent chunks.

    Instances hold no per-document state; one chunker can serve many
    documents, including concurrently.
    """

    def __init__(
        self,
        embedder: EmbeddingBatchClient,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_sentences: int = DEFAULT_MAX_SENTENCES,
        fallback_window: int = FALLBACK_WINDOW_CHARS,
        table_max_rows: int = DEFAULT_TABLE_MAX_ROWS,
        detect_tables: bool = True,
    ):
        self.embedder = embedder
        self.batch_size = batch_size
        self.max_sentences = max_sentences
        self.fallback_window = fallback_window
        self.table_max_rows = table_max_rows
        self.detect_tables = detect_tables

    def chunk(
        self,
        text: str,
        is_pdf: bool = False,
        config: Optional[ChunkingConfig] = None,
        document_id: str = "document",
    ) -> ChunkingResult:
        """
        Chunk one document.

        Args:
            text: Raw extracted text.
            is_pdf: Whether the text came from a PDF extractor.
            config: Threshold override; defaults depend on ``is_pdf``.
            document_id: Identifier recorded on the result.

        Returns:
            ChunkingResult with chunks in document order.

        Raises:
            EmbeddingError: If the embedding provider fails. No partial
                result is returned.
            AlignmentError: If the provider output cannot be aligned with
                the sentences.
        """
        config = config or ChunkingConfig.for_source(is_pdf)

        if is_pdf:
            logger.info(f"PDF reconstruction: {len(text)} chars")
            text = reconstruct_pdf_text(text)
            logger.info(f"PDF reconstruction done: {len(text)} chars")

        segments = segment_content(text) if self.detect_tables else []
        plain = not segments or (len(segments) == 1 and segments[0].kind == "text")

        if plain:
            outcome = self._chunk_text(text, config, keep_blank=True)
        else:
            outcome = self._chunk_segments(segments, config)

        logger.info(
            f"{outcome.method.value}: {outcome.sentence_count} sentences -> "
            f"{len(outcome.chunks)} chunks ({outcome.embedding_calls} embedding calls)"
        )

        return ChunkingResult(
            document_id=document_id,
            is_pdf=is_pdf,
            method=outcome.method,
            config=config,
            chunks=outcome.chunks,
            stats=compute_stats(
                outcome.chunks,
                total_sentences=outcome.sentence_count,
                embedding_calls=outcome.embedding_calls,
            ),
        )

    def chunk_text(
        self,
        text: str,
        is_pdf: bool = False,
        config: Optional[ChunkingConfig] = None,
    ) -> list[str]:
        """Chunk one document and return only the chunk strings."""
        return self.chunk(text, is_pdf=is_pdf, config=config).texts

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _chunk_segments(self, segments, config: ChunkingConfig) -> _SegmentOutcome:
        """Table-aware path: chunk each segment and keep document order."""
        tables = sum(1 for s in segments if s.kind == "table")
        logger.info(
            f"Table-aware chunking: {len(segments)} segments "
            f"({tables} tables, {len(segments) - tables} text)"
        )

        outcome = _SegmentOutcome(method=ChunkingMethod.TABLE_AWARE)
        for segment in segments:
            if segment.kind == "table":
                outcome.chunks.extend(
                    Chunk(text=piece) for piece in chunk_table(segment, self.table_max_rows)
                )
                continue
            part = self._chunk_text(
                segment.content,
                config,
                keep_blank=False,
                offset=outcome.sentence_count,
            )
            outcome.chunks.extend(part.chunks)
            outcome.sentence_count += part.sentence_count
            outcome.embedding_calls += part.embedding_calls
        return outcome

    def _chunk_text(
        self,
        text: str,
        config: ChunkingConfig,
        keep_blank: bool,
        offset: int = 0,
    ) -> _SegmentOutcome:
        sentences = split_sentences(text)

        if not sentences:
            if keep_blank:
                chunks = assemble([], [], config, fallback_text=text)
            else:
                chunks = [Chunk(text=text.strip())] if text.strip() else []
            return _SegmentOutcome(method=ChunkingMethod.PASSTHROUGH, chunks=chunks)

        if offset:
            sentences = [Sentence(index=s.index + offset, text=s.text) for s in sentences]

        if len(sentences) == 1:
            return _SegmentOutcome(
                method=ChunkingMethod.SINGLE_SENTENCE,
                chunks=[Chunk(sentence_indices=[sentences[0].index], text=sentences[0].text)],
                sentence_count=1,
            )

        if len(sentences) > self.max_sentences:
            logger.warning(
                f"{len(sentences)} sentences detected; the text structure is likely "
                f"degenerate. Falling back to fixed-size chunking."
            )
            return _SegmentOutcome(
                method=ChunkingMethod.FIXED_SIZE_FALLBACK,
                chunks=[Chunk(text=piece) for piece in fixed_size_chunks(text, self.fallback_window)],
                sentence_count=len(sentences),
            )

        logger.info(f"Max-Min chunking: processing {len(sentences)} sentences")
        vectors = embed_in_batches(
            self.embedder,
            [s.text for s in sentences],
            batch_size=self.batch_size,
        )
        return _SegmentOutcome(
            method=ChunkingMethod.MAX_MIN_SEMANTIC,
            chunks=assemble(sentences, vectors, config),
            sentence_count=len(sentences),
            embedding_calls=batch_count(len(sentences), self.batch_size),
        )


def compute_stats(
    chunks: list[Chunk],
    total_sentences: int = 0,
    embedding_calls: int = 0,
) -> ChunkingStats:
    """Compute statistics about the produced chunks."""
    texts = [c.text for c in chunks if c.text]
    if not texts:
        return ChunkingStats(
            total_chunks=len(chunks),
            total_sentences=total_sentences,
            embedding_calls=embedding_calls,
        )

    lengths = [len(t) for t in texts]
    return ChunkingStats(
        total_chunks=len(chunks),
        total_sentences=total_sentences,
        embedding_calls=embedding_calls,
        total_tokens=sum(count_tokens_batch(texts)),
        avg_chunk_chars=sum(lengths) / len(lengths),
        min_chunk_chars=min(lengths),
        max_chunk_chars=max(lengths),
    )

import logging
from pathlib import Path
from typing import Any, Optional

from .chunker import SemanticChunker, compute_stats
from .config import ChunkingServiceConfig
from .embedder import EmbeddingBatchClient, create_embedder
from .exceptions import ChunkingError, format_error_chain
from .fallback import (
    TRADITIONAL_CHUNK_OVERLAP,
    TRADITIONAL_CHUNK_SIZE,
    recursive_chunks,
)
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingMethod,
    ChunkingOverrides,
    ChunkingResult,
)
from .storage import ChunkingStorage

logger = logging.getLogger(__name__)

PDF_EXTRACTION_METHODS = {"pdf", "ocr"}
CHUNK_COUNT_WARNING = 100


def detect_pdf(file_name: Optional[str] = None, extraction_method: Optional[str] = None) -> bool:
    """PDF-extracted text is recognized by extraction method or file extension."""
    if extraction_method and extraction_method.lower() in PDF_EXTRACTION_METHODS:
        return True
    return bool(file_name) and file_name.lower().endswith(".pdf")


def make_document_id(file_name: Optional[str]) -> str:
    if not file_name:
        return "document"
    # Normalize Windows backslashes for cross-platform compatibility
    return Path(file_name.replace("\\", "/")).stem or "document"


class ChunkingService:
    """
    Entry point for the knowledge-base builder.

    Picks the chunking strategy for a document, applies the source-dependent
    defaults and decides what happens when semantic chunking fails.
    """

    def __init__(
        self,
        config: ChunkingServiceConfig | None = None,
        embedder: EmbeddingBatchClient | None = None,
    ):
        self.config = config or ChunkingServiceConfig.from_env()
        self.embedder = embedder or create_embedder(
            self.config.embedding_provider,
            model=self.config.embedding_model,
            base_url=self.config.ollama_base_url,
        )
        self.chunker = SemanticChunker(
            self.embedder,
            batch_size=self.config.batch_size,
            max_sentences=self.config.max_sentences,
            fallback_window=self.config.fallback_window_chars,
            table_max_rows=self.config.table_max_rows,
        )
        self.storage = ChunkingStorage(self.config.data_dir)

    def chunk_document(
        self,
        text: str,
        file_name: Optional[str] = None,
        extraction_method: Optional[str] = None,
        is_pdf: Optional[bool] = None,
        config: ChunkingConfig | ChunkingOverrides | None = None,
        document_id: Optional[str] = None,
    ) -> ChunkingResult:
        """
        Chunk one document with the configured strategy.

        A full ``ChunkingConfig`` is used as given. A ``ChunkingOverrides``
        only replaces the fields it sets; the rest come from the defaults
        for the detected source type.
        """
        if is_pdf is None:
            is_pdf = detect_pdf(file_name, extraction_method)
        document_id = document_id or make_document_id(file_name)
        if isinstance(config, ChunkingOverrides):
            config = config.resolve(is_pdf)
        config = config or ChunkingConfig.for_source(is_pdf)

        if not self.config.advanced_chunking:
            logger.info(f"Strategy for {document_id}: traditional fixed-size chunking")
            return self._traditional(text, document_id, is_pdf, config)

        logger.info(
            f"Strategy for {document_id}: Max-Min semantic chunking "
            f"(pdf={is_pdf}, hard_thr={config.hard_thr}, "
            f"init_const={config.init_const}, c={config.c})"
        )
        try:
            result = self.chunker.chunk(
                text,
                is_pdf=is_pdf,
                config=config,
                document_id=document_id,
            )
        except ChunkingError as e:
            logger.error(f"Max-Min semantic chunking failed:\n{format_error_chain(e)}")
            if not self.config.fallback_on_error:
                raise
            return self._traditional(text, document_id, is_pdf, config)

        if result.total_chunks > CHUNK_COUNT_WARNING:
            logger.warning(
                f"{result.total_chunks} chunks created for {document_id}. "
                f"Consider adjusting parameters."
            )

        non_empty = [chunk for chunk in result.chunks if chunk.text.strip()]
        if len(non_empty) != len(result.chunks):
            result = result.model_copy(update={"chunks": non_empty})
        return result

    def chunk_and_save(self, text: str, **kwargs: Any) -> tuple[ChunkingResult, str]:
        result = self.chunk_document(text, **kwargs)
        paths = self.storage.save(result)
        return result, str(paths.chunk_file)

    def get_configuration(self) -> dict[str, Any]:
        mode = "advanced" if self.config.advanced_chunking else "traditional"
        return {
            "mode": mode,
            "strategies": (
                ["max_min_semantic", "table_aware", "fixed_size_fallback"]
                if self.config.advanced_chunking
                else ["traditional_fixed_size"]
            ),
            "embedding_provider": self.config.embedding_provider,
            "batch_size": self.config.batch_size,
            "max_sentences": self.config.max_sentences,
            "fallback_window_chars": self.config.fallback_window_chars,
            "fallback_on_error": self.config.fallback_on_error,
            "fixed_chunk_size": TRADITIONAL_CHUNK_SIZE,
            "fixed_chunk_overlap": TRADITIONAL_CHUNK_OVERLAP,
            "defaults": {
                "text": ChunkingConfig.for_source(False).model_dump(),
                "pdf": ChunkingConfig.for_source(True).model_dump(),
            },
        }

    def _traditional(
        self,
        text: str,
        document_id: str,
        is_pdf: bool,
        config: ChunkingConfig,
    ) -> ChunkingResult:
        chunks = [Chunk(text=piece) for piece in recursive_chunks(text)]
        return ChunkingResult(
            document_id=document_id,
            is_pdf=is_pdf,
            method=ChunkingMethod.TRADITIONAL_FIXED_SIZE,
            config=config,
            chunks=chunks,
            stats=compute_stats(chunks),
        )

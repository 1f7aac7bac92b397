"""
Semantic Chunking - Max-Min semantic chunking for RAG ingestion

Partitions extracted document text into semantically coherent chunks before
they are embedded and stored in a retrieval index. Sentences are grouped by
embedding similarity with adaptive thresholds; PDF text is reconstructed
first, tables are kept intact, and degenerate input falls back to fixed-size
windows.

Quick Start:
    from semantic_chunking import SemanticChunker, OllamaEmbedder

    chunker = SemanticChunker(OllamaEmbedder(model="nomic-embed-text"))
    result = chunker.chunk(text, is_pdf=True)
    for chunk in result.texts:
        ...
    result.save("chunks.json")
"""

__version__ = "1.0.0"

from .assembler import assemble
from .chunker import SemanticChunker
from .config import ChunkingServiceConfig
from .embedder import (
    DummyEmbedder,
    EmbeddingBatchClient,
    OllamaEmbedder,
    OpenAIEmbedder,
    create_embedder,
    embed_in_batches,
)
from .exceptions import (
    AlignmentError,
    ChunkingError,
    ConfigurationError,
    EmbeddingConnectionError,
    EmbeddingError,
    EmbeddingRateLimitError,
    EmbeddingResponseError,
    format_error_chain,
    is_retryable,
)
from .fallback import fixed_size_chunks, recursive_chunks
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingMethod,
    ChunkingOverrides,
    ChunkingResult,
    ChunkingStats,
    Sentence,
    SentenceEmbedding,
)
from .pdf_reconstructor import reconstruct_pdf_text
from .sentence_splitter import split_sentences
from .service import ChunkingService, detect_pdf
from .similarity import cosine_similarity, sigmoid
from .tables import chunk_table, segment_content
from .token_counter import count_tokens

__all__ = [
    "__version__",
    "SemanticChunker",
    "ChunkingService",
    "ChunkingServiceConfig",
    "assemble",
    "split_sentences",
    "reconstruct_pdf_text",
    "segment_content",
    "chunk_table",
    "fixed_size_chunks",
    "recursive_chunks",
    "detect_pdf",
    "cosine_similarity",
    "sigmoid",
    "count_tokens",
    "EmbeddingBatchClient",
    "OllamaEmbedder",
    "OpenAIEmbedder",
    "DummyEmbedder",
    "create_embedder",
    "embed_in_batches",
    "Chunk",
    "ChunkingConfig",
    "ChunkingOverrides",
    "ChunkingMethod",
    "ChunkingResult",
    "ChunkingStats",
    "Sentence",
    "SentenceEmbedding",
    "ChunkingError",
    "AlignmentError",
    "ConfigurationError",
    "EmbeddingError",
    "EmbeddingConnectionError",
    "EmbeddingRateLimitError",
    "EmbeddingResponseError",
    "is_retryable",
    "format_error_chain",
]

"""
Custom Exceptions for Semantic Chunking.

This module defines the exception hierarchy raised by the chunking engine
and its embedding providers. The engine never retries: every error below
propagates to the caller, which decides on retry or fallback.

Exception Hierarchy:
    ChunkingError (base)
    ├── AlignmentError
    ├── ConfigurationError
    └── EmbeddingError
        ├── EmbeddingConnectionError
        ├── EmbeddingRateLimitError
        └── EmbeddingResponseError

Usage:
    from semantic_chunking.exceptions import (
        ChunkingError,
        EmbeddingError,
        is_retryable,
    )

    try:
        result = chunker.chunk(text, is_pdf=True)
    except EmbeddingError as e:
        if is_retryable(e):
            ...
    except ChunkingError as e:
        print(f"Chunking failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class ChunkingError(Exception):
    """
    Base exception for all chunking-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A chunking error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class AlignmentError(ChunkingError):
    """
    Raised when sentences and embeddings are not parallel.

    Attributes:
        sentence_count: Number of sentences passed in
        embedding_count: Number of embedding vectors passed in
    """

    def __init__(
        self,
        sentence_count: int,
        embedding_count: int,
        message: Optional[str] = None,
    ):
        self.sentence_count = sentence_count
        self.embedding_count = embedding_count
        msg = message or (
            f"Sentence/embedding count mismatch: "
            f"{sentence_count} sentences, {embedding_count} embeddings"
        )
        super().__init__(msg)


class ConfigurationError(ChunkingError):
    """Raised when the service or an embedding provider is misconfigured."""

    pass


# =============================================================================
# EMBEDDING ERRORS
# =============================================================================


class EmbeddingError(ChunkingError):
    """
    Base class for embedding provider errors.

    Attributes:
        original_error: The underlying provider exception
        status_code: HTTP status code if available
    """

    def __init__(
        self,
        message: str = "Embedding error",
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        self.original_error = original_error
        self.status_code = status_code

        details = None
        if original_error:
            details = str(original_error)
        if status_code:
            message = f"{message} (HTTP {status_code})"

        super().__init__(message, details)


class EmbeddingConnectionError(EmbeddingError):
    """Raised when the embedding provider cannot be reached."""

    def __init__(
        self,
        message: str = "Cannot connect to embedding provider",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


class EmbeddingRateLimitError(EmbeddingError):
    """
    Raised when the embedding provider rejects a batch for rate limiting.

    Attributes:
        retry_after: Suggested wait time in seconds (if provided)
    """

    def __init__(
        self,
        retry_after: Optional[float] = None,
        original_error: Optional[Exception] = None,
    ):
        self.retry_after = retry_after
        message = "Embedding provider rate limit exceeded"
        if retry_after:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message, original_error, status_code=429)


class EmbeddingResponseError(EmbeddingError):
    """
    Raised when a provider returns a malformed batch.

    This includes:
    - Fewer or more vectors than texts in the batch
    - Vectors of inconsistent dimensionality
    - Empty vectors

    Attributes:
        response_content: Short description of the offending response
    """

    def __init__(
        self,
        message: str = "Invalid embedding response",
        response_content: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.response_content = response_content
        super().__init__(message, original_error)
        if response_content:
            self.details = response_content[:500]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """
    Check if an error is potentially recoverable by retrying.

    Returns True for connection errors, rate limits and 5xx responses.
    Alignment and configuration errors are never retryable.
    """
    if isinstance(error, (EmbeddingConnectionError, EmbeddingRateLimitError)):
        return True
    if isinstance(error, EmbeddingError) and error.status_code in (500, 502, 503, 504):
        return True
    return False


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)

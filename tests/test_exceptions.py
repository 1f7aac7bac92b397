"""Tests for semantic_chunking.exceptions."""

import pytest

from semantic_chunking.exceptions import (
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


class TestChunkingError:
    def test_message_only(self):
        error = ChunkingError("Something failed")
        assert str(error) == "Something failed"
        assert error.details is None

    def test_with_details(self):
        error = ChunkingError("Something failed", details="more info")
        assert str(error) == "Something failed | Details: more info"


class TestAlignmentError:
    def test_default_message(self):
        error = AlignmentError(3, 2)
        assert error.sentence_count == 3
        assert error.embedding_count == 2
        assert "3 sentences, 2 embeddings" in str(error)

    def test_custom_message(self):
        assert str(AlignmentError(2, 2, message="bad dimensions")) == "bad dimensions"


class TestEmbeddingErrors:
    def test_original_error_in_details(self):
        error = EmbeddingError("Batch failed", ValueError("inner"))
        assert error.details == "inner"
        assert isinstance(error.original_error, ValueError)

    def test_status_code_in_message(self):
        error = EmbeddingError("Batch failed", status_code=503)
        assert "HTTP 503" in str(error)

    def test_rate_limit(self):
        error = EmbeddingRateLimitError(retry_after=30)
        assert error.status_code == 429
        assert "retry after 30s" in str(error)

    def test_response_content_truncated(self):
        error = EmbeddingResponseError("Malformed", response_content="x" * 600)
        assert len(error.details) == 500

    @pytest.mark.parametrize(
        "cls",
        [EmbeddingConnectionError, EmbeddingRateLimitError, EmbeddingResponseError],
    )
    def test_hierarchy(self, cls):
        error = cls()
        assert isinstance(error, EmbeddingError)
        assert isinstance(error, ChunkingError)


class TestIsRetryable:
    def test_connection(self):
        assert is_retryable(EmbeddingConnectionError())

    def test_rate_limit(self):
        assert is_retryable(EmbeddingRateLimitError())

    def test_server_error(self):
        assert is_retryable(EmbeddingError("down", status_code=503))

    def test_client_error(self):
        assert not is_retryable(EmbeddingError("bad request", status_code=400))

    def test_alignment(self):
        assert not is_retryable(AlignmentError(1, 0))

    def test_configuration(self):
        assert not is_retryable(ConfigurationError("missing key"))

    def test_foreign(self):
        assert not is_retryable(RuntimeError("boom"))


class TestFormatErrorChain:
    def test_single(self):
        assert format_error_chain(ChunkingError("top")) == "ChunkingError: top"

    def test_original_error_chain(self):
        error = EmbeddingConnectionError("no route", ConnectionError("refused"))
        lines = format_error_chain(error).split("\n")
        assert lines[0].startswith("EmbeddingConnectionError: no route")
        assert lines[1] == "  └─ ConnectionError: refused"

    def test_cause_chain(self):
        try:
            try:
                raise KeyError("inner")
            except KeyError as e:
                raise ChunkingError("outer") from e
        except ChunkingError as error:
            text = format_error_chain(error)
        assert "ChunkingError: outer" in text
        assert "KeyError" in text

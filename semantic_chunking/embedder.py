"""
Embedding Providers - Batch text-to-vector clients for the chunker

The chunker only needs ``embed_batch(texts) -> vectors``: one vector per
text, same order, fixed dimensionality. Any object with that method can be
passed in (see ``EmbeddingBatchClient``).

Providers:
- OllamaEmbedder: local embeddings via a running Ollama instance (default)
- OpenAIEmbedder: OpenAI embeddings API (text-embedding-3-small)
- DummyEmbedder: deterministic pseudo-random vectors for development

Design:
- ``embed_in_batches`` slices requests into batches of at most 100 texts,
  issues them in order and concatenates results positionally.
- Providers never retry; failures surface as EmbeddingError subclasses and
  abort the chunking call.

Usage:
    from semantic_chunking.embedder import OllamaEmbedder, embed_in_batches

    embedder = OllamaEmbedder(model="nomic-embed-text")
    vectors = embed_in_batches(embedder, ["Text 1", "Text 2"])
"""

import hashlib
import logging
import os
import random
from typing import Optional, Protocol, Sequence, runtime_checkable

import ollama
from openai import (
    APIConnectionError as OpenAIConnectionError,
    APIError as OpenAIAPIError,
    OpenAI,
    RateLimitError,
)

from .exceptions import (
    ChunkingError,
    ConfigurationError,
    EmbeddingConnectionError,
    EmbeddingError,
    EmbeddingRateLimitError,
    EmbeddingResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100

DEFAULT_OLLAMA_MODEL = "nomic-embed-text"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OPENAI_MODEL = "text-embedding-3-small"
DUMMY_DIMENSIONS = 1536


@runtime_checkable
class EmbeddingBatchClient(Protocol):
    """Anything that turns an ordered list of texts into one vector per text."""

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        ...


def batch_count(total: int, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    """Number of provider calls needed for ``total`` texts."""
    return len(range(0, total, batch_size))


def embed_in_batches(
    client: EmbeddingBatchClient,
    texts: Sequence[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> list[list[float]]:
    """
    Embed texts in ordered batches and concatenate the results.

    Args:
        client: Embedding provider.
        texts: Texts to embed, in order.
        batch_size: Maximum texts per provider call.

    Returns:
        One vector per input text, in input order.

    Raises:
        EmbeddingResponseError: If a batch returns the wrong number of vectors
            or the dimensionality is inconsistent.
        EmbeddingError: If the provider fails; provider errors that are not
            ChunkingErrors are wrapped.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    vectors: list[list[float]] = []
    dimensions: Optional[int] = None
    total_batches = batch_count(len(texts), batch_size)

    for number, start in enumerate(range(0, len(texts), batch_size), start=1):
        batch = list(texts[start:start + batch_size])
        logger.debug(f"Embedding batch {number}/{total_batches} ({len(batch)} texts)")
        try:
            batch_vectors = client.embed_batch(batch)
        except ChunkingError:
            raise
        except Exception as e:
            raise EmbeddingError(
                f"Embedding batch {number}/{total_batches} failed", e
            ) from e

        if len(batch_vectors) != len(batch):
            raise EmbeddingResponseError(
                f"Embedding batch {number} returned {len(batch_vectors)} vectors "
                f"for {len(batch)} texts"
            )
        for vector in batch_vectors:
            if not vector:
                raise EmbeddingResponseError(f"Embedding batch {number} contains an empty vector")
            if dimensions is None:
                dimensions = len(vector)
            elif len(vector) != dimensions:
                raise EmbeddingResponseError(
                    f"Inconsistent embedding dimensions: {len(vector)} != {dimensions}"
                )
        vectors.extend(batch_vectors)

    return vectors


def _require_text(texts: list[str]) -> None:
    if any(not t or not t.strip() for t in texts):
        raise ValueError("Cannot embed empty text")


class OllamaEmbedder:
    """
    Generates text embeddings using a local Ollama model.

    The embedder connects to a running Ollama instance and uses a specified
    embedding model to convert text into dense vector representations.
    """

    def __init__(
        self,
        model: str = DEFAULT_OLLAMA_MODEL,
        base_url: str = DEFAULT_OLLAMA_URL,
    ):
        self.model = model
        self.base_url = base_url
        self._client = ollama.Client(host=base_url)
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        """Return the embedding dimensions (available after first embed call)."""
        return self._dimensions

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for multiple texts in one request.

        Raises:
            ValueError: If any text is empty.
            EmbeddingConnectionError: If Ollama is not reachable.
            EmbeddingError: If embedding generation fails.
        """
        if not texts:
            return []
        _require_text(texts)

        try:
            response = self._client.embed(model=self.model, input=texts)
        except ollama.ResponseError as e:
            raise EmbeddingError(
                f"Ollama batch embedding failed for model '{self.model}'",
                e,
                getattr(e, "status_code", None),
            ) from e
        except Exception as e:
            if "Connection" in type(e).__name__ or "refused" in str(e).lower():
                raise EmbeddingConnectionError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    e,
                ) from e
            raise EmbeddingError("Batch embedding failed", e) from e

        embeddings = response["embeddings"]
        if embeddings:
            self._dimensions = len(embeddings[0])
        return [list(vector) for vector in embeddings]

    def health_check(self) -> dict[str, bool | str]:
        """Reachability of the Ollama server and the embedding model, for ``/health``."""
        try:
            installed = [m.model for m in self._client.list().models]
        except Exception as e:
            return {
                "healthy": False,
                "ollama_running": False,
                "model_available": False,
                "model": self.model,
                "error": f"Cannot connect to Ollama at {self.base_url}: {e}",
            }

        # Tags are optional: "nomic-embed-text" matches "nomic-embed-text:latest"
        available = any(name.split(":")[0] == self.model.split(":")[0] for name in installed)
        return {
            "healthy": available,
            "ollama_running": True,
            "model_available": available,
            "model": self.model,
            "error": "" if available else (
                f"Embedding model '{self.model}' not found in Ollama. "
                f"Run: ollama pull {self.model}"
            ),
        }


class OpenAIEmbedder:
    """Embeddings from the OpenAI API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_OPENAI_MODEL,
    ):
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ConfigurationError(
                "OpenAI API key required. Set OPENAI_API_KEY environment variable."
            )
        self.model = model
        self._client = OpenAI(api_key=self.api_key)

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        _require_text(texts)

        try:
            response = self._client.embeddings.create(model=self.model, input=texts)
        except RateLimitError as e:
            raise EmbeddingRateLimitError(original_error=e) from e
        except OpenAIConnectionError as e:
            raise EmbeddingConnectionError(original_error=e) from e
        except OpenAIAPIError as e:
            raise EmbeddingError(
                f"OpenAI embedding failed for model '{self.model}'",
                e,
                getattr(e, "status_code", None),
            ) from e

        # The API tags each item with its input position.
        data = sorted(response.data, key=lambda item: item.index)
        return [list(item.embedding) for item in data]


class DummyEmbedder:
    """
    Deterministic pseudo-random vectors for development without a provider.

    The same text always maps to the same vector, so chunk boundaries are
    reproducible, but they carry no semantic meaning.
    """

    def __init__(self, dimensions: int = DUMMY_DIMENSIONS):
        self.dimensions = dimensions

    def _vector(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        rng = random.Random(int.from_bytes(digest[:8], "big"))
        return [rng.random() for _ in range(self.dimensions)]

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(text) for text in texts]


def create_embedder(
    provider: str = "ollama",
    model: Optional[str] = None,
    base_url: str = DEFAULT_OLLAMA_URL,
) -> EmbeddingBatchClient:
    """
    Build an embedding provider by name.

    ``openai`` without an API key degrades to DummyEmbedder with a warning.

    Raises:
        ConfigurationError: If the provider name is unknown.
    """
    provider = provider.lower()
    if provider == "ollama":
        return OllamaEmbedder(model=model or DEFAULT_OLLAMA_MODEL, base_url=base_url)
    if provider == "openai":
        if not os.getenv("OPENAI_API_KEY"):
            logger.warning("OPENAI_API_KEY is not set. Using dummy embeddings for development.")
            return DummyEmbedder()
        return OpenAIEmbedder(model=model or DEFAULT_OPENAI_MODEL)
    if provider == "dummy":
        return DummyEmbedder()
    raise ConfigurationError(
        f"Unknown embedding provider: {provider}",
        details="Expected one of: ollama, openai, dummy",
    )

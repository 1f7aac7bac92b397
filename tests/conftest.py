"""
Pytest fixtures for semantic chunking tests.

The stub embedders below stand in for a provider so that chunk boundaries
are fully determined by the vectors each test chooses.
"""

import pytest

from semantic_chunking import ChunkingConfig, Sentence


class ConstantEmbedder:
    """Every text gets the same vector, so all sentences are identical."""

    def __init__(self, vector=(1.0, 0.0)):
        self.vector = list(vector)
        self.calls: list[list[str]] = []

    def embed_batch(self, texts):
        self.calls.append(list(texts))
        return [list(self.vector) for _ in texts]


class OrthogonalEmbedder:
    """One-hot vector per text position across all calls, pairwise orthogonal."""

    def __init__(self, dimensions: int = 1024):
        self.dimensions = dimensions
        self.position = 0
        self.calls: list[list[str]] = []

    def embed_batch(self, texts):
        self.calls.append(list(texts))
        vectors = []
        for _ in texts:
            vector = [0.0] * self.dimensions
            vector[self.position % self.dimensions] = 1.0
            vectors.append(vector)
            self.position += 1
        return vectors


class MappingEmbedder:
    """Looks vectors up by substring so tests can script similarities."""

    def __init__(self, mapping: dict[str, list[float]], default=(0.0, 0.0, 1.0)):
        self.mapping = mapping
        self.default = list(default)
        self.calls: list[list[str]] = []

    def embed_batch(self, texts):
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            for key, vector in self.mapping.items():
                if key in text:
                    vectors.append(list(vector))
                    break
            else:
                vectors.append(list(self.default))
        return vectors


class FailingEmbedder:
    """Raises on the n-th call (1-based)."""

    def __init__(self, error: Exception, fail_on_call: int = 1):
        self.error = error
        self.fail_on_call = fail_on_call
        self.calls: list[list[str]] = []

    def embed_batch(self, texts):
        self.calls.append(list(texts))
        if len(self.calls) >= self.fail_on_call:
            raise self.error
        return [[1.0, 0.0] for _ in texts]


def make_sentences(count: int, offset: int = 0) -> list[Sentence]:
    return [
        Sentence(index=i + offset, text=f"Sentence number {i} of the test document.")
        for i in range(count)
    ]


@pytest.fixture
def constant_embedder():
    return ConstantEmbedder()


@pytest.fixture
def orthogonal_embedder():
    return OrthogonalEmbedder()


@pytest.fixture
def text_config():
    return ChunkingConfig.for_source(is_pdf=False)


@pytest.fixture
def pdf_config():
    return ChunkingConfig.for_source(is_pdf=True)


@pytest.fixture
def two_sentence_text():
    return (
        "G1: System is safe.\n\n"
        "This is a supporting claim that is long enough to stand alone as evidence.\n"
    )

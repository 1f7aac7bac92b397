"""
Vector similarity helpers for the Max-Min assembler.

Pure-Python arithmetic over the embedding lists returned by the provider,
so results do not depend on a numeric backend.
"""

import math
from typing import Sequence

Vector = Sequence[float]


def cosine_similarity(vec_a: Vector, vec_b: Vector) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: If the vectors differ in length.
    """
    if len(vec_a) != len(vec_b):
        raise ValueError(
            f"Vectors must have the same length ({len(vec_a)} != {len(vec_b)})"
        )

    dot_product = sum(a * b for a, b in zip(vec_a, vec_b))
    magnitude_a = math.sqrt(sum(a * a for a in vec_a))
    magnitude_b = math.sqrt(sum(b * b for b in vec_b))

    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    return dot_product / (magnitude_a * magnitude_b)


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


def similarities_to_chunk(
    candidate: int,
    indices: Sequence[int],
    embeddings: Sequence[Vector],
) -> list[float]:
    """Similarity of ``candidate`` to each chunk member, in member order."""
    return [cosine_similarity(embeddings[candidate], embeddings[i]) for i in indices]

"""
Max-Min Chunk Assembler

Walks sentences in document order and grows one open chunk at a time.

Algorithm (for sentence i):
1. Empty open chunk: open it with i.
2. One member j: admit i if ``init_const * cos(j, i) > hard_thr``.
3. Two or more members: admit i if
   ``max_sim > max(c * min_sim * sigmoid(size), hard_thr)`` where
   ``min_sim`` is the weakest pairwise similarity inside the chunk,
   ``max_sim`` the best similarity of i to any member and ``size`` the
   current member count.
Whenever i is not admitted the open chunk is closed and i opens a new one.

Chunks therefore always partition the sentence list into contiguous runs.
All comparisons are strict.

Usage:
    from semantic_chunking.assembler import assemble

    chunks = assemble(sentences, embeddings, ChunkingConfig())
"""

import logging
from typing import Sequence, Union

from .exceptions import AlignmentError
from .models import Chunk, ChunkingConfig, Sentence, SentenceEmbedding
from .similarity import Vector, sigmoid, similarities_to_chunk

logger = logging.getLogger(__name__)

EmbeddingInput = Union[Vector, SentenceEmbedding]


def _close(indices: list[int], sentences: Sequence[Sentence]) -> Chunk:
    return Chunk(
        sentence_indices=[sentences[i].index for i in indices],
        text=" ".join(sentences[i].text for i in indices),
    )


def _validate(sentences: Sequence[Sentence], embeddings: Sequence[Vector]) -> None:
    if len(sentences) != len(embeddings):
        raise AlignmentError(len(sentences), len(embeddings))
    if not embeddings:
        return
    dimensions = len(embeddings[0])
    for position, vector in enumerate(embeddings):
        if len(vector) != dimensions:
            raise AlignmentError(
                len(sentences),
                len(embeddings),
                message=(
                    f"Embedding {position} has {len(vector)} dimensions, "
                    f"expected {dimensions}"
                ),
            )


def assemble(
    sentences: Sequence[Sentence],
    embeddings: Sequence[EmbeddingInput],
    config: ChunkingConfig,
    fallback_text: str = "",
) -> list[Chunk]:
    """
    Group sentences into chunks with the Max-Min algorithm.

    Args:
        sentences: Sentences in document order.
        embeddings: One vector (or SentenceEmbedding) per sentence, same
            order, same dimensionality.
        config: Thresholds.
        fallback_text: Returned as the single chunk when there are no sentences.

    Returns:
        Chunks in document order.

    Raises:
        AlignmentError: If sentences and embeddings are not parallel.
    """
    embeddings = [
        e.vector if isinstance(e, SentenceEmbedding) else e for e in embeddings
    ]
    _validate(sentences, embeddings)

    if not sentences:
        return [Chunk(text=fallback_text)]
    if len(sentences) == 1:
        return [_close([0], sentences)]

    chunks: list[Chunk] = []
    current = [0]
    # Weakest pairwise similarity inside the open chunk; 1.0 for one member.
    min_sim = 1.0

    for i in range(1, len(sentences)):
        sims = similarities_to_chunk(i, current, embeddings)

        if len(current) == 1:
            admit = config.init_const * sims[0] > config.hard_thr
        else:
            max_sim = max(0.0, *sims)
            threshold = max(
                config.c * min_sim * sigmoid(len(current)),
                config.hard_thr,
            )
            admit = max_sim > threshold

        if admit:
            current.append(i)
            min_sim = min(min_sim, *sims)
        else:
            chunks.append(_close(current, sentences))
            current = [i]
            min_sim = 1.0

    chunks.append(_close(current, sentences))

    logger.debug(f"Assembled {len(sentences)} sentences into {len(chunks)} chunks")
    return chunks

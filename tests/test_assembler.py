"""Tests for semantic_chunking.assembler: Max-Min grouping."""

import math

import pytest

from semantic_chunking import (
    AlignmentError,
    ChunkingConfig,
    ChunkingError,
    Sentence,
    SentenceEmbedding,
)
from semantic_chunking.assembler import assemble

from conftest import make_sentences


A = [1.0, 0.0]
B = [0.0, 1.0]
C = [3.0, 4.0]  # cos(B, C) = 0.8, cos(A, C) = 0.6

# Three topics: A A A B B B C C
TOPIC_VECTORS = [A, A, A, B, B, B, C, C]


def _indices(chunks):
    return [c.sentence_indices for c in chunks]


class TestShortCircuits:
    def test_no_sentences_returns_fallback_text(self, text_config):
        chunks = assemble([], [], text_config, fallback_text="raw text")
        assert len(chunks) == 1
        assert chunks[0].text == "raw text"
        assert chunks[0].sentence_indices == []

    def test_no_sentences_default_empty(self, text_config):
        assert [c.text for c in assemble([], [], text_config)] == [""]

    def test_single_sentence(self, text_config):
        sentences = make_sentences(1)
        chunks = assemble(sentences, [A], text_config)
        assert len(chunks) == 1
        assert chunks[0].text == sentences[0].text
        assert chunks[0].sentence_indices == [0]


class TestGrouping:
    def test_identical_vectors_single_chunk(self, text_config):
        sentences = make_sentences(5)
        chunks = assemble(sentences, [A] * 5, text_config)
        assert len(chunks) == 1
        assert chunks[0].text == " ".join(s.text for s in sentences)
        assert chunks[0].sentence_indices == [0, 1, 2, 3, 4]

    def test_orthogonal_vectors_one_chunk_each(self, text_config):
        sentences = make_sentences(4)
        vectors = [[1.0 if i == j else 0.0 for j in range(4)] for i in range(4)]
        chunks = assemble(sentences, vectors, text_config)
        assert _indices(chunks) == [[0], [1], [2], [3]]

    def test_topic_shift_splits(self, text_config):
        chunks = assemble(make_sentences(8), TOPIC_VECTORS, text_config)
        assert _indices(chunks) == [[0, 1, 2], [3, 4, 5], [6, 7]]

    def test_partition_covers_all_sentences_in_order(self, text_config):
        sentences = make_sentences(8)
        chunks = assemble(sentences, TOPIC_VECTORS, text_config)
        flat = [i for c in chunks for i in c.sentence_indices]
        assert flat == list(range(8))
        assert " ".join(c.text for c in chunks) == " ".join(s.text for s in sentences)

    def test_deterministic(self, text_config):
        sentences = make_sentences(8)
        first = assemble(sentences, TOPIC_VECTORS, text_config)
        second = assemble(sentences, TOPIC_VECTORS, text_config)
        assert first == second

    def test_offset_indices_preserved(self, text_config):
        sentences = make_sentences(3, offset=5)
        chunks = assemble(sentences, [A, A, B], text_config)
        assert _indices(chunks) == [[5, 6], [7]]

    def test_sentence_embedding_input(self, text_config):
        sentences = make_sentences(3)
        embeddings = [
            SentenceEmbedding(index=i, vector=v) for i, v in enumerate([A, A, B])
        ]
        assert _indices(assemble(sentences, embeddings, text_config)) == [[0, 1], [2]]


class TestThresholds:
    @pytest.mark.parametrize("hard_thr", [0.0, 0.3, 0.6, 0.9])
    def test_hard_threshold_below_adaptive(self, hard_thr):
        config = ChunkingConfig(hard_thr=hard_thr, init_const=1.5, c=0.9)
        chunks = assemble(make_sentences(8), TOPIC_VECTORS, config)
        assert len(chunks) == 3

    def test_hard_threshold_at_one_caps_growth(self):
        config = ChunkingConfig(hard_thr=1.0, init_const=1.5, c=0.9)
        chunks = assemble(make_sentences(8), TOPIC_VECTORS, config)
        assert _indices(chunks) == [[0, 1], [2], [3, 4], [5, 6], [7]]

    def test_stricter_hard_threshold_never_fewer_chunks(self):
        counts = [
            len(assemble(
                make_sentences(8),
                TOPIC_VECTORS,
                ChunkingConfig(hard_thr=hard_thr, init_const=1.5, c=0.9),
            ))
            for hard_thr in (0.0, 0.3, 0.6, 0.9, 1.0)
        ]
        assert counts == sorted(counts)

    @pytest.mark.parametrize(
        "init_const,expected",
        [(2.0, 1), (1.0, 1), (0.5, 2), (0.0, 2)],
    )
    def test_init_const_scales_pair_admission(self, init_const, expected):
        # cos = 0.5
        vectors = [[1.0, 0.0], [1.0, math.sqrt(3)]]
        config = ChunkingConfig(hard_thr=0.4, init_const=init_const, c=0.9)
        assert len(assemble(make_sentences(2), vectors, config)) == expected

    def test_pair_comparison_is_strict(self):
        config = ChunkingConfig(hard_thr=1.0, init_const=1.0, c=0.9)
        chunks = assemble(make_sentences(2), [A, A], config)
        assert len(chunks) == 2

    def test_pdf_defaults_merge_more(self, text_config, pdf_config):
        # cos = 0.26: text 1.5 * 0.26 = 0.39 fails 0.4, pdf 2.0 * 0.26 = 0.52 passes 0.5
        vectors = [[1.0, 0.0], [0.26, math.sqrt(1 - 0.26 ** 2)]]
        assert len(assemble(make_sentences(2), vectors, text_config)) == 2
        assert len(assemble(make_sentences(2), vectors, pdf_config)) == 1


class TestAlignment:
    def test_count_mismatch(self, text_config):
        with pytest.raises(AlignmentError) as exc_info:
            assemble(make_sentences(3), [A, A], text_config)
        assert exc_info.value.sentence_count == 3
        assert exc_info.value.embedding_count == 2

    def test_empty_embeddings_for_sentences(self, text_config):
        with pytest.raises(AlignmentError):
            assemble(make_sentences(2), [], text_config)

    def test_dimension_mismatch(self, text_config):
        with pytest.raises(AlignmentError, match="dimensions"):
            assemble(make_sentences(2), [A, [1.0, 0.0, 0.0]], text_config)

    def test_alignment_error_is_chunking_error(self, text_config):
        with pytest.raises(ChunkingError):
            assemble([Sentence(index=0, text="only one")], [], text_config)

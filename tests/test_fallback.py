"""Tests for semantic_chunking.fallback."""

import math

import pytest

from semantic_chunking.fallback import (
    FALLBACK_WINDOW_CHARS,
    TRADITIONAL_CHUNK_SIZE,
    fixed_size_chunks,
    recursive_chunks,
)


class TestFixedSizeChunks:
    def test_exact_windows(self):
        assert fixed_size_chunks("abcdef", 2) == ["ab", "cd", "ef"]

    def test_last_window_shorter(self):
        assert fixed_size_chunks("abcde", 2) == ["ab", "cd", "e"]

    def test_windows_trimmed_and_blank_dropped(self):
        assert fixed_size_chunks("ab" + " " * 4 + "cd", 2) == ["ab", "cd"]

    def test_empty_text(self):
        assert fixed_size_chunks("") == []

    def test_default_window(self):
        text = "x" * (FALLBACK_WINDOW_CHARS * 2 + 10)
        chunks = fixed_size_chunks(text)
        assert len(chunks) == 3
        assert [len(c) for c in chunks] == [FALLBACK_WINDOW_CHARS, FALLBACK_WINDOW_CHARS, 10]

    def test_window_count(self):
        text = "y" * 4321
        assert len(fixed_size_chunks(text, 1000)) == math.ceil(4321 / 1000)

    @pytest.mark.parametrize("window", [0, -5])
    def test_invalid_window(self, window):
        with pytest.raises(ValueError, match="window"):
            fixed_size_chunks("abc", window)


class TestRecursiveChunks:
    def test_short_text_single_chunk(self):
        assert recursive_chunks("A short paragraph.") == ["A short paragraph."]

    def test_empty_text(self):
        assert recursive_chunks("") == []

    def test_long_text_respects_chunk_size(self):
        text = " ".join(["word"] * 1000)
        chunks = recursive_chunks(text)
        assert len(chunks) > 1
        assert all(len(c) <= TRADITIONAL_CHUNK_SIZE for c in chunks)

    def test_paragraph_boundaries_preferred(self):
        first = "First paragraph sentence. " * 20
        second = "Second paragraph sentence. " * 20
        chunks = recursive_chunks(f"{first.strip()}\n\n{second.strip()}", chunk_size=600, chunk_overlap=0)
        assert chunks[0].startswith("First")
        assert chunks[-1].startswith("Second")

    def test_japanese_separator(self):
        text = "これは日本語のテスト文章です。" * 100
        chunks = recursive_chunks(text, chunk_size=200, chunk_overlap=0)
        assert len(chunks) > 1
        assert all(len(c) <= 200 for c in chunks)

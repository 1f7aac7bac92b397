"""
Sentence Segmenter for the Semantic Chunking Pipeline

Splits normalized text into sentence-like units at sentence-final marks of
both Japanese and Western punctuation (。！？.!?), then normalizes their
length so every unit is a reasonable embedding input.

Length rules:
- 15 to 1000 characters: kept as a sentence.
- Over 1000 characters: cut into 500-character pieces (un-punctuated runs).
- Under 15 characters: appended to the previous sentence with a space, or
  dropped when no sentence has been accepted yet.

Usage:
    from semantic_chunking.sentence_splitter import split_sentences

    sentences = split_sentences("This is sentence one. This is sentence two.")
    # [Sentence(index=0, ...), Sentence(index=1, ...)]
"""

import re

from .models import Sentence

MIN_SENTENCE_CHARS = 15
MAX_SENTENCE_CHARS = 1000
LONG_SENTENCE_PIECE_CHARS = 500

_SENTENCE_END = re.compile(r"[。！？.!?]")

_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_NEWLINES = re.compile(r"\n+")


def normalize_text(text: str) -> str:
    """Unify line endings, collapse whitespace and newline runs, trim."""
    text = text.replace("\r\n", "\n")
    text = _INLINE_WHITESPACE.sub(" ", text)
    text = _NEWLINES.sub("\n", text)
    return text.strip()


def _accept(candidate: str, sentences: list[str]) -> None:
    """Apply the length rules to one candidate and update ``sentences``."""
    length = len(candidate)
    if MIN_SENTENCE_CHARS <= length <= MAX_SENTENCE_CHARS:
        sentences.append(candidate)
    elif length > MAX_SENTENCE_CHARS:
        sentences.extend(
            candidate[i:i + LONG_SENTENCE_PIECE_CHARS]
            for i in range(0, length, LONG_SENTENCE_PIECE_CHARS)
        )
    elif sentences and length > 0:
        # Leading short fragments with nothing to attach to are dropped.
        sentences[-1] += " " + candidate


def _dedupe(sentences: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for sentence in sentences:
        sentence = sentence.strip()
        if sentence and sentence not in seen:
            seen.add(sentence)
            unique.append(sentence)
    return unique


def split_sentences(text: str) -> list[Sentence]:
    """
    Split text into ordered, deduplicated sentences.

    Args:
        text: Input text (PDF-reconstructed or plain).

    Returns:
        List of Sentence objects indexed 0..n-1 in document order.
        Empty or whitespace-only input returns an empty list.
    """
    if not text or not text.strip():
        return []

    normalized = normalize_text(text)

    raw: list[str] = []
    last_index = 0
    for match in _SENTENCE_END.finditer(normalized):
        _accept(normalized[last_index:match.end()].strip(), raw)
        last_index = match.end()

    if last_index < len(normalized):
        _accept(normalized[last_index:].strip(), raw)

    return [
        Sentence(index=i, text=sentence)
        for i, sentence in enumerate(_dedupe(raw))
    ]

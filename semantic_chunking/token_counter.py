"""
Token Counter for chunk statistics

Uses tiktoken with the cl100k_base encoding, the tokenizer family of the
OpenAI embedding models, so the reported counts approximate what an
embedding request for a chunk costs.

Usage:
    from semantic_chunking.token_counter import count_tokens, count_tokens_batch

    n = count_tokens("This is an example sentence.")
    counts = count_tokens_batch(["Sentence one.", "Sentence two."])
"""

import tiktoken

_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    """Get or initialize the tiktoken encoder (singleton)."""
    global _encoder
    if _encoder is None:
        _encoder = tiktoken.get_encoding("cl100k_base")
    return _encoder


def count_tokens(text: str) -> int:
    """Number of tokens in ``text``; 0 for empty input."""
    if not text:
        return 0
    return len(_get_encoder().encode(text))


def count_tokens_batch(texts: list[str]) -> list[int]:
    """Token counts for a list of texts, one per input."""
    encoder = _get_encoder()
    return [len(encoder.encode(t)) if t else 0 for t in texts]

"""
Size-based chunking strategies.

- ``fixed_size_chunks``: fixed character windows, used when sentence
  segmentation yields a degenerate result (too many sentences). Makes no
  embedding calls.
- ``recursive_chunks``: traditional recursive character splitting with
  overlap, used when semantic chunking is disabled or failed.
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

FALLBACK_WINDOW_CHARS = 2000

TRADITIONAL_CHUNK_SIZE = 1000
TRADITIONAL_CHUNK_OVERLAP = 100
TRADITIONAL_SEPARATORS = ["\n\n", "\n", "。", "．", "！", "？", " "]


def fixed_size_chunks(text: str, window: int = FALLBACK_WINDOW_CHARS) -> list[str]:
    """
    Slice text into fixed windows of ``window`` characters.

    Each window is trimmed; windows that are empty after trimming are dropped.
    """
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")
    chunks = []
    for start in range(0, len(text), window):
        piece = text[start:start + window].strip()
        if piece:
            chunks.append(piece)
    return chunks


def recursive_chunks(
    text: str,
    chunk_size: int = TRADITIONAL_CHUNK_SIZE,
    chunk_overlap: int = TRADITIONAL_CHUNK_OVERLAP,
    separators: list[str] | None = None,
) -> list[str]:
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        separators=separators or TRADITIONAL_SEPARATORS,
    )
    return [chunk for chunk in splitter.split_text(text) if chunk.strip()]

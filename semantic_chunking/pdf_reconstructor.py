"""
PDF Text Reconstruction for the Chunking Pipeline

Text extracted from PDFs carries hard line-wraps at the page's visual line
width. Left as-is, each wrapped line looks like a separate fragment to the
sentence splitter. This module folds wrapped lines back into sentences.

Heuristic:
- Paragraphs are separated by blank lines and processed independently.
- A line is folded into the previous one when the previous line does not
  end with sentence-final punctuation, is shorter than 50 characters and
  the current line does not start with a bullet, heading or bracket.
- Otherwise an explicit "。" is inserted so the splitter sees a boundary.
- Paragraphs that look like tables keep their line structure.

Usage:
    from semantic_chunking.pdf_reconstructor import reconstruct_pdf_text

    text = reconstruct_pdf_text("Die Studien-\nordnung regelt\ndas Studium.")
"""

import re

# Lines shorter than this are assumed to be artificial PDF line wraps.
WRAP_LINE_LENGTH = 50

SENTENCE_BOUNDARY = "。"
PARAGRAPH_SEPARATOR = SENTENCE_BOUNDARY + "\n"

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")

_SENTENCE_END = re.compile(r"[。！？.!?]$")

# Uppercase letters, digits, bullet glyphs, circled numbers, opening brackets.
_NEW_FRAGMENT_START = re.compile(
    r"^[A-Z0-9●•◆■□▪▫◯◉"
    r"①-⑩\[\(（【「『]"
)

_ASCII_ALNUM_END = re.compile(r"[a-zA-Z0-9]$")
_ASCII_ALNUM_START = re.compile(r"^[a-zA-Z0-9]")

_TABLE_ID_START = re.compile(r"^[A-Z]{1,3}-\d{2,4}\s+")
_MULTI_SPACE = re.compile(r"\s{2,}")


def _looks_like_table(lines: list[str]) -> bool:
    return any(
        "|" in line
        or _TABLE_ID_START.match(line)
        or len(_MULTI_SPACE.split(line)) >= 3
        for line in lines
    )


def _should_merge(accumulated: str, prev_line: str, line: str) -> bool:
    return (
        not _SENTENCE_END.search(accumulated)
        and len(prev_line) < WRAP_LINE_LENGTH
        and not _NEW_FRAGMENT_START.match(line)
    )


def _fold_lines(lines: list[str]) -> str:
    """Fold the lines of one paragraph into sentence fragments."""
    accumulated = lines[0]
    for prev_line, line in zip(lines, lines[1:]):
        if _should_merge(accumulated, prev_line, line):
            needs_space = bool(
                _ASCII_ALNUM_END.search(accumulated) and _ASCII_ALNUM_START.match(line)
            )
            accumulated += (" " if needs_space else "") + line
        else:
            accumulated += SENTENCE_BOUNDARY + line
    return accumulated


def _process_paragraph(paragraph: str) -> str:
    lines = [line.strip() for line in paragraph.split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        return ""
    if _looks_like_table(lines):
        return "\n".join(lines)
    return _fold_lines(lines)


def reconstruct_pdf_text(text: str) -> str:
    """
    Undo hard line-wraps in PDF-extracted text.

    Args:
        text: Raw text from a PDF extractor. May be empty.

    Returns:
        Reconstructed text with paragraphs joined by "。\\n".
        Empty input returns an empty string.
    """
    if not text:
        return ""
    paragraphs = (_process_paragraph(p) for p in _PARAGRAPH_SPLIT.split(text))
    return PARAGRAPH_SEPARATOR.join(p for p in paragraphs if p)

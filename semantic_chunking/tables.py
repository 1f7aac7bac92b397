"""
Table-Aware Segmentation

Semantic grouping works on sentences, which tables do not have: a table fed
to the sentence splitter is torn into arbitrary fragments. This module
separates tables from running text before segmentation.

Detection is line-based:
- Table rows: markdown pipes, tab-separated cells, ID- or date-prefixed rows
  with several multi-space separated values, or numeric rows with many values.
- Table headers: a keyword line followed by a table row, or a pipe line
  followed by a markdown separator row.

Short text segments (< 300 chars) are merged forward so a document with a
few tables does not explode into many tiny text segments.

Usage:
    from semantic_chunking.tables import segment_content, chunk_table

    for segment in segment_content(text):
        if segment.kind == "table":
            pieces = chunk_table(segment, max_rows=15)
"""

import re
from dataclasses import dataclass, field
from typing import Literal, Optional

MIN_TEXT_SEGMENT_CHARS = 300
DEFAULT_TABLE_MAX_ROWS = 15

_ID_PATTERNS = (
    re.compile(r"^[A-Z]{1,3}-[0-9]{2,4}\b"),  # M-001, R-002, TC-001
    re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}\b"),  # ISO dates
)
_MULTI_SPACE = re.compile(r"\s{2,}")
_NUMBER = re.compile(r"[0-9]+")
_SEPARATOR_ROW = re.compile(r"^\|?[\s\-:]+\|[\s\-:|]+\|?$")
_BULLET_START = re.compile(r"^[•●◆■]")

_HEADER_KEYWORDS = (
    "ID", "No", "番号", "名前", "名称", "Name",
    "状態", "Status", "担当", "期限", "Date",
    "スコア", "Score", "確率", "深刻度",
    "対策", "リスク", "ハザード", "Hazard",
    "コスト", "Cost", "進捗", "%", "対象",
)


@dataclass
class ContentSegment:
    kind: Literal["text", "table"]
    content: str
    header: str = ""
    rows: list[str] = field(default_factory=list)


def is_table_row(line: str) -> bool:
    trimmed = line.strip()
    if not trimmed:
        return False

    if "|" in trimmed and len(trimmed.split("|")) >= 3:
        return True

    if len(trimmed.split("\t")) >= 3:
        return True

    has_id_pattern = any(p.search(trimmed) for p in _ID_PATTERNS)
    values = [v for v in _MULTI_SPACE.split(trimmed) if v.strip()]
    has_multiple_values = len(values) >= 3
    has_multiple_numbers = len(_NUMBER.findall(trimmed)) >= 2

    if has_id_pattern and has_multiple_values:
        return True

    return has_multiple_values and has_multiple_numbers and len(values) >= 4


def is_separator_row(line: str) -> bool:
    return bool(_SEPARATOR_ROW.match(line.strip()))


def is_table_header(line: str, next_line: Optional[str] = None) -> bool:
    trimmed = line.strip()
    if not trimmed or is_separator_row(trimmed):
        return False

    has_keyword = any(keyword in trimmed for keyword in _HEADER_KEYWORDS)
    if next_line is not None and has_keyword and is_table_row(next_line):
        return True

    return "|" in trimmed and next_line is not None and is_separator_row(next_line)


def _table_segment(lines: list[str], header: str) -> ContentSegment:
    return ContentSegment(
        kind="table",
        content="\n".join(lines),
        header=header,
        rows=[line for line in lines if line.strip() and line != header],
    )


def _split_raw(text: str) -> list[ContentSegment]:
    lines = text.split("\n")
    segments: list[ContentSegment] = []
    text_lines: list[str] = []
    table_lines: list[str] = []
    header = ""
    in_table = False

    def flush_text() -> None:
        nonlocal text_lines
        if text_lines:
            segments.append(ContentSegment(kind="text", content="\n".join(text_lines)))
            text_lines = []

    for i, line in enumerate(lines):
        next_line = lines[i + 1] if i < len(lines) - 1 else None

        if not in_table and is_table_header(line, next_line):
            flush_text()
            in_table = True
            header = line
            table_lines = [line]
            continue

        if not in_table and is_table_row(line):
            flush_text()
            in_table = True
            if i > 0 and not _BULLET_START.match(lines[i - 1].strip()):
                # The line above a headerless table usually names its columns.
                # It was already emitted as text, so it appears in both.
                header = lines[i - 1]
                table_lines = [lines[i - 1], line]
            else:
                header = ""
                table_lines = [line]
            continue

        if in_table:
            if is_separator_row(line) or is_table_row(line) or (line.strip() and "|" in line):
                table_lines.append(line)
                continue

            if not line.strip() and next_line is not None and is_table_row(next_line):
                table_lines.append(line)
                continue

            segments.append(_table_segment(table_lines, header))
            in_table = False
            table_lines = []
            header = ""
            if line.strip():
                text_lines = [line]
            continue

        text_lines.append(line)

    if in_table and table_lines:
        segments.append(_table_segment(table_lines, header))
    else:
        flush_text()

    return segments


def segment_content(text: str) -> list[ContentSegment]:
    """
    Split text into ordered text and table segments.

    Text segments shorter than 300 characters are merged with the following
    text; a short remainder is appended to the last text segment.
    """
    merged: list[ContentSegment] = []
    pending = ""

    for segment in _split_raw(text):
        if segment.kind == "table":
            if pending.strip():
                merged.append(ContentSegment(kind="text", content=pending))
                pending = ""
            merged.append(segment)
            continue

        content = segment.content.strip()
        if not content:
            continue
        pending = f"{pending}\n{content}" if pending else content
        if len(pending) >= MIN_TEXT_SEGMENT_CHARS:
            merged.append(ContentSegment(kind="text", content=pending))
            pending = ""

    if pending.strip():
        if merged and merged[-1].kind == "text":
            merged[-1].content += "\n" + pending
        else:
            merged.append(ContentSegment(kind="text", content=pending))

    return merged


def chunk_table(segment: ContentSegment, max_rows: int = DEFAULT_TABLE_MAX_ROWS) -> list[str]:
    """
    Split a table into pieces of at most ``max_rows`` rows.

    Every piece repeats the header when the table has one. Tables that fit
    in one piece are returned unchanged.
    """
    if len(segment.rows) <= max_rows:
        return [segment.content]

    pieces = []
    for start in range(0, len(segment.rows), max_rows):
        rows = segment.rows[start:start + max_rows]
        pieces.append("\n".join([segment.header, *rows] if segment.header else rows))
    return pieces

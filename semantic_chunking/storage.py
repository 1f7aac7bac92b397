import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import ChunkingResult

_UNSAFE_ID_CHARS = re.compile(r"[^\w.-]+")


@dataclass
class ChunkingPaths:
    document_id: str
    chunk_dir: Path
    chunk_file: Path


def safe_document_id(document_id: str) -> str:
    """Make a document id usable as a directory name."""
    cleaned = _UNSAFE_ID_CHARS.sub("_", document_id).strip("._")
    return cleaned or "document"


class ChunkingStorage:
    """Stores chunking results as ``{data_dir}/{document_id}/chunks/*.json``."""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def chunk_dir(self, document_id: str) -> Path:
        return self.data_dir / safe_document_id(document_id) / "chunks"

    def build_paths(self, document_id: str) -> ChunkingPaths:
        document_id = safe_document_id(document_id)
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S_%f")
        chunk_dir = self.chunk_dir(document_id)
        chunk_dir.mkdir(parents=True, exist_ok=True)
        return ChunkingPaths(
            document_id=document_id,
            chunk_dir=chunk_dir,
            chunk_file=chunk_dir / f"{document_id}_{timestamp}.json",
        )

    def save(self, result: ChunkingResult) -> ChunkingPaths:
        paths = self.build_paths(result.document_id)
        result.save(str(paths.chunk_file))
        return paths

    def list_documents(self) -> list[str]:
        if not self.data_dir.exists():
            return []
        return sorted(
            path.name for path in self.data_dir.iterdir()
            if (path / "chunks").is_dir()
        )

    def load_latest(self, document_id: str) -> Optional[ChunkingResult]:
        chunk_dir = self.chunk_dir(document_id)
        if not chunk_dir.is_dir():
            return None
        # Timestamped names sort chronologically.
        files = sorted(chunk_dir.glob("*.json"))
        if not files:
            return None
        return ChunkingResult.load(str(files[-1]))

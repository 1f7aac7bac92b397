from dataclasses import dataclass
import os

from .chunker import DEFAULT_MAX_SENTENCES
from .embedder import DEFAULT_BATCH_SIZE, DEFAULT_OLLAMA_URL
from .fallback import FALLBACK_WINDOW_CHARS
from .tables import DEFAULT_TABLE_MAX_ROWS


@dataclass
class ChunkingServiceConfig:
    data_dir: str = "data/chunking"
    advanced_chunking: bool = True
    embedding_provider: str = "ollama"
    embedding_model: str | None = None
    ollama_base_url: str = DEFAULT_OLLAMA_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    max_sentences: int = DEFAULT_MAX_SENTENCES
    fallback_window_chars: int = FALLBACK_WINDOW_CHARS
    table_max_rows: int = DEFAULT_TABLE_MAX_ROWS
    fallback_on_error: bool = True

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _bool(name: str, default: bool) -> bool:
            value = os.environ.get(name)
            return value.lower() == "true" if value else default

        return cls(
            data_dir=os.environ.get("CHUNKING_DATA_DIR", cls.data_dir),
            advanced_chunking=_bool("USE_ADVANCED_CHUNKING", cls.advanced_chunking),
            embedding_provider=os.environ.get("EMBEDDING_PROVIDER", cls.embedding_provider),
            embedding_model=os.environ.get("EMBEDDING_MODEL") or None,
            ollama_base_url=os.environ.get("OLLAMA_BASE_URL", cls.ollama_base_url),
            batch_size=_int("EMBEDDING_BATCH_SIZE", cls.batch_size),
            max_sentences=_int("MAX_SENTENCES", cls.max_sentences),
            fallback_window_chars=_int("FALLBACK_WINDOW_CHARS", cls.fallback_window_chars),
            table_max_rows=_int("TABLE_MAX_ROWS", cls.table_max_rows),
            fallback_on_error=_bool("CHUNKING_FALLBACK_ON_ERROR", cls.fallback_on_error),
        )

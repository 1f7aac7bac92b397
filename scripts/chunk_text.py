#!/usr/bin/env python3
"""
Chunk an extracted text file with Max-Min semantic chunking.

Usage:
    python scripts/chunk_text.py extracted.txt
    python scripts/chunk_text.py extracted.txt --pdf -o chunks.json
    python scripts/chunk_text.py extracted.txt --provider openai --hard-thr 0.45
    python scripts/chunk_text.py extracted.txt --save

Environment:
    EMBEDDING_PROVIDER: ollama (default), openai or dummy
    OPENAI_API_KEY: Required for the openai provider
    OLLAMA_BASE_URL: Ollama API URL (default: http://localhost:11434)
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from semantic_chunking.config import ChunkingServiceConfig
from semantic_chunking.exceptions import ChunkingError, format_error_chain
from semantic_chunking.logging_config import get_logger, setup_logging
from semantic_chunking.models import ChunkingConfig
from semantic_chunking.service import ChunkingService, detect_pdf

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split extracted document text into semantic chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", type=Path, help="Text file with extracted content")
    parser.add_argument("-o", "--output", type=Path, help="Write the chunking result JSON here")
    parser.add_argument("--save", action="store_true", help="Store the result under the data dir")
    parser.add_argument(
        "--pdf",
        action="store_true",
        default=None,
        help="Treat the text as PDF-extracted (default: detect from file name)",
    )
    parser.add_argument("--extraction-method", help="Extraction method (pdf, ocr, docx, ...)")
    parser.add_argument("--file-name", help="Original document name, used for PDF detection and id")
    parser.add_argument("--provider", help="Embedding provider: ollama, openai or dummy")
    parser.add_argument("--model", help="Embedding model name")
    parser.add_argument("--traditional", action="store_true", help="Use fixed-size chunking")
    parser.add_argument("--hard-thr", type=float, help="Override hard threshold")
    parser.add_argument("--init-const", type=float, help="Override initial constant")
    parser.add_argument("-c", type=float, dest="c", help="Override min-similarity scale")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main() -> int:
    args = build_parser().parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    load_dotenv(Path(".env"))

    if not args.input.exists():
        logger.error(f"Input not found: {args.input}")
        return 1

    service_config = ChunkingServiceConfig.from_env()
    if args.provider:
        service_config = replace(service_config, embedding_provider=args.provider)
    if args.model:
        service_config = replace(service_config, embedding_model=args.model)
    if args.traditional:
        service_config = replace(service_config, advanced_chunking=False)

    file_name = args.file_name or args.input.name
    chunking_config = None
    if any(v is not None for v in (args.hard_thr, args.init_const, args.c)):
        is_pdf = args.pdf if args.pdf is not None else detect_pdf(file_name, args.extraction_method)
        chunking_config = ChunkingConfig.for_source(
            is_pdf,
            hard_thr=args.hard_thr,
            init_const=args.init_const,
            c=args.c,
        )

    service = ChunkingService(service_config)
    text = args.input.read_text(encoding="utf-8")
    kwargs = dict(
        file_name=file_name,
        extraction_method=args.extraction_method,
        is_pdf=args.pdf,
        config=chunking_config,
    )

    try:
        if args.save:
            result, output_path = service.chunk_and_save(text, **kwargs)
            logger.info(f"Saved: {output_path}")
        else:
            result = service.chunk_document(text, **kwargs)
    except ChunkingError as e:
        logger.error(f"Chunking failed:\n{format_error_chain(e)}")
        return 1

    if args.output:
        result.save(str(args.output))
        logger.info(f"Wrote {args.output}")

    print(f"Document:  {result.document_id}")
    print(f"Method:    {result.method.value}")
    print(f"Chunks:    {result.total_chunks}")
    print(f"Sentences: {result.stats.total_sentences}")
    print(f"Tokens:    {result.stats.total_tokens}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

import argparse
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv(ROOT / ".env")

from semantic_chunking.app import create_app
from semantic_chunking.config import ChunkingServiceConfig
from semantic_chunking.logging_config import setup_logging
import uvicorn


def run_server(host: str, port: int, data_dir: str | None = None) -> None:
    config = ChunkingServiceConfig.from_env()
    if data_dir:
        config.data_dir = data_dir
    setup_logging()
    app = create_app(config)
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the chunking API server.")
    parser.add_argument("--host", default="0.0.0.0", help="Server host")
    parser.add_argument("--port", type=int, default=8002, help="Server port")
    parser.add_argument("--data-dir", help="Where saved chunking results are stored")
    args = parser.parse_args()
    run_server(args.host, args.port, args.data_dir)


if __name__ == "__main__":
    main()

"""Main entry point for the Token Exchange API server."""

import argparse
from pathlib import Path
from typing import List, Optional

import uvicorn

from .api.main import create_app
from .infrastructure.config import ConfigLoader


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the Token Exchange API")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config/default.yaml"),
        help="Path to the YAML configuration file",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Load configuration, configure logging and serve the API."""
    args = parse_args(argv)

    config_loader = ConfigLoader(args.config)
    config_loader.configure_logging()

    uvicorn.run(create_app(config_loader), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    exit(main())

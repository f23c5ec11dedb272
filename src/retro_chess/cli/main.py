from __future__ import annotations

import argparse
import os
from typing import List, Optional

import uvicorn

from ..protocol.http.app import LOG_LEVEL_ENV


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the chess rules engine over HTTP")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for the app and uvicorn (default: info)",
    )
    parser.add_argument("--reload", action="store_true", help="Reload on source changes")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    # Read by create_app, which uvicorn calls without arguments.
    os.environ[LOG_LEVEL_ENV] = args.log_level
    uvicorn.run(
        "retro_chess.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()

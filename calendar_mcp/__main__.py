"""Calendar MCP server entry point.

Usage:
  python -m calendar_mcp                 # MCP over stdio (default)
  python -m calendar_mcp --http          # FastAPI tool endpoints under uvicorn
"""

import argparse
import asyncio
import logging
import sys

from calendar_mcp.api.dispatcher import Dispatcher
from calendar_mcp.api.tools import build_registry
from calendar_mcp.config import load_settings
from calendar_mcp.domain.errors import ConfigurationError


def setup_logging(level: str = "INFO", http_mode: bool = False) -> logging.Logger:
    """Configure logging based on mode."""
    # In HTTP mode, log to stdout; in MCP mode, log to stderr (stdout is for JSON-RPC)
    handler = logging.StreamHandler(sys.stdout if http_mode else sys.stderr)
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )
    return logging.getLogger("calendar_mcp")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Google Calendar + openrouteservice tool server")
    parser.add_argument("--http", action="store_true", help="Serve HTTP tool endpoints instead of MCP stdio")
    parser.add_argument("--host", default="127.0.0.1", help="Host for HTTP mode (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8765, help="Port for HTTP mode (default: 8765)")
    args = parser.parse_args()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging(http_mode=args.http).error(f"Configuration error: {e}")
        sys.exit(1)
    logger = setup_logging(settings.log_level, http_mode=args.http)
    dispatcher = Dispatcher(build_registry(settings))

    try:
        if args.http:
            import uvicorn

            from calendar_mcp.api.server import create_app

            logger.info(f"Starting HTTP tool server at http://{args.host}:{args.port}")
            uvicorn.run(create_app(dispatcher), host=args.host, port=args.port, log_level=settings.log_level.lower())
        else:
            from calendar_mcp.api.mcp_server import create_mcp_server, run_mcp_server

            asyncio.run(run_mcp_server(create_mcp_server(dispatcher)))
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

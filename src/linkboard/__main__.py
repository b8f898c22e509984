"""LinkBoard entry point.

Changes:
  - 2026-03-09: Added --log-level; settings now load before logging setup.
  - 2026-03-06: Added --dev (uvicorn auto-reload).
  - 2026-03-02: Initial CLI.
"""

import argparse
import logging

from linkboard import __version__
from linkboard.config import get_settings
from linkboard.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkboard",
        description="🔗 LinkBoard - personal link directory with an admin editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  linkboard                          Serve on 127.0.0.1:8787
  linkboard --host 0.0.0.0 --port 80 Serve on all interfaces
  linkboard --dev                    Auto-reload on source changes

Configuration comes from LINKBOARD_* environment variables or a .env file,
e.g. LINKBOARD_KV_BACKEND=http LINKBOARD_KV_HTTP_URL=https://kv.example.com
""",
    )
    parser.add_argument("--host", help="Bind address (default: LINKBOARD_HOST or 127.0.0.1)")
    parser.add_argument("--port", "-p", type=int, help="Port (default: LINKBOARD_PORT or 8787)")
    parser.add_argument("--dev", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", help="Log level (default: LINKBOARD_LOG_LEVEL or INFO)")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(level=args.log_level or settings.log_level)

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Starting LinkBoard %s (kv backend: %s)", __version__, settings.kv_backend)

    from linkboard.web.serve import run_server

    try:
        run_server(host=host, port=port, dev=args.dev)
    except KeyboardInterrupt:
        logger.info("👋 LinkBoard stopped.")


if __name__ == "__main__":
    main()

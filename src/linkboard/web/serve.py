"""Server runner for ``linkboard``.

Starts the FastAPI app under uvicorn. In dev mode uvicorn imports the app
factory itself so it can reload on source changes.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def run_server(host: str = "127.0.0.1", port: int = 8787, dev: bool = False) -> None:
    """Start the LinkBoard server (blocking)."""
    import uvicorn

    print("\n" + "=" * 50)
    print("\U0001f517 LINKBOARD")
    print("=" * 50)
    shown_host = "localhost" if host in ("127.0.0.1", "0.0.0.0") else host
    print(f"\n\U0001f310 Homepage: http://{shown_host}:{port}/")
    print(f"\U0001f527 Admin:    http://{shown_host}:{port}/admin\n")

    if dev:
        import pathlib

        src_dir = str(pathlib.Path(__file__).resolve().parent.parent)
        uvicorn.run(
            "linkboard.web.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            reload_dirs=[src_dir],
            reload_includes=["*.py", "*.html"],
            log_level="debug",
        )
    else:
        from linkboard.web.app import create_app

        uvicorn.run(create_app(), host=host, port=port, log_config=None)

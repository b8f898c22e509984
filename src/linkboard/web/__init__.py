# Web layer - FastAPI app, API and page routers.
# Created: 2026-03-05

from linkboard.web.app import create_app

__all__ = ["create_app"]

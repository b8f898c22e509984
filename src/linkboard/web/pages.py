# Pages router - server-rendered homepage and the static admin editor.
# Created: 2026-03-06

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from linkboard.config import Settings
from linkboard.directory.grouping import group_links
from linkboard.directory.store import DirectoryStore
from linkboard.web.deps import get_app_settings, get_store
from linkboard.web.responses import homepage_cache_headers

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"])

CARD_COLORS = ["#3b82f6", "#8b5cf6", "#10b981", "#f59e0b", "#ef4444", "#ec4899"]
DEFAULT_ICON = "🔗"
NO_DESCRIPTION = "No description"


def greeting_for(hour: int) -> tuple[str, str]:
    """(emoji, greeting) for the hour of the day."""
    if hour < 12:
        return "🌅", "Good morning"
    if hour < 18:
        return "☀️", "Good afternoon"
    return "🌙", "Good evening"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def card_for(link: Mapping[str, Any], category: str) -> dict[str, str]:
    """Template context for one link card."""
    name = _text(link.get("name"))
    description = _text(link.get("description"))
    color = CARD_COLORS[(ord(name[0]) if name else 0) % len(CARD_COLORS)]
    return {
        "category": category,
        "name": name,
        "url": _text(link.get("url")),
        "url_intranet": _text(link.get("url_intranet")),
        "description": description or NO_DESCRIPTION,
        "search_name": name.lower(),
        "search_desc": description.lower(),
        "icon": _text(link.get("icon")) or name[:1] or DEFAULT_ICON,
        "color": color,
    }


def _now() -> datetime:
    return datetime.now()


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse)
@router.api_route(
    "/index.html", methods=["GET", "HEAD"], response_class=HTMLResponse, include_in_schema=False
)
async def homepage(
    request: Request,
    store: DirectoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Render the categorized link directory."""
    directory = await store.read_directory()
    groups = group_links(directory, include_empty=settings.show_empty_categories)

    # One section per group, in display order; an empty group renders a placeholder
    sections = [
        {"group": group, "cards": [card_for(link, group.key) for link in group.links]}
        for group in groups
    ]
    total = sum(len(section["cards"]) for section in sections)
    now = _now()
    emoji, greeting = greeting_for(now.hour)

    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "groups": groups,
            "sections": sections,
            "total": total,
            "greeting": greeting,
            "greeting_emoji": emoji,
            "date_str": f"{now:%A}, {now:%B} {now.day}, {now.year}",
        },
        headers=homepage_cache_headers(settings.home_page_max_age, settings.home_page_s_max_age),
    )


@lru_cache(maxsize=1)
def admin_page_html() -> str:
    return (STATIC_DIR / "admin.html").read_text(encoding="utf-8")


@router.api_route("/admin", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def admin_page():
    """Static admin editor; it loads its data from /api/links."""
    return HTMLResponse(admin_page_html())

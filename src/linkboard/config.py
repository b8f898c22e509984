"""Configuration for LinkBoard.

Changes:
  - 2026-03-12: allowed_origins accepts a comma-separated list.
  - 2026-03-09: Added show_empty_categories and expose_error_details.
  - 2026-03-04: Added HTTP KV backend settings (kv_http_url, kv_http_token).
  - 2026-03-02: Initial settings, loaded from LINKBOARD_* env vars and .env.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

if TYPE_CHECKING:
    from linkboard.directory.store import StoreConfig

DEFAULT_ADMIN_PASSWORD = "admin"


def get_config_dir() -> Path:
    """Directory for local state (file KV backend)."""
    return Path.home() / ".linkboard"


class Settings(BaseSettings):
    """Runtime settings.

    Every field can be overridden with an env var, e.g. ``LINKBOARD_PORT=9000``
    or ``LINKBOARD_KV_BACKEND=http``.
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8787
    log_level: str = "INFO"

    # Key-value backend
    kv_backend: Literal["memory", "file", "http"] = "file"
    kv_file_path: Path = Field(default_factory=lambda: get_config_dir() / "kv.json")
    kv_http_url: str | None = None
    kv_http_token: str | None = None
    kv_http_timeout: float = 10.0

    # Record keys
    data_key: str = "data"
    admin_secret_key: str = "ADMIN_PASSWORD"

    # Admin secret used when the store holds none
    admin_password: str | None = None

    # Directory writes
    max_retries: int = Field(default=3, ge=1)
    retry_base_delay: float = Field(default=0.2, ge=0)  # seconds

    # Homepage cache policy (seconds, 0 disables caching)
    home_page_max_age: int = Field(default=300, ge=0)
    home_page_s_max_age: int = Field(default=300, ge=0)

    # Presentation
    show_empty_categories: bool = False

    # HTTP surface
    # LINKBOARD_ALLOWED_ORIGINS=https://a.example,https://b.example (a JSON list also works)
    allowed_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    expose_error_details: bool = True

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @classmethod
    def load(cls) -> Settings:
        """Build settings from the current environment."""
        return cls()

    def store_config(self) -> StoreConfig:
        """Derive the Store Accessor config from these settings."""
        from linkboard.directory.store import StoreConfig

        return StoreConfig(
            data_key=self.data_key,
            admin_secret_key=self.admin_secret_key,
            configured_admin_secret=self.admin_password,
            default_admin_secret=DEFAULT_ADMIN_PASSWORD,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings singleton. Call ``get_settings.cache_clear()`` to reload."""
    return Settings.load()

"""Configuration helpers for the pizza catalog worker.

Credentials only ever come from the environment. They are read once per
invocation into a frozen ``Settings`` value which is then passed down to the
collectors and the store; nothing below the job layer touches ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CITY = "Сыктывкар"
PROMO_SOURCES = ("scrape", "static", "off")
_REQUIRED_ENV = {
    "database_url": "DATABASE_URL",
    "database_key": "DATABASE_KEY",
    "yandex_api_key": "YANDEX_API_KEY",
}


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_key: str
    yandex_api_key: str
    city: str = DEFAULT_CITY
    promo_source: str = "scrape"
    promo_use_js_renderer: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings without validating them; see ``validate``."""
        env = os.environ if environ is None else environ

        promo_source = (env.get("PROMO_SOURCE") or "scrape").strip().lower()
        js_renderer = env.get("PROMO_USE_JS_RENDERER", "false").lower() in {"1", "true", "yes"}

        return cls(
            database_url=env.get("DATABASE_URL", ""),
            database_key=env.get("DATABASE_KEY", ""),
            yandex_api_key=env.get("YANDEX_API_KEY", ""),
            city=(env.get("CATALOG_CITY") or DEFAULT_CITY).strip(),
            promo_source=promo_source,
            promo_use_js_renderer=js_renderer,
        )

    def validate(self) -> "Settings":
        missing = [env_name for attr, env_name in _REQUIRED_ENV.items() if not getattr(self, attr)]
        if missing:
            raise ConfigError(f"{', '.join(missing)} must be set in the environment for the refresh to run.")
        if self.promo_source not in PROMO_SOURCES:
            raise ConfigError(
                f"PROMO_SOURCE must be one of {', '.join(PROMO_SOURCES)}, got {self.promo_source!r}."
            )
        if not self.city:
            raise ConfigError("CATALOG_CITY must not be blank.")
        return self


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load and validate settings for a single invocation."""
    if environ is None:
        load_dotenv()
    settings = Settings.from_env(environ).validate()
    logger.debug("Loaded settings for city=%s promo_source=%s", settings.city, settings.promo_source)
    return settings

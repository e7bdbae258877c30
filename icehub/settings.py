from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)
_SETTINGS: Settings | None = None

DEFAULT_DISPLAY_TIMEZONE = "America/Sao_Paulo"
DEFAULT_SEASON = "2026"


@dataclass(frozen=True)
class Settings:
    apisports_hockey_key: str | None
    thesportsdb_api_key: str | None
    remote_olympics_json_url: str | None
    olympics_data_dir: str | None
    display_timezone: str
    default_season: str

    @property
    def tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.error(
                "Unknown DISPLAY_TIMEZONE=%s, using %s",
                self.display_timezone,
                DEFAULT_DISPLAY_TIMEZONE,
            )
            return ZoneInfo(DEFAULT_DISPLAY_TIMEZONE)


def _env(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def load_settings() -> Settings:
    """Build a settings snapshot from the environment.

    Missing credentials are not an error: the matching provider stage is
    simply skipped by the fallback chain.
    """
    return Settings(
        apisports_hockey_key=_env("APISPORTS_HOCKEY_KEY"),
        thesportsdb_api_key=_env("THESPORTSDB_API_KEY"),
        remote_olympics_json_url=_env("REMOTE_OLYMPICS_JSON_URL"),
        olympics_data_dir=_env("OLYMPICS_DATA_DIR") or "data",
        display_timezone=_env("DISPLAY_TIMEZONE") or DEFAULT_DISPLAY_TIMEZONE,
        default_season=_env("DEFAULT_SEASON") or DEFAULT_SEASON,
    )


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is not None:
        return _SETTINGS
    _SETTINGS = load_settings()
    if not _SETTINGS.apisports_hockey_key:
        logger.warning("APISPORTS_HOCKEY_KEY missing. API-Sports stage disabled.")
    if not _SETTINGS.thesportsdb_api_key:
        logger.warning("THESPORTSDB_API_KEY missing. TheSportsDB stage disabled.")
    return _SETTINGS

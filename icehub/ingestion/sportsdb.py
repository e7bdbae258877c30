"""TheSportsDB client (free community data, key in the URL path)."""

from __future__ import annotations

import logging
import os
from typing import Any

from icehub.ingestion.http import get_json
from icehub.ingestion.schema import SportsDbPayload

logger = logging.getLogger(__name__)
THESPORTSDB_BASE_URL = os.getenv(
    "THESPORTSDB_BASE_URL", "https://www.thesportsdb.com/api/v1/json"
).rstrip("/")
ICE_HOCKEY = "Ice Hockey"


def _items(payload: Any, key: str) -> list[dict[str, Any]]:
    if not isinstance(payload, dict):
        return []
    items = payload.get(key)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _is_hockey(entry: dict[str, Any]) -> bool:
    sport = entry.get("strSport")
    return sport is None or sport == ICE_HOCKEY


class SportsDbClient:
    name = "thesportsdb"

    def __init__(self, api_key: str, base_url: str = THESPORTSDB_BASE_URL) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return get_json(f"{self._base_url}/{self._api_key}/{endpoint}", params=params)

    def find_olympic_league_id(self) -> int | None:
        leagues = _items(self._get("all_leagues.php"), "leagues")
        for entry in leagues:
            if not _is_hockey(entry):
                continue
            names = (entry.get("strLeague"), entry.get("strLeagueAlternate"))
            if any(isinstance(name, str) and "olympic" in name.lower() for name in names):
                try:
                    return int(entry.get("idLeague"))
                except (TypeError, ValueError):
                    continue
        logger.info("TheSportsDB has no Olympic hockey league among %s leagues", len(leagues))
        return None

    def fetch_events(self, league_id: int) -> list[SportsDbPayload]:
        """Past and upcoming events for a league, deduplicated by idEvent."""
        seen: set[str] = set()
        payloads: list[SportsDbPayload] = []
        for endpoint in ("eventspastleague.php", "eventsnextleague.php"):
            for event in _items(self._get(endpoint, {"id": league_id}), "events"):
                event_id = str(event.get("idEvent") or "")
                if event_id and event_id in seen:
                    continue
                seen.add(event_id)
                payloads.append(SportsDbPayload(data=event))
        return payloads

    def search_team_logo(self, team_name: str) -> str | None:
        for team in _items(self._get("searchteams.php", {"t": team_name}), "teams"):
            if team.get("strSport") != ICE_HOCKEY:
                continue
            logo = team.get("strBadge") or team.get("strLogo")
            if isinstance(logo, str) and logo:
                return logo
        return None

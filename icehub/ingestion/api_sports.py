"""API-Sports hockey client (paid, keyed by header)."""

from __future__ import annotations

import logging
import os
from typing import Any

from icehub.ingestion.http import ProviderError, get_json
from icehub.ingestion.parsers import parse_game_detail
from icehub.ingestion.schema import ApiSportsPayload
from icehub.schemas import GameDetail

logger = logging.getLogger(__name__)
APISPORTS_BASE_URL = os.getenv(
    "APISPORTS_BASE_URL", "https://v1.hockey.api-sports.io"
).rstrip("/")
API_KEY_HEADER = "x-apisports-key"

# League IDs API-Sports has used for the Olympic tournaments
KNOWN_OLYMPIC_LEAGUE_IDS = (76, 77)


def _is_olympic(name: Any) -> bool:
    return isinstance(name, str) and "olympic" in name.lower()


def _league_id(entry: dict[str, Any]) -> int | None:
    league = entry.get("league")
    value = league.get("id") if isinstance(league, dict) else entry.get("id")
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def _league_name(entry: dict[str, Any]) -> Any:
    league = entry.get("league")
    if isinstance(league, dict):
        return league.get("name")
    return entry.get("name")


class ApiSportsClient:
    name = "api-sports"

    def __init__(self, api_key: str, base_url: str = APISPORTS_BASE_URL) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def _get(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """GET an endpoint and unwrap the {"response": [...]} envelope."""
        payload = get_json(
            f"{self._base_url}{path}",
            params=params,
            headers={API_KEY_HEADER: self._api_key},
        )
        if not isinstance(payload, dict):
            raise ProviderError(f"API-Sports {path} returned a non-object payload")
        errors = payload.get("errors")
        if errors:
            raise ProviderError(f"API-Sports {path} errors={errors}")
        response = payload.get("response")
        if not isinstance(response, list):
            return []
        return response

    def find_olympic_league_id(self) -> int | None:
        leagues = [entry for entry in self._get("/leagues") if isinstance(entry, dict)]
        for entry in leagues:
            league_id = _league_id(entry)
            if league_id is not None and _is_olympic(_league_name(entry)):
                return league_id
        for entry in leagues:
            if _league_id(entry) in KNOWN_OLYMPIC_LEAGUE_IDS:
                return _league_id(entry)
        logger.info("API-Sports has no Olympic league among %s leagues", len(leagues))
        return None

    def fetch_games(self, league_id: int, season: str) -> list[ApiSportsPayload]:
        games = self._get("/games", {"league": league_id, "season": season})
        return [ApiSportsPayload(data=game) for game in games if isinstance(game, dict)]

    def fetch_game_detail(self, game_id: int) -> GameDetail | None:
        response = self._get("/games/statistics", {"game": game_id})
        if not response:
            return None
        return parse_game_detail(response[0], game_id)

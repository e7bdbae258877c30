"""Provider fallback chain for Olympic hockey fixtures.

Sources are tried in priority order and the first non-empty result wins:
curated JSON, API-Sports (paid), TheSportsDB (free), synthetic fixtures.
A failing stage is logged and treated as empty, so the chain always returns
something displayable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from icehub.cache import ResponseCache
from icehub.ingestion.api_sports import ApiSportsClient
from icehub.ingestion.curated import CuratedJsonSource
from icehub.ingestion.http import ProviderError
from icehub.ingestion.parsers import parse_payloads
from icehub.ingestion.schema import RawFixtureRecord
from icehub.ingestion.sportsdb import SportsDbClient
from icehub.ingestion.synthetic import (
    SYNTHETIC_ID_OFFSET,
    generate_fixtures,
    generate_game_detail,
)
from icehub.schemas import FixtureSource, GameDetail
from icehub.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureBatch:
    source: FixtureSource
    records: list[RawFixtureRecord]


class LeagueIdCache:
    """Resolved provider league IDs, memoized for the owner's lifetime.

    The first successful resolution wins and is never retried; a failed or
    empty lookup is not remembered.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    def get(self, provider: str) -> int | None:
        return self._ids.get(provider)

    def resolve(self, provider: str, lookup: Callable[[], int | None]) -> int | None:
        cached = self._ids.get(provider)
        if cached is not None:
            return cached
        league_id = lookup()
        if league_id is not None:
            self._ids[provider] = league_id
            logger.info("Resolved Olympic league provider=%s league_id=%s", provider, league_id)
        return league_id

    def clear(self) -> None:
        self._ids.clear()


class ProviderFallbackChain:
    def __init__(
        self,
        *,
        curated: CuratedJsonSource | None = None,
        api_sports: ApiSportsClient | None = None,
        sportsdb: SportsDbClient | None = None,
        cache: ResponseCache | None = None,
        league_ids: LeagueIdCache | None = None,
    ) -> None:
        self._curated = curated
        self._api_sports = api_sports
        self._sportsdb = sportsdb
        self._cache = cache if cache is not None else ResponseCache()
        self._league_ids = league_ids if league_ids is not None else LeagueIdCache()

    @classmethod
    def from_settings(cls, settings: Settings, cache: ResponseCache | None = None) -> ProviderFallbackChain:
        return cls(
            curated=CuratedJsonSource(
                url=settings.remote_olympics_json_url,
                data_dir=settings.olympics_data_dir,
            ),
            api_sports=(
                ApiSportsClient(settings.apisports_hockey_key)
                if settings.apisports_hockey_key
                else None
            ),
            sportsdb=(
                SportsDbClient(settings.thesportsdb_api_key)
                if settings.thesportsdb_api_key
                else None
            ),
            cache=cache,
        )

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def league_ids(self) -> LeagueIdCache:
        return self._league_ids

    def fetch_fixtures(self, season: str) -> FixtureBatch:
        cache_key = f"olympics:games:{season}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        stages: list[tuple[FixtureSource, Callable[[str], list[RawFixtureRecord]]]] = [
            ("remote", self._from_curated),
            ("provider", self._from_api_sports),
            ("fallback", self._from_sportsdb),
        ]
        for source, stage in stages:
            records = self._attempt(source, stage, season)
            if records:
                logger.info(
                    "Fixtures season=%s served by source=%s count=%s",
                    season,
                    source,
                    len(records),
                )
                batch = FixtureBatch(source=source, records=records)
                self._cache.set(cache_key, batch)
                return batch

        logger.warning("No provider returned fixtures for season=%s; using synthetic data", season)
        batch = FixtureBatch(source="synthetic", records=generate_fixtures(season))
        self._cache.set(cache_key, batch)
        return batch

    def _attempt(
        self,
        source: FixtureSource,
        stage: Callable[[str], list[RawFixtureRecord]],
        season: str,
    ) -> list[RawFixtureRecord]:
        try:
            return stage(season)
        except ProviderError as exc:
            logger.warning("Fixture source=%s failed season=%s: %s", source, season, exc)
        except Exception:
            logger.exception("Fixture source=%s crashed season=%s", source, season)
        return []

    def _from_curated(self, season: str) -> list[RawFixtureRecord]:
        if self._curated is None or not self._curated.configured:
            return []
        return parse_payloads(self._curated.fetch(season))

    def _from_api_sports(self, season: str) -> list[RawFixtureRecord]:
        client = self._api_sports
        if client is None:
            logger.debug("API-Sports key not configured, skipping")
            return []
        league_id = self._league_ids.resolve(client.name, client.find_olympic_league_id)
        if league_id is None:
            return []
        return parse_payloads(client.fetch_games(league_id, season))

    def _from_sportsdb(self, season: str) -> list[RawFixtureRecord]:
        client = self._sportsdb
        if client is None:
            logger.debug("TheSportsDB key not configured, skipping")
            return []
        league_id = self._league_ids.resolve(client.name, client.find_olympic_league_id)
        if league_id is None:
            return []
        return parse_payloads(client.fetch_events(league_id))

    def fetch_game_detail(self, game_id: int) -> GameDetail:
        """Match sheet from API-Sports, or a synthetic one seeded by the ID.

        Never cached: built fresh for every request.
        """

        if self._api_sports is not None and game_id < SYNTHETIC_ID_OFFSET:
            try:
                detail = self._api_sports.fetch_game_detail(game_id)
            except ProviderError as exc:
                logger.warning("Game detail failed game_id=%s: %s", game_id, exc)
                detail = None
            except Exception:
                logger.exception("Game detail crashed game_id=%s", game_id)
                detail = None
            if detail is not None:
                return detail
        return generate_game_detail(game_id)

    def lookup_team_logo(self, team_name: str) -> str | None:
        if self._sportsdb is None or not team_name:
            return None
        cache_key = f"thesportsdb:team:{team_name.casefold()}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached or None
        try:
            logo = self._sportsdb.search_team_logo(team_name)
        except ProviderError as exc:
            logger.warning("Team logo lookup failed team=%s: %s", team_name, exc)
            return None
        except Exception:
            logger.exception("Team logo lookup crashed team=%s", team_name)
            return None
        self._cache.set(cache_key, logo or "")
        return logo

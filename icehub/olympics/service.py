"""Query surface over the fallback chain and the normalizer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, tzinfo
from typing import Iterable, Literal

from icehub.ingestion.chain import ProviderFallbackChain
from icehub.olympics.normalize import DEFAULT_TZ, normalize_all, sort_key
from icehub.olympics.phases import PHASE_ORDER, PhaseKey
from icehub.schemas import TBD, FixtureSource, GameDetail, NormalizedGame, TeamRef
from icehub.settings import Settings

logger = logging.getLogger(__name__)

DateFilter = Literal["all", "today", "upcoming", "finished"]
GenderFilter = Literal["all", "male", "female"]

DATE_FILTERS: tuple[DateFilter, ...] = ("all", "today", "upcoming", "finished")
GENDER_FILTERS: tuple[GenderFilter, ...] = ("all", "male", "female")


@dataclass(frozen=True)
class GamesResult:
    games: list[NormalizedGame]
    source: FixtureSource


def group_by_phase(games: Iterable[NormalizedGame]) -> dict[PhaseKey, list[NormalizedGame]]:
    """Bucket games by phase key.

    Every phase in PHASE_ORDER is present, in bracket order, even when empty.
    """

    grouped: dict[PhaseKey, list[NormalizedGame]] = {key: [] for key in PHASE_ORDER}
    for game in games:
        grouped[game.phase_key].append(game)
    return grouped


def dedupe_teams(games: Iterable[NormalizedGame]) -> list[TeamRef]:
    """Unique teams in first-seen order; keyed by id, or by name when id is missing."""

    seen: set[tuple[str, object]] = set()
    teams: list[TeamRef] = []
    for game in games:
        for team in (game.home, game.away):
            if team.id is None and team.name == TBD:
                continue
            key = ("id", team.id) if team.id is not None else ("name", team.name.casefold())
            if key in seen:
                continue
            seen.add(key)
            teams.append(team)
    return teams


def _today_bounds(now: datetime, tz: tzinfo) -> tuple[int, int]:
    local_day = now.astimezone(tz).date()
    start = datetime.combine(local_day, time.min, tzinfo=tz)
    end = datetime.combine(local_day + timedelta(days=1), time.min, tzinfo=tz)
    return int(start.timestamp() * 1000), int(end.timestamp() * 1000) - 1


def filter_games(
    games: Iterable[NormalizedGame],
    *,
    date_filter: DateFilter = "all",
    gender: GenderFilter = "all",
    now: datetime | None = None,
    tz: tzinfo = DEFAULT_TZ,
) -> list[NormalizedGame]:
    """Filter a normalized list by gender and by a window around "today".

    Pure: the input is not mutated and nothing is fetched. Games without a
    timestamp always pass the date filter.
    """

    reference = now or datetime.now(tz)
    start_of_today, end_of_today = _today_bounds(reference, tz)

    def keep(game: NormalizedGame) -> bool:
        if gender != "all" and game.gender != gender:
            return False
        if date_filter == "all" or game.timestamp is None:
            return True
        if date_filter == "today":
            return start_of_today <= game.timestamp <= end_of_today
        if date_filter == "upcoming":
            return game.timestamp > end_of_today and game.status != "finished"
        if date_filter == "finished":
            return game.timestamp < start_of_today and game.status == "finished"
        return True

    return sorted((game for game in games if keep(game)), key=sort_key)


class FixtureQueryService:
    def __init__(self, chain: ProviderFallbackChain, tz: tzinfo = DEFAULT_TZ) -> None:
        self._chain = chain
        self._tz = tz

    @classmethod
    def from_settings(cls, settings: Settings) -> FixtureQueryService:
        return cls(ProviderFallbackChain.from_settings(settings), tz=settings.tz)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def fetch_games(self, season: str) -> GamesResult:
        batch = self._chain.fetch_fixtures(season)
        games = normalize_all(batch.records, self._tz)
        return GamesResult(games=games, source=batch.source)

    def list_games(self, season: str) -> list[NormalizedGame]:
        return self.fetch_games(season).games

    def list_teams(self, season: str) -> list[TeamRef]:
        teams: list[TeamRef] = []
        for team in dedupe_teams(self.list_games(season)):
            if team.logo is None:
                logo = self._chain.lookup_team_logo(team.name)
                if logo:
                    team = team.model_copy(update={"logo": logo})
            teams.append(team)
        return teams

    def get_game_detail(self, game_id: int) -> GameDetail | None:
        if game_id <= 0:
            logger.info("Rejected game detail request for game_id=%s", game_id)
            return None
        return self._chain.fetch_game_detail(game_id)

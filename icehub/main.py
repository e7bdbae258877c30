from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from icehub.log_buffer import get_buffer_handler, install_buffer_handler
from icehub.olympics.phases import PHASE_ORDER, PHASE_TITLES
from icehub.olympics.service import (
    DATE_FILTERS,
    GENDER_FILTERS,
    FixtureQueryService,
    filter_games,
    group_by_phase,
)
from icehub.schemas import (
    GameDetail,
    GamesByPhaseResponse,
    GamesResponse,
    PhaseSection,
    TeamsResponse,
)
from icehub.settings import get_settings

app = FastAPI(title="IceHub API")
logger = logging.getLogger(__name__)
_service: FixtureQueryService | None = None


def get_service() -> FixtureQueryService:
    global _service
    if _service is None:
        _service = FixtureQueryService.from_settings(get_settings())
    return _service


def _resolve_season(season: str | None) -> str:
    cleaned = (season or "").strip()
    return cleaned or get_settings().default_season


def _validate_filters(gender: str, date_filter: str) -> None:
    if gender not in GENDER_FILTERS:
        raise HTTPException(
            status_code=400,
            detail=f"gender must be one of: {', '.join(GENDER_FILTERS)}",
        )
    if date_filter not in DATE_FILTERS:
        raise HTTPException(
            status_code=400,
            detail=f"dateFilter must be one of: {', '.join(DATE_FILTERS)}",
        )


@app.on_event("startup")
async def start_up() -> None:
    install_buffer_handler()
    settings = get_settings()
    logger.info(
        "IceHub API starting up: default_season=%s timezone=%s api_sports=%s thesportsdb=%s curated_url=%s",
        settings.default_season,
        settings.display_timezone,
        bool(settings.apisports_hockey_key),
        bool(settings.thesportsdb_api_key),
        bool(settings.remote_olympics_json_url),
    )


@app.get("/health")
def health():
    return {"status": "ok", "service": "icehub-api"}


@app.get("/api/hockey/olympics/games", response_model=GamesResponse)
def api_olympic_games(
    season: str | None = None,
    gender: str = "all",
    date_filter: str = Query("all", alias="dateFilter"),
    service: FixtureQueryService = Depends(get_service),
):
    _validate_filters(gender, date_filter)
    resolved_season = _resolve_season(season)
    result = service.fetch_games(resolved_season)
    games = filter_games(
        result.games,
        date_filter=date_filter,
        gender=gender,
        tz=service.tz,
    )
    message = "Nenhum jogo encontrado para os filtros escolhidos." if not games else None

    return GamesResponse(
        games=games,
        season=resolved_season,
        source=result.source,
        count=len(games),
        message=message,
    )


@app.get("/api/hockey/olympics/games/by-phase", response_model=GamesByPhaseResponse)
def api_olympic_games_by_phase(
    season: str | None = None,
    gender: str = "all",
    service: FixtureQueryService = Depends(get_service),
):
    _validate_filters(gender, "all")
    resolved_season = _resolve_season(season)
    result = service.fetch_games(resolved_season)
    grouped = group_by_phase(filter_games(result.games, gender=gender, tz=service.tz))

    return GamesByPhaseResponse(
        season=resolved_season,
        source=result.source,
        phases=[
            PhaseSection(key=key, title=PHASE_TITLES[key], games=grouped[key])
            for key in PHASE_ORDER
        ],
    )


@app.get("/api/hockey/olympics/teams", response_model=TeamsResponse)
def api_olympic_teams(
    season: str | None = None,
    service: FixtureQueryService = Depends(get_service),
):
    resolved_season = _resolve_season(season)
    teams = service.list_teams(resolved_season)
    return TeamsResponse(teams=teams, season=resolved_season, count=len(teams))


@app.get("/api/hockey/games/{game_id}", response_model=Optional[GameDetail])
def api_game_detail(
    game_id: int,
    service: FixtureQueryService = Depends(get_service),
):
    return service.get_game_detail(game_id)


@app.get("/api/logs")
def api_logs(limit: int = 100, level: str = "DEBUG"):
    min_level = logging.getLevelName(level.strip().upper())
    if not isinstance(min_level, int):
        raise HTTPException(status_code=400, detail=f"Unknown log level: {level}")
    handler = get_buffer_handler()
    return {"entries": handler.entries(limit=limit, min_level=min_level)}

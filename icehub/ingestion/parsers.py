"""Parsers turning provider payloads into RawFixtureRecord / GameDetail."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from icehub.ingestion.schema import (
    ProviderPayload,
    RawFixtureRecord,
    RawTeam,
)
from icehub.schemas import (
    GameDetail,
    GameEvent,
    GameStats,
    PeriodScore,
    PowerPlayPair,
    Scores,
    StatPair,
)

PERIOD_COUNT = 3
_PERIOD_KEYS = ("first", "second", "third")
_SCORE_PAIR = re.compile(r"^\s*(\d+)\s*[-:]\s*(\d+)\s*$")
_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})")

# TheSportsDB encodes knockout rounds as magic intRound values
_SPORTSDB_ROUNDS: dict[str, str] = {
    "125": "Quarter-Final",
    "150": "Semi-Final",
    "160": "Playoff",
    "170": "Bronze Medal Game",
    "200": "Final",
}

_CURATED_STATUS: dict[str, str] = {
    "finished": "FT",
    "final": "FT",
    "ended": "FT",
    "live": "LIVE",
    "in_progress": "LIVE",
    "scheduled": "NS",
    "upcoming": "NS",
}


def _safe_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _safe_str(value: Any) -> str | None:
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _named(value: Any) -> str | None:
    """Read values that providers send either as "x" or as {"name": "x"}."""
    if isinstance(value, dict):
        return _safe_str(value.get("name"))
    return _safe_str(value)


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _team(value: Any, logo: Any = None) -> RawTeam:
    if isinstance(value, dict):
        return RawTeam(
            id=_safe_int(value.get("id")),
            name=_safe_str(value.get("name")),
            logo=_safe_str(value.get("logo")) or _safe_str(logo),
        )
    return RawTeam(name=_safe_str(value), logo=_safe_str(logo))


def parse_curated_entry(entry: dict[str, Any]) -> RawFixtureRecord:
    """Parse one item of the curated fixture document.

    Shape: {id, date, time, home, away, homeLogo?, awayLogo?, phase?, status?,
    score?: {home, away}}. home/away may be plain names or team objects.
    """

    score = _as_dict(entry.get("score") or entry.get("scores"))
    status = _safe_str(entry.get("status"))
    if status:
        status = _CURATED_STATUS.get(status.lower(), status.upper())

    return RawFixtureRecord(
        provider="curated",
        id=_safe_int(entry.get("id")),
        timestamp=_number(entry.get("timestamp")),
        date=_safe_str(entry.get("date")),
        time=_safe_str(entry.get("time")),
        status=status,
        round=_named(entry.get("phase")) or _named(entry.get("round")),
        league_name=_named(entry.get("league")),
        home=_team(entry.get("home"), entry.get("homeLogo")),
        away=_team(entry.get("away"), entry.get("awayLogo")),
        home_score=_safe_int(score.get("home")),
        away_score=_safe_int(score.get("away")),
    )


def parse_api_sports_game(item: dict[str, Any]) -> RawFixtureRecord:
    """Parse one API-Sports hockey game.

    Games arrive either flat or nested under "game" with teams/scores as
    siblings; both layouts are read.
    """

    game = item.get("game") if isinstance(item.get("game"), dict) else item
    teams = _as_dict(item.get("teams") or game.get("teams"))
    scores = _as_dict(item.get("scores") or game.get("scores"))
    status = game.get("status") or item.get("status")
    status_short = status.get("short") if isinstance(status, dict) else status

    raw_round = (
        _named(game.get("round"))
        or _named(item.get("round"))
        or _named(game.get("stage"))
        or _named(item.get("stage"))
        or _named(game.get("week"))
    )
    league = game.get("league") or item.get("league")

    return RawFixtureRecord(
        provider="api-sports",
        id=_safe_int(game.get("id") if game.get("id") is not None else item.get("id")),
        timestamp=_number(game.get("timestamp") if game.get("timestamp") is not None else item.get("timestamp")),
        date=_safe_str(game.get("date") or item.get("date")),
        time=_safe_str(game.get("time") or item.get("time")),
        status=_safe_str(status_short),
        round=raw_round,
        league_name=_named(league),
        home=_team(teams.get("home") or game.get("home")),
        away=_team(teams.get("away") or game.get("away")),
        home_score=_safe_int(scores.get("home")),
        away_score=_safe_int(scores.get("away")),
    )


def _sportsdb_status(value: str | None) -> str | None:
    if not value:
        return None
    lowered = value.lower()
    if "finished" in lowered or lowered in {"ft", "aet", "aot", "ap"}:
        return "FT"
    if lowered in {"ns", "not started", "tbd"}:
        return "NS"
    if lowered in {"p1", "1p"}:
        return "1H"
    if lowered in {"p2", "2p"}:
        return "2H"
    if lowered in {"p3", "3p"}:
        return "3H"
    if lowered in {"ot", "live", "in progress", "pen"}:
        return "LIVE"
    return value.upper()


def _sportsdb_timestamp(value: str | None) -> float | None:
    """strTimestamp is an ISO string in UTC without offset."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def parse_sportsdb_event(event: dict[str, Any]) -> RawFixtureRecord:
    """Translate a TheSportsDB event (strHomeTeam, intHomeScore, ...)."""

    raw_round = _safe_str(event.get("strStage"))
    if raw_round is None:
        raw_round = _SPORTSDB_ROUNDS.get(str(event.get("intRound") or "").strip())
    group = _safe_str(event.get("strGroup"))
    if raw_round is None and group:
        raw_round = f"Group {group}"

    return RawFixtureRecord(
        provider="thesportsdb",
        id=_safe_int(event.get("idEvent")),
        timestamp=_sportsdb_timestamp(_safe_str(event.get("strTimestamp"))),
        date=_safe_str(event.get("dateEvent")),
        time=_safe_str(event.get("strTime")),
        status=_sportsdb_status(_safe_str(event.get("strStatus"))),
        round=raw_round,
        league_name=_safe_str(event.get("strLeague")),
        home=RawTeam(
            id=_safe_int(event.get("idHomeTeam")),
            name=_safe_str(event.get("strHomeTeam")),
            logo=_safe_str(event.get("strHomeTeamBadge")),
        ),
        away=RawTeam(
            id=_safe_int(event.get("idAwayTeam")),
            name=_safe_str(event.get("strAwayTeam")),
            logo=_safe_str(event.get("strAwayTeamBadge")),
        ),
        home_score=_safe_int(event.get("intHomeScore")),
        away_score=_safe_int(event.get("intAwayScore")),
    )


_PARSERS: dict[str, Callable[[dict[str, Any]], RawFixtureRecord]] = {
    "curated": parse_curated_entry,
    "api-sports": parse_api_sports_game,
    "thesportsdb": parse_sportsdb_event,
}


def parse_payload(payload: ProviderPayload) -> RawFixtureRecord:
    """Dispatch on the provider tag set by the client that fetched the data."""

    return _PARSERS[payload.provider](payload.data)


def parse_payloads(payloads: Iterable[ProviderPayload]) -> list[RawFixtureRecord]:
    return [parse_payload(payload) for payload in payloads if isinstance(payload.data, dict)]


def _score_pair(value: Any) -> tuple[int, int]:
    if isinstance(value, dict):
        return (_safe_int(value.get("home")) or 0, _safe_int(value.get("away")) or 0)
    if isinstance(value, str):
        match = _SCORE_PAIR.match(value)
        if match:
            return int(match.group(1)), int(match.group(2))
    return 0, 0


def _parse_periods(value: Any) -> list[PeriodScore]:
    pairs: list[tuple[int, int]] = []
    if isinstance(value, dict):
        pairs = [_score_pair(value.get(key)) for key in _PERIOD_KEYS]
    elif isinstance(value, list):
        pairs = [_score_pair(item) for item in value[:PERIOD_COUNT]]
    while len(pairs) < PERIOD_COUNT:
        pairs.append((0, 0))
    return [PeriodScore(home=home, away=away) for home, away in pairs]


def _stat_pair(value: Any) -> StatPair:
    home, away = _score_pair(value)
    return StatPair(home=home, away=away)


def _power_play_pair(value: Any) -> PowerPlayPair:
    if not isinstance(value, dict):
        return PowerPlayPair()
    return PowerPlayPair(
        home=_safe_str(value.get("home")) or "0/0",
        away=_safe_str(value.get("away")) or "0/0",
    )


def _event_sort_key(event: GameEvent) -> tuple[int, int]:
    match = _CLOCK.match(event.time)
    seconds = int(match.group(1)) * 60 + int(match.group(2)) if match else 0
    return event.period or 0, seconds


def _parse_events(value: Any) -> list[GameEvent]:
    if not isinstance(value, list):
        return []
    events: list[GameEvent] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        team = item.get("team")
        if isinstance(team, dict):
            team = team.get("side")
        if team not in ("home", "away"):
            continue
        period = item.get("period")
        if isinstance(period, str):
            period = _safe_int(period.lstrip("Pp"))
        events.append(
            GameEvent(
                period=_safe_int(period),
                time=_safe_str(item.get("time") or item.get("minute")) or "00:00",
                team=team,
                type=(_safe_str(item.get("type")) or "other").lower(),
                player=_named(item.get("player")),
                detail=_safe_str(item.get("detail") or item.get("comment")),
            )
        )
    return sorted(events, key=_event_sort_key)


def parse_game_detail(item: Any, game_id: int) -> GameDetail | None:
    """Parse the first API-Sports /games/statistics item into a GameDetail."""

    if not isinstance(item, dict):
        return None
    game = item.get("game") if isinstance(item.get("game"), dict) else item
    venue = game.get("venue")
    statistics = _as_dict(item.get("statistics") or game.get("statistics"))
    periods = _parse_periods(item.get("periods") or game.get("periods"))

    scores = _as_dict(item.get("scores") or game.get("scores"))
    home_score = _safe_int(scores.get("home"))
    away_score = _safe_int(scores.get("away"))
    if home_score is None and away_score is None:
        home_score = sum(period.home for period in periods)
        away_score = sum(period.away for period in periods)

    stars = item.get("stars")
    return GameDetail(
        match_id=_safe_int(game.get("id")) or game_id,
        arena=_safe_str(game.get("arena")) or _named(venue),
        city=_safe_str(game.get("city")) or _safe_str(_as_dict(venue).get("city")),
        periods=periods,
        stats=GameStats(
            shots=_stat_pair(statistics.get("shots")),
            penalties=_stat_pair(statistics.get("penalties")),
            power_play=_power_play_pair(
                statistics.get("powerPlay") or statistics.get("powerplays")
            ),
            faceoffs=_stat_pair(statistics.get("faceoffs")),
        ),
        events=_parse_events(item.get("events") or game.get("events")),
        stars=[star for star in (stars if isinstance(stars, list) else []) if isinstance(star, str)],
        scores=Scores(home=home_score, away=away_score),
        source="provider",
    )

"""Normalize raw provider fixtures into the canonical NormalizedGame."""

from __future__ import annotations

import math
import re
from datetime import datetime, tzinfo
from typing import Iterable
from zoneinfo import ZoneInfo

from icehub.ingestion.schema import RawFixtureRecord, RawTeam
from icehub.olympics.gender import classify_gender
from icehub.olympics.phases import map_phase, phase_label
from icehub.schemas import TBD, GameStatus, NormalizedGame, Scores, TeamRef
from icehub.settings import DEFAULT_DISPLAY_TIMEZONE
from icehub.team_logos import team_logo_url

DEFAULT_TZ = ZoneInfo(DEFAULT_DISPLAY_TIMEZONE)

# Provider timestamps below this are Unix seconds, above it milliseconds
SECONDS_THRESHOLD = 2_000_000_000

LIVE_STATUSES = frozenset({"LIVE", "1H", "2H", "3H"})
FINISHED_STATUSES = frozenset({"FT", "AOT", "AWD", "WO", "FIN"})

_MONTHS_PT = (
    "jan.", "fev.", "mar.", "abr.", "mai.", "jun.",
    "jul.", "ago.", "set.", "out.", "nov.", "dez.",
)
_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
_TIME = re.compile(r"^(\d{1,2})(?::(\d{2}))?")


def map_status(token: str | None) -> GameStatus:
    short = (token or "").strip().upper()
    if short in LIVE_STATUSES:
        return "live"
    if short in FINISHED_STATUSES:
        return "finished"
    return "scheduled"


def to_millis(value: float) -> int:
    if value < SECONDS_THRESHOLD:
        return int(value * 1000)
    return int(value)


def format_date_label(value: datetime) -> str:
    return f"{value.day:02d} de {_MONTHS_PT[value.month - 1]}"


def format_time_label(value: datetime) -> str:
    return value.strftime("%H:%M")


def _parse_clock(value: str | None) -> tuple[int, int] | None:
    if not value:
        return None
    match = _TIME.match(value.strip())
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def derive_schedule(raw: RawFixtureRecord, tz: tzinfo) -> tuple[int | None, str, str]:
    """Return (timestamp_ms, date_label, time_label) for a raw record.

    A numeric timestamp is authoritative. Otherwise the date string is read
    as a local date in tz, combined with the explicit time field or the
    HH:MM following "T" in an ISO date.
    """

    # NaN and Infinity survive JSON decoding; they count as no timestamp
    if raw.timestamp is not None and math.isfinite(raw.timestamp):
        millis = to_millis(raw.timestamp)
        try:
            moment = datetime.fromtimestamp(millis / 1000, tz=tz)
        except (OverflowError, OSError, ValueError):
            return millis, "", ""
        return millis, format_date_label(moment), format_time_label(moment)

    if not raw.date:
        return None, "", ""

    date_part, _, time_part = raw.date.partition("T")
    clock = _parse_clock(raw.time) or _parse_clock(time_part[:5])
    time_label = f"{clock[0]:02d}:{clock[1]:02d}" if clock else ""

    match = _DATE.match(date_part.strip())
    if not match:
        return None, "", time_label
    hour, minute = clock or (0, 0)
    try:
        moment = datetime(
            int(match.group(1)),
            int(match.group(2)),
            int(match.group(3)),
            hour,
            minute,
            tzinfo=tz,
        )
    except ValueError:
        return None, "", time_label
    return int(moment.timestamp() * 1000), format_date_label(moment), time_label


def _team(team: RawTeam) -> TeamRef:
    name = team.name or TBD
    return TeamRef(
        id=team.id,
        name=name,
        logo=team.logo or team_logo_url(name) or None,
    )


def normalize(raw: RawFixtureRecord | None, tz: tzinfo | None = None) -> NormalizedGame | None:
    """Convert one raw record into a NormalizedGame.

    Returns None only for a missing record; partial records degrade field by
    field to the defaults.
    """

    if raw is None:
        return None
    timestamp, date_label, time_label = derive_schedule(raw, tz or DEFAULT_TZ)

    return NormalizedGame(
        id=raw.id if raw.id is not None else 0,
        home=_team(raw.home),
        away=_team(raw.away),
        date_label=date_label,
        time_label=time_label,
        timestamp=timestamp,
        phase=phase_label(raw.round),
        phase_key=map_phase(raw.round),
        raw_phase=raw.round,
        status=map_status(raw.status),
        scores=Scores(home=raw.home_score, away=raw.away_score),
        gender=classify_gender(raw.league_name, raw.home.name, raw.away.name),
        league_name=raw.league_name,
    )


def sort_key(game: NormalizedGame) -> int:
    return game.timestamp or 0


def normalize_all(
    records: Iterable[RawFixtureRecord | None],
    tz: tzinfo | None = None,
) -> list[NormalizedGame]:
    games = [normalize(record, tz) for record in records]
    return sorted((game for game in games if game is not None), key=sort_key)

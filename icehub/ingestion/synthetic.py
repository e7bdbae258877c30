"""Deterministic synthetic fixtures, the last stage of the fallback chain."""

from __future__ import annotations

import random

from icehub.ingestion.schema import RawFixtureRecord, RawTeam
from icehub.schemas import (
    GameDetail,
    GameEvent,
    GameStats,
    PeriodScore,
    PowerPlayPair,
    Scores,
    StatPair,
)

# Real provider IDs stay well below this
SYNTHETIC_ID_OFFSET = 900_000
DEFAULT_YEAR = 2026
MEN_LEAGUE = "Olympic Games"
WOMEN_LEAGUE = "Olympic Games Women"

# (month, day, time, home, away, round, status, home_score, away_score)
_FIXTURES: tuple[tuple[int, int, str, str, str, str, str, int | None, int | None], ...] = (
    (2, 5, "16:40", "Canada W", "Finland W", "Preliminary Round - Group A - Women", "FT", 4, 0),
    (2, 11, "16:40", "Slovakia", "Finland", "Preliminary Round - Group B - Men", "FT", 4, 1),
    (2, 12, "21:10", "Canada", "Czechia", "Preliminary Round - Group A - Men", "FT", 5, 2),
    (2, 13, "12:10", "Sweden", "Italy", "Preliminary Round - Group B - Men", "FT", 6, 0),
    (2, 14, "16:40", "USA", "Latvia", "Preliminary Round - Group C - Men", "FT", 3, 1),
    (2, 17, "12:10", "Germany", "France", "Qualification Playoffs - Men", "FT", 5, 1),
    (2, 18, "18:10", "Finland", "Switzerland", "Quarterfinals - Men", "NS", None, None),
    (2, 19, "19:10", "Canada W", "USA W", "Gold Medal Game - Women", "NS", None, None),
    (2, 20, "16:40", "Canada", "Sweden", "Semifinals - Men", "NS", None, None),
    (2, 21, "20:40", "Finland", "Slovakia", "Bronze Medal Game - Men", "NS", None, None),
    (2, 22, "14:10", "Canada", "USA", "Gold Medal Game - Men", "NS", None, None),
)

_ARENAS: tuple[tuple[str, str], ...] = (
    ("Milano Santagiulia Ice Hockey Arena", "Milão"),
    ("Milano Rho Ice Hockey Arena", "Milão"),
)


def _season_year(season: str) -> int:
    cleaned = (season or "").strip()
    if len(cleaned) == 4 and cleaned.isdigit():
        return int(cleaned)
    return DEFAULT_YEAR


def generate_fixtures(season: str) -> list[RawFixtureRecord]:
    """Fabricate a small, fixed tournament for the season's year.

    Pure function of the season string: the same season always yields the
    same records, with IDs starting at SYNTHETIC_ID_OFFSET + 1.
    """

    year = _season_year(season)
    records: list[RawFixtureRecord] = []
    for index, fixture in enumerate(_FIXTURES, start=1):
        month, day, time, home, away, round_name, status, home_score, away_score = fixture
        league = WOMEN_LEAGUE if round_name.endswith("Women") else MEN_LEAGUE
        records.append(
            RawFixtureRecord(
                provider="synthetic",
                id=SYNTHETIC_ID_OFFSET + index,
                date=f"{year:04d}-{month:02d}-{day:02d}",
                time=time,
                status=status,
                round=round_name,
                league_name=league,
                home=RawTeam(name=home),
                away=RawTeam(name=away),
                home_score=home_score,
                away_score=away_score,
            )
        )
    return records


def _clock(rng: random.Random) -> str:
    return f"{rng.randint(0, 19):02d}:{rng.randint(0, 59):02d}"


def _fixture_for(game_id: int) -> tuple | None:
    index = game_id - SYNTHETIC_ID_OFFSET
    if 1 <= index <= len(_FIXTURES):
        return _FIXTURES[index - 1]
    return None


def _split_goals(rng: random.Random, total: int) -> list[int]:
    counts = [0] * 3
    for _ in range(total):
        counts[rng.randrange(3)] += 1
    return counts


def generate_game_detail(game_id: int) -> GameDetail:
    """Synthetic match sheet seeded from the game ID.

    Repeated calls for the same ID return identical content. IDs of the
    synthetic fixture table follow that fixture: a game that has not been
    played has empty periods and no events, and a finished game's periods
    add up to its final score.
    """

    rng = random.Random(game_id)
    arena, city = rng.choice(_ARENAS)

    fixture = _fixture_for(game_id)
    if fixture is not None and fixture[6] != "FT":
        return GameDetail(
            match_id=game_id,
            arena=arena,
            city=city,
            periods=[PeriodScore() for _ in range(3)],
            stats=GameStats(),
            events=[],
            stars=[],
            scores=Scores(),
            source="synthetic",
        )
    if fixture is not None:
        home_by_period = _split_goals(rng, fixture[7] or 0)
        away_by_period = _split_goals(rng, fixture[8] or 0)
    else:
        home_by_period = [rng.randint(0, 2) for _ in range(3)]
        away_by_period = [rng.randint(0, 2) for _ in range(3)]

    periods: list[PeriodScore] = []
    events: list[GameEvent] = []
    penalties = {"home": 0, "away": 0}
    for period in range(1, 4):
        goals = {"home": home_by_period[period - 1], "away": away_by_period[period - 1]}
        periods.append(PeriodScore(home=goals["home"], away=goals["away"]))
        for side in ("home", "away"):
            for _ in range(goals[side]):
                events.append(
                    GameEvent(
                        period=period,
                        time=_clock(rng),
                        team=side,
                        type="goal",
                        player=f"#{rng.randint(2, 98)}",
                    )
                )
            for _ in range(rng.randint(0, 2)):
                penalties[side] += 1
                events.append(
                    GameEvent(
                        period=period,
                        time=_clock(rng),
                        team=side,
                        type="penalty",
                        player=f"#{rng.randint(2, 98)}",
                        detail="2 min",
                    )
                )
    events.sort(key=lambda event: (event.period or 0, event.time))

    home_goals = sum(period.home for period in periods)
    away_goals = sum(period.away for period in periods)
    home_pp = min(home_goals, penalties["away"], rng.randint(0, 2))
    away_pp = min(away_goals, penalties["home"], rng.randint(0, 2))
    faceoffs_home = rng.randint(20, 40)

    stars = [
        f"{rank}ª estrela: {'Casa' if rng.random() < 0.5 else 'Visitante'} #{rng.randint(2, 98)}"
        for rank in (1, 2, 3)
    ]

    return GameDetail(
        match_id=game_id,
        arena=arena,
        city=city,
        periods=periods,
        stats=GameStats(
            shots=StatPair(home=rng.randint(22, 40), away=rng.randint(22, 40)),
            penalties=StatPair(home=penalties["home"], away=penalties["away"]),
            power_play=PowerPlayPair(
                home=f"{home_pp}/{penalties['away']}",
                away=f"{away_pp}/{penalties['home']}",
            ),
            faceoffs=StatPair(home=faceoffs_home, away=60 - faceoffs_home),
        ),
        events=events,
        stars=stars,
        scores=Scores(home=home_goals, away=away_goals),
        source="synthetic",
    )

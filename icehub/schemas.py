from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from icehub.olympics.gender import Gender
from icehub.olympics.phases import PhaseKey

GameStatus = Literal["scheduled", "live", "finished"]
FixtureSource = Literal["remote", "provider", "fallback", "synthetic"]

TBD = "TBD"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TeamRef(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: Optional[int] = None
    name: str = TBD
    logo: Optional[str] = None


class Scores(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    home: Optional[int] = None
    away: Optional[int] = None


class NormalizedGame(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    home: TeamRef
    away: TeamRef
    date_label: str = ""
    time_label: str = ""
    timestamp: Optional[int] = None
    phase: str
    phase_key: PhaseKey
    raw_phase: Optional[str] = None
    status: GameStatus = "scheduled"
    scores: Scores = Scores()
    gender: Gender = "male"
    league_name: Optional[str] = None


class PeriodScore(CamelModel):
    home: int = 0
    away: int = 0


class StatPair(CamelModel):
    home: int = 0
    away: int = 0


class PowerPlayPair(CamelModel):
    home: str = "0/0"
    away: str = "0/0"


class GameStats(CamelModel):
    shots: StatPair = StatPair()
    penalties: StatPair = StatPair()
    power_play: PowerPlayPair = PowerPlayPair()
    faceoffs: StatPair = StatPair()


class GameEvent(CamelModel):
    period: Optional[int] = None
    time: str
    team: Literal["home", "away"]
    type: str
    player: Optional[str] = None
    detail: Optional[str] = None


class GameDetail(CamelModel):
    match_id: int
    arena: Optional[str] = None
    city: Optional[str] = None
    periods: list[PeriodScore]
    stats: GameStats
    events: list[GameEvent]
    stars: list[str]
    scores: Scores
    source: Literal["provider", "synthetic"] = "provider"


class GamesResponse(CamelModel):
    games: list[NormalizedGame]
    season: str
    source: FixtureSource
    count: int
    message: Optional[str] = None


class PhaseSection(CamelModel):
    key: PhaseKey
    title: str
    games: list[NormalizedGame]


class GamesByPhaseResponse(CamelModel):
    season: str
    source: FixtureSource
    phases: list[PhaseSection]


class TeamsResponse(CamelModel):
    teams: list[TeamRef]
    season: str
    count: int

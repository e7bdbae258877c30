"""Internal data contract for fixture ingestion."""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

Provider = Literal["curated", "api-sports", "thesportsdb", "synthetic"]


class RawTeam(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    logo: Optional[str] = None


class RawFixtureRecord(BaseModel):
    """
    Provider-neutral representation of a fixture used across fetch -> parse -> normalize.
    Every field is optional; normalization degrades field by field.
    """

    provider: Optional[Provider] = None
    id: Optional[int] = None

    # Either a numeric timestamp (seconds or ms) or date/time strings
    timestamp: Optional[float] = None
    date: Optional[str] = None
    time: Optional[str] = None

    status: Optional[str] = None
    round: Optional[str] = None
    league_name: Optional[str] = None

    home: RawTeam = Field(default_factory=RawTeam)
    away: RawTeam = Field(default_factory=RawTeam)
    home_score: Optional[int] = None
    away_score: Optional[int] = None


@dataclass(frozen=True)
class CuratedPayload:
    data: dict[str, Any]
    provider: Literal["curated"] = field(default="curated", init=False)


@dataclass(frozen=True)
class ApiSportsPayload:
    data: dict[str, Any]
    provider: Literal["api-sports"] = field(default="api-sports", init=False)


@dataclass(frozen=True)
class SportsDbPayload:
    data: dict[str, Any]
    provider: Literal["thesportsdb"] = field(default="thesportsdb", init=False)


ProviderPayload = Union[CuratedPayload, ApiSportsPayload, SportsDbPayload]

"""Match record and the JSON payload accepted by the HTTP layer.

`Match` is what the repository stores. Its `to_dict()` produces the wire
shape: camelCase keys, with zero counters and a false `extraTime` left out.
`MatchPayload` is the request body model; every field is optional so a
partial body decodes to defaults, and unknown keys are ignored.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


TEXT_FIELDS: FrozenSet[str] = frozenset({"home_team", "away_team", "match_date"})
COUNTER_FIELDS: FrozenSet[str] = frozenset({"goal_count", "yellow_cards", "red_cards"})


@dataclass
class Match:
    id: int = 0
    home_team: str = ""
    away_team: str = ""
    match_date: str = ""
    goal_count: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    extra_time: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "matchDate": self.match_date,
        }
        if self.goal_count:
            data["goalCount"] = self.goal_count
        if self.yellow_cards:
            data["yellowCards"] = self.yellow_cards
        if self.red_cards:
            data["redCards"] = self.red_cards
        if self.extra_time:
            data["extraTime"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Build a Match from its wire form; missing keys take defaults."""
        return cls(
            id=int(data.get("id") or 0),
            home_team=data.get("homeTeam") or "",
            away_team=data.get("awayTeam") or "",
            match_date=data.get("matchDate") or "",
            goal_count=int(data.get("goalCount") or 0),
            yellow_cards=int(data.get("yellowCards") or 0),
            red_cards=int(data.get("redCards") or 0),
            extra_time=bool(data.get("extraTime", False)),
        )


class MatchPayload(BaseModel):
    """Request body for POST and PUT. A client-supplied `id` is accepted but ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    home_team: str = Field(default="", alias="homeTeam")
    away_team: str = Field(default="", alias="awayTeam")
    match_date: str = Field(default="", alias="matchDate")
    goal_count: int = Field(default=0, ge=0, alias="goalCount")
    yellow_cards: int = Field(default=0, ge=0, alias="yellowCards")
    red_cards: int = Field(default=0, ge=0, alias="redCards")
    extra_time: bool = Field(default=False, alias="extraTime")

    # JSON null decodes to the zero value, like an absent key.
    @field_validator("home_team", "away_team", "match_date", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("goal_count", "yellow_cards", "red_cards", mode="before")
    @classmethod
    def _null_counter(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("extra_time", mode="before")
    @classmethod
    def _null_flag(cls, value: Any) -> Any:
        return False if value is None else value

    def to_match(self) -> Match:
        return Match(
            home_team=self.home_team,
            away_team=self.away_team,
            match_date=self.match_date,
            goal_count=self.goal_count,
            yellow_cards=self.yellow_cards,
            red_cards=self.red_cards,
            extra_time=self.extra_time,
        )

    def supplied_fields(self) -> FrozenSet[str]:
        """Attribute names the client actually sent, excluding `id`."""
        return frozenset(self.model_fields_set) - {"id"}

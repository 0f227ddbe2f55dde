from __future__ import annotations

from pydantic import BaseModel, Field


class PositionPreferenceRank(BaseModel):
    # Position ids, most preferred first.
    ranking: list[str] = Field(default_factory=list)


class RosterPlayer(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    first_name: str = Field(default="", alias="firstName", max_length=100)
    last_name: str = Field(default="", alias="lastName", max_length=100)
    is_present: bool | None = Field(default=None, alias="isPresent")
    position_preference_rank: PositionPreferenceRank | None = Field(default=None, alias="positionPreferenceRank")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.id


class RosterPosition(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    period_id: str | None = Field(default=None, alias="periodId")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class LineupRecord(BaseModel):
    team_id: str = Field(alias="teamId", min_length=1, max_length=64)
    game_id: str = Field(alias="gameId", min_length=1, max_length=64)
    period_id: str | None = Field(default=None, alias="periodId")
    # Position id -> player id, None when the position is left open.
    assignments: dict[str, str | None] = Field(default_factory=dict)
    fitness: float = Field(default=0.0, ge=0.0)

    model_config = {
        "populate_by_name": True,
    }

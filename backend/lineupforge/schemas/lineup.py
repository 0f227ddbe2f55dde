from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from lineupforge.core.config import Settings
from lineupforge.core.exceptions import ConfigurationError


PlayerMatchMode = Literal["name", "id"]


class LineupPlayer(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(max_length=200)
    preference: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("preference", "pref"),
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class LineupGenerationSettings(BaseModel):
    population_size: int = Field(default=30, ge=1, le=2000)
    mutation_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    generations: int = Field(default=10, ge=0, le=5000)
    convergence_threshold: float = Field(default=8.0, gt=0.0)
    selection_max_attempts: int = Field(default=10_000, ge=1, le=1_000_000)
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)
    match_players_by: PlayerMatchMode = "name"

    @classmethod
    def from_settings(cls, settings: Settings) -> "LineupGenerationSettings":
        try:
            return cls(
                population_size=settings.lineup_population_size,
                mutation_rate=settings.lineup_mutation_rate,
                generations=settings.lineup_generations,
                convergence_threshold=settings.lineup_convergence_threshold,
                selection_max_attempts=settings.lineup_selection_max_attempts,
                random_seed=settings.lineup_random_seed,
                match_players_by=settings.lineup_match_players_by,
            )
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            raise ConfigurationError(
                "Invalid lineup generation settings",
                details={"fields": fields},
            ) from exc


class GenerateLineupRequest(BaseModel):
    players: list[LineupPlayer] = Field(default_factory=list)
    # Repeated position names share one output key; the last one wins.
    positions: list[str] = Field(default_factory=list)
    period_count: int = Field(default=1, ge=1)
    settings_override: LineupGenerationSettings | None = None


class GenerateLineupResponse(BaseModel):
    assignments: dict[str, str | None]
    fitness: float = Field(ge=0.0)
    generations_run: int = Field(ge=0)
    converged: bool = False
    runtime_ms: int = Field(ge=0)
    settings_used: LineupGenerationSettings

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so the engine picks up the same file from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8", extra="ignore")

    project_name: str = "LineupForge"

    lineup_population_size: int = 30
    lineup_mutation_rate: float = 0.1
    lineup_generations: int = 10
    # Early-exit threshold only; the fairness ratio rarely reaches it.
    lineup_convergence_threshold: float = 8.0
    lineup_selection_max_attempts: int = 10_000
    lineup_random_seed: int | None = None
    lineup_match_players_by: Literal["name", "id"] = "name"


@lru_cache
def get_settings() -> Settings:
    return Settings()

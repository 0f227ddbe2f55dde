from __future__ import annotations

from collections.abc import Sequence
import logging
import random
from time import perf_counter

from lineupforge.core.config import get_settings
from lineupforge.schemas.lineup import (
    GenerateLineupRequest,
    GenerateLineupResponse,
    LineupGenerationSettings,
    LineupPlayer,
)
from lineupforge.services.lineup_genetics import LineupPopulation

logger = logging.getLogger(__name__)


def unassigned_lineup(positions: Sequence[str]) -> dict[str, str | None]:
    return {position: None for position in positions}


class LineupGenerator:
    """Evolves a small population of lineups and returns the fairest one found.

    Only the first period of the winning candidate is turned into
    assignments; extra periods take part in the search but are not reported.
    """

    def __init__(
        self,
        *,
        settings: LineupGenerationSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or LineupGenerationSettings.from_settings(get_settings())
        self.random = rng if rng is not None else random.Random(self.settings.random_seed)

    def run(self, request: GenerateLineupRequest) -> GenerateLineupResponse:
        start = perf_counter()
        settings = request.settings_override or self.settings
        rng = self.random
        if request.settings_override is not None and request.settings_override.random_seed is not None:
            rng = random.Random(request.settings_override.random_seed)

        if not request.players or not request.positions:
            logger.info(
                "Skipping lineup generation: %d player(s), %d position(s)",
                len(request.players),
                len(request.positions),
            )
            return GenerateLineupResponse(
                assignments=unassigned_lineup(request.positions),
                fitness=0.0,
                generations_run=0,
                converged=False,
                runtime_ms=int((perf_counter() - start) * 1000),
                settings_used=settings,
            )

        logger.info(
            "Generating lineup: players=%d positions=%d periods=%d population=%d generations=%d",
            len(request.players),
            len(request.positions),
            request.period_count,
            settings.population_size,
            settings.generations,
        )
        population = LineupPopulation(
            players=request.players,
            positions=request.positions,
            period_count=request.period_count,
            settings=settings,
            rng=rng,
        )
        for _generation in range(settings.generations):
            population.generate()
            population.evaluate()
            if population.finished:
                break

        best = population.best
        if best is None:
            logger.warning("Lineup generation recorded no best candidate; using the first candidate")
            best = population.candidates[0]

        runtime_ms = int((perf_counter() - start) * 1000)
        logger.info(
            "Lineup generated: fitness=%.4f generations=%d converged=%s runtime_ms=%d",
            best.fitness,
            population.generations,
            population.finished,
            runtime_ms,
        )
        return GenerateLineupResponse(
            assignments=best.period_assignments(0),
            fitness=best.fitness,
            generations_run=population.generations,
            converged=population.finished,
            runtime_ms=runtime_ms,
            settings_used=settings,
        )


def generate_optimised_assignments(
    players: Sequence[LineupPlayer],
    positions: Sequence[str],
    period_count: int = 1,
    *,
    settings: LineupGenerationSettings | None = None,
    rng: random.Random | None = None,
) -> dict[str, str | None]:
    """Map each position name to a player id, or None when left open."""
    if not players or not positions:
        return unassigned_lineup(positions)
    request = GenerateLineupRequest(
        players=list(players),
        positions=list(positions),
        period_count=period_count,
    )
    generator = LineupGenerator(settings=settings, rng=rng)
    return generator.run(request).assignments

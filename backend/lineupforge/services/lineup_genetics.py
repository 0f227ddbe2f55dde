from __future__ import annotations

from collections.abc import Sequence
import logging
import random

from lineupforge.schemas.lineup import LineupGenerationSettings, LineupPlayer, PlayerMatchMode
from lineupforge.services.lineup_fitness import score_ratio

logger = logging.getLogger(__name__)


def shuffled(players: Sequence[LineupPlayer], rng: random.Random) -> list[LineupPlayer]:
    ordering = list(players)
    rng.shuffle(ordering)
    return ordering


def build_game_placement(
    period_count: int,
    players: Sequence[LineupPlayer],
    positions: Sequence[str],
    rng: random.Random,
) -> list[list[LineupPlayer]]:
    if not positions:
        return []
    return [shuffled(players, rng) for _ in range(period_count)]


class LineupCandidate:
    """One proposed lineup: a full shuffle of the roster for every period.

    Position ``i`` of a period is played by the player at index ``i`` of that
    period's row; rows hold every player, so entries past the position count
    are carried along but never read.
    """

    def __init__(
        self,
        period_count: int,
        players: Sequence[LineupPlayer],
        positions: Sequence[str],
        rng: random.Random,
        *,
        match_by: PlayerMatchMode = "name",
    ) -> None:
        self.period_count = period_count
        self.players = players
        self.positions = positions
        self.random = rng
        self.match_by = match_by
        self.genes = build_game_placement(period_count, players, positions, rng)
        self.fitness = 0.0

    def calc_fitness(self) -> float:
        self.fitness = score_ratio(
            self.genes,
            self.players,
            self.positions,
            self.period_count,
            match_by=self.match_by,
        )
        return self.fitness

    def clone(self) -> "LineupCandidate":
        copied = object.__new__(LineupCandidate)
        copied.period_count = self.period_count
        copied.players = self.players
        copied.positions = self.positions
        copied.random = self.random
        copied.match_by = self.match_by
        copied.genes = [list(row) for row in self.genes]
        copied.fitness = self.fitness
        return copied

    def crossover(self, partner: "LineupCandidate") -> "LineupCandidate":
        child = LineupCandidate(
            self.period_count,
            self.players,
            self.positions,
            self.random,
            match_by=self.match_by,
        )
        if not self.genes:
            return child
        midpoint = self.random.randrange(len(self.genes))
        for index in range(len(self.genes)):
            # With a single period the midpoint is always 0, so the child is the partner's copy.
            source = self.genes if index > midpoint else partner.genes
            child.genes[index] = list(source[index])
        return child

    def mutate(self, mutation_rate: float) -> None:
        for index in range(len(self.genes)):
            if self.random.random() < mutation_rate:
                self.genes[index] = shuffled(self.players, self.random)

    def period_assignments(self, period_index: int = 0) -> dict[str, str | None]:
        period = self.genes[period_index] if period_index < len(self.genes) else []
        return {
            position: (period[index].id if index < len(period) else None)
            for index, position in enumerate(self.positions)
        }


class LineupPopulation:
    def __init__(
        self,
        *,
        players: Sequence[LineupPlayer],
        positions: Sequence[str],
        period_count: int,
        settings: LineupGenerationSettings,
        rng: random.Random,
    ) -> None:
        self.players = players
        self.positions = positions
        self.period_count = period_count
        self.settings = settings
        self.random = rng
        self.mutation_rate = settings.mutation_rate
        self.generations = 0
        self.finished = False
        self.best: LineupCandidate | None = None
        self.candidates = [
            LineupCandidate(period_count, players, positions, rng, match_by=settings.match_players_by)
            for _ in range(settings.population_size)
        ]
        self.calc_fitness()

    def calc_fitness(self) -> None:
        for candidate in self.candidates:
            candidate.calc_fitness()

    def max_fitness(self) -> float:
        return max((candidate.fitness for candidate in self.candidates), default=0.0)

    def accept_reject(self, max_fitness: float) -> LineupCandidate | None:
        for _attempt in range(self.settings.selection_max_attempts):
            candidate = self.candidates[self.random.randrange(len(self.candidates))]
            if self.random.random() * max_fitness < candidate.fitness:
                return candidate
        return None

    def generate(self) -> None:
        max_fitness = self.max_fitness()
        next_candidates: list[LineupCandidate] = []
        fallbacks = 0
        for index in range(len(self.candidates)):
            parent_a = self.accept_reject(max_fitness)
            parent_b = self.accept_reject(max_fitness)
            if parent_a is not None and parent_b is not None:
                child = parent_a.crossover(parent_b)
                child.mutate(self.mutation_rate)
                next_candidates.append(child)
            else:
                fallbacks += 1
                next_candidates.append(self.candidates[index].clone())

        if fallbacks:
            logger.warning(
                "Lineup selection exhausted for %d of %d candidates in generation %d; kept previous candidates",
                fallbacks,
                len(self.candidates),
                self.generations + 1,
            )

        if next_candidates:
            self.candidates = next_candidates
            self.generations += 1
            self.calc_fitness()

    def evaluate(self) -> None:
        record = 0.0
        best_index = 0
        for index, candidate in enumerate(self.candidates):
            if candidate.fitness > record:
                best_index = index
                record = candidate.fitness
        self.best = self.candidates[best_index]
        if record >= self.settings.convergence_threshold:
            self.finished = True
        logger.debug("Lineup generation %d record fitness %.4f", self.generations, record)

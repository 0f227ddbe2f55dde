from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
import logging

from lineupforge.core.exceptions import LineupGenerationError, RosterRecordNotFoundError
from lineupforge.schemas.lineup import GenerateLineupRequest, LineupPlayer
from lineupforge.schemas.roster import LineupRecord, RosterPlayer, RosterPosition
from lineupforge.services.lineup_generator import LineupGenerator

logger = logging.getLogger(__name__)


def roster_to_lineup_players(
    players: Sequence[RosterPlayer],
    positions: Sequence[RosterPosition],
    *,
    include_absent: bool = False,
) -> list[LineupPlayer]:
    position_names = {position.id: position.name for position in positions}
    lineup_players: list[LineupPlayer] = []
    skipped = 0
    for player in players:
        if player.is_present is False and not include_absent:
            skipped += 1
            continue
        ranking = player.position_preference_rank.ranking if player.position_preference_rank else []
        preference: list[str] = []
        for position_id in ranking:
            if position_id not in position_names:
                raise RosterRecordNotFoundError("Position", position_id)
            preference.append(position_names[position_id])
        lineup_players.append(LineupPlayer(id=player.id, name=player.display_name, preference=preference))
    if skipped:
        logger.info("Skipped %d absent player(s) when building the lineup roster", skipped)
    return lineup_players


def positions_for_period(positions: Sequence[RosterPosition], period_id: str | None) -> list[RosterPosition]:
    if period_id is None:
        return [position for position in positions if position.period_id is None]
    return [position for position in positions if position.period_id in (None, period_id)]


def generate_lineup(
    *,
    team_id: str,
    game_id: str,
    players: Sequence[RosterPlayer],
    positions: Sequence[RosterPosition],
    period_id: str | None = None,
    generator: LineupGenerator | None = None,
) -> LineupRecord:
    active_positions = positions_for_period(positions, period_id)
    duplicates = sorted(name for name, count in Counter(item.name for item in active_positions).items() if count > 1)
    if duplicates:
        raise LineupGenerationError(
            message="Positions in a lineup must have unique names",
            details={"duplicates": duplicates, "period_id": period_id},
        )

    lineup_players = roster_to_lineup_players(players, positions)
    request = GenerateLineupRequest(
        players=lineup_players,
        positions=[position.name for position in active_positions],
    )
    result = (generator or LineupGenerator()).run(request)
    return LineupRecord(
        team_id=team_id,
        game_id=game_id,
        period_id=period_id,
        assignments={position.id: result.assignments[position.name] for position in active_positions},
        fitness=result.fitness,
    )

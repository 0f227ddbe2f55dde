"""Fairness scoring for candidate lineups.

A lineup is scored from each player's point of view: playing a position
ranked ``r`` (0 = favourite) is worth ``len(positions) - r`` points, an
unranked position is worth nothing. The lineup fitness is the average player
score divided by the spread of scores plus one, so lineups where everybody
gets a good position beat lineups where a few players carry the average.
"""

from __future__ import annotations

from collections.abc import Sequence

from lineupforge.schemas.lineup import LineupPlayer, PlayerMatchMode


Game = Sequence[Sequence[LineupPlayer]]


def _same_player(assigned: LineupPlayer, player: LineupPlayer, match_by: PlayerMatchMode) -> bool:
    if match_by == "id":
        return assigned.id == player.id
    return assigned.name == player.name


def sum_player_scores(
    game: Game,
    players: Sequence[LineupPlayer],
    positions: Sequence[str],
    period_count: int,
    *,
    match_by: PlayerMatchMode = "name",
) -> list[float]:
    position_count = len(positions)
    scores: list[float] = []
    for player in players:
        score = 0
        for period_index in range(min(period_count, len(game))):
            period = game[period_index]
            for position_index in range(position_count):
                if position_index >= len(period):
                    break
                assigned = period[position_index]
                if not _same_player(assigned, player, match_by):
                    continue
                position_name = positions[position_index]
                if position_name in player.preference:
                    score += position_count - player.preference.index(position_name)
        scores.append(float(score))
    return scores


def average_player_score(scores: Sequence[float]) -> float:
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def score_distribution(scores: Sequence[float]) -> float:
    """Sum of gaps between neighbouring scores, highest first.

    The sum telescopes to ``max(scores) - min(scores)``.
    """
    ordered = sorted(scores, reverse=True)
    return float(sum(ordered[index] - ordered[index + 1] for index in range(len(ordered) - 1)))


def score_ratio(
    game: Game,
    players: Sequence[LineupPlayer],
    positions: Sequence[str],
    period_count: int,
    *,
    match_by: PlayerMatchMode = "name",
) -> float:
    scores = sum_player_scores(game, players, positions, period_count, match_by=match_by)
    return average_player_score(scores) / (score_distribution(scores) + 1)

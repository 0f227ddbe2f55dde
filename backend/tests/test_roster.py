import pytest

from lineupforge.core.exceptions import AppError, LineupGenerationError, RosterRecordNotFoundError
from lineupforge.schemas.lineup import LineupGenerationSettings
from lineupforge.schemas.roster import LineupRecord, RosterPlayer, RosterPosition
from lineupforge.services.lineup_generator import LineupGenerator
from lineupforge.services.roster import generate_lineup, positions_for_period, roster_to_lineup_players


def _positions():
    return [
        RosterPosition(id="pos-gk", name="Goalkeeper"),
        RosterPosition(id="pos-def", name="Defender"),
        RosterPosition(id="pos-fwd", name="Forward"),
        RosterPosition(id="pos-sub", name="Substitute", period_id="second-half"),
    ]


def _players():
    return [
        RosterPlayer.model_validate(
            {
                "id": "pl-1",
                "firstName": "Ana",
                "lastName": "Silva",
                "isPresent": True,
                "positionPreferenceRank": {"ranking": ["pos-gk", "pos-def"]},
            }
        ),
        RosterPlayer.model_validate(
            {
                "id": "pl-2",
                "firstName": "Ben",
                "lastName": "Okafor",
                "positionPreferenceRank": {"ranking": ["pos-fwd"]},
            }
        ),
        RosterPlayer.model_validate({"id": "pl-3", "firstName": "Cy", "lastName": "Lee", "isPresent": False}),
        RosterPlayer(id="pl-4"),
    ]


def test_roster_players_parse_camel_case_fields():
    player = _players()[0]

    assert player.first_name == "Ana"
    assert player.is_present is True
    assert player.display_name == "Ana Silva"
    assert RosterPlayer(id="pl-9").display_name == "pl-9"


def test_absent_players_are_skipped_and_rankings_become_position_names():
    lineup_players = roster_to_lineup_players(_players(), _positions())

    assert [player.id for player in lineup_players] == ["pl-1", "pl-2", "pl-4"]
    assert lineup_players[0].name == "Ana Silva"
    assert lineup_players[0].preference == ["Goalkeeper", "Defender"]
    assert lineup_players[1].preference == ["Forward"]
    assert lineup_players[2].preference == []


def test_absent_players_can_be_included():
    lineup_players = roster_to_lineup_players(_players(), _positions(), include_absent=True)

    assert [player.id for player in lineup_players] == ["pl-1", "pl-2", "pl-3", "pl-4"]


def test_unknown_ranked_position_is_reported():
    player = RosterPlayer(id="pl-1", position_preference_rank={"ranking": ["pos-missing"]})

    with pytest.raises(RosterRecordNotFoundError) as exc_info:
        roster_to_lineup_players([player], _positions())

    assert exc_info.value.status_code == 404
    assert "pos-missing" in exc_info.value.message
    assert exc_info.value.details == {"record_type": "Position", "record_id": "pos-missing"}


def test_positions_are_filtered_by_period():
    assert [item.id for item in positions_for_period(_positions(), None)] == ["pos-gk", "pos-def", "pos-fwd"]
    assert [item.id for item in positions_for_period(_positions(), "second-half")] == [
        "pos-gk",
        "pos-def",
        "pos-fwd",
        "pos-sub",
    ]
    assert len(positions_for_period(_positions(), "first-half")) == 3


def test_generate_lineup_keys_assignments_by_position_id():
    generator = LineupGenerator(settings=LineupGenerationSettings(random_seed=3))

    record = generate_lineup(
        team_id="team-1",
        game_id="game-1",
        players=_players(),
        positions=_positions(),
        period_id="second-half",
        generator=generator,
    )

    assert isinstance(record, LineupRecord)
    assert record.team_id == "team-1"
    assert record.period_id == "second-half"
    assert sorted(record.assignments) == ["pos-def", "pos-fwd", "pos-gk", "pos-sub"]
    filled = [value for value in record.assignments.values() if value is not None]
    assert sorted(filled) == ["pl-1", "pl-2", "pl-4"]
    assert list(record.assignments.values()).count(None) == 1
    assert record.model_dump(by_alias=True)["gameId"] == "game-1"


def test_generate_lineup_rejects_duplicate_position_names():
    positions = [RosterPosition(id="a", name="Wing"), RosterPosition(id="b", name="Wing")]

    with pytest.raises(LineupGenerationError) as exc_info:
        generate_lineup(team_id="t", game_id="g", players=_players(), positions=positions)

    assert isinstance(exc_info.value, AppError)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details["duplicates"] == ["Wing"]

"""Tests for the season standing aggregation."""
import pytest

from league.services.standings import (
    NO_AVERAGE,
    GameDayRow,
    PlayerRow,
    ResultRow,
    StandingEntry,
    beer_debt_of,
    compute_standing,
    rank_standing,
    scored_placement,
)

A = PlayerRow(id=1, name="Anna", nickname="Ace")
B = PlayerRow(id=2, name="Bertil", nickname=None)
C = PlayerRow(id=3, name="Cecilia", nickname="Chip")
D = PlayerRow(id=4, name="david", nickname=None)

DAY1 = GameDayRow(id=10, date="2025-05-01")
DAY2 = GameDayRow(id=11, date="2025-05-15")


def result(player, day, placement, beer_tokens=0):
    return ResultRow(
        player_id=player.id,
        name=player.name,
        nickname=player.nickname,
        placement=placement,
        beer_tokens=beer_tokens,
        game_day_id=day.id,
        date=day.date,
    )


def names(season):
    return [e.name for e in season.standing]


def test_two_players_one_day_complete():
    """Both players report on the only game day: ranked by points, season complete, winner first."""
    season = compute_standing([A, B], [DAY1], [result(A, DAY1, 1), result(B, DAY1, 2)])
    assert names(season) == ["Anna", "Bertil"]
    assert [e.rounds for e in season.standing] == [1, 1]
    assert [e.avg_placement for e in season.standing] == ["1.00", "2.00"]
    assert season.season_complete is True
    assert season.winner is season.standing[0]
    assert season.winner.name == "Anna"


def test_missing_report_keeps_season_open():
    season = compute_standing([A, B], [DAY1], [result(A, DAY1, 1)])
    assert names(season) == ["Anna", "Bertil"]
    bertil = season.standing[1]
    assert bertil.rounds == 0
    assert bertil.avg_placement == NO_AVERAGE
    assert season.season_complete is False
    assert season.winner is None


def test_unscored_placement_counts_nothing():
    season = compute_standing([A], [DAY1], [result(A, DAY1, 17)])
    anna = season.standing[0]
    assert anna.rounds == 0
    assert anna.total_points == 0
    assert anna.placements == []
    assert anna.avg_placement == NO_AVERAGE


def test_unscored_placement_still_completes_the_day():
    season = compute_standing([A], [DAY1], [result(A, DAY1, 17)])
    assert season.season_complete is True
    assert season.winner.name == "Anna"


def test_beer_debt_sums_only_negative_balances():
    season = compute_standing([A], [DAY1, DAY2], [result(A, DAY1, 3, -3), result(A, DAY2, 4, 2)])
    assert season.standing[0].beer_debt == 3


def test_beer_debt_from_unscored_round_is_kept():
    season = compute_standing([A], [DAY1, DAY2], [result(A, DAY1, 2, -1), result(A, DAY2, 17, -4)])
    anna = season.standing[0]
    assert anna.beer_debt == 5
    assert anna.rounds == 1
    assert anna.total_points == 2


def test_every_active_player_listed_once():
    results = [result(A, DAY1, 2), result(A, DAY2, 1), result(C, DAY2, 3)]
    season = compute_standing([A, B, C, D], [DAY1, DAY2], results)
    ids = [e.player_id for e in season.standing]
    assert sorted(ids) == [1, 2, 3, 4]
    assert len(set(ids)) == 4


def test_sort_by_points_then_rounds():
    results = [
        # Anna: 2 rounds, 6 points
        result(A, DAY1, 3),
        result(A, DAY2, 3),
        # Bertil: 1 round, 6 points
        result(B, DAY1, 6),
        # Cecilia: 1 round, 2 points
        result(C, DAY2, 2),
    ]
    season = compute_standing([A, B, C, D], [DAY1, DAY2], results)
    assert names(season) == ["Cecilia", "Anna", "Bertil", "david"]
    scored = [e for e in season.standing if e.rounds > 0]
    for first, second in zip(scored, scored[1:]):
        assert first.total_points <= second.total_points
        if first.total_points == second.total_points:
            assert first.rounds >= second.rounds


def test_players_without_rounds_last_alphabetically():
    season = compute_standing([D, C, B, A], [DAY1], [result(C, DAY1, 5), result(B, DAY1, 17)])
    assert names(season) == ["Cecilia", "Anna", "Bertil", "david"]
    assert all(e.avg_placement == NO_AVERAGE for e in season.standing[1:])


def test_last_game_day_decides_completion():
    """Everyone reported on the first day but not the last: not complete."""
    results = [result(A, DAY1, 1), result(B, DAY1, 2), result(A, DAY2, 2)]
    season = compute_standing([A, B], [DAY1, DAY2], results)
    assert season.season_complete is False

    season = compute_standing([A, B], [DAY1, DAY2], results + [result(B, DAY2, 1)])
    assert season.season_complete is True
    assert season.winner.name == "Anna"


def test_no_game_days_never_complete():
    season = compute_standing([A, B], [], [result(A, DAY1, 1), result(B, DAY1, 2)])
    assert len(season.standing) == 2
    assert season.season_complete is False
    assert season.winner is None


def test_no_reports_on_last_day_never_complete():
    season = compute_standing([], [DAY1], [])
    assert season.standing == []
    assert season.season_complete is False


def test_submitted_basis_ignores_players_without_reports():
    season = compute_standing([A, B], [DAY1], [result(A, DAY1, 1)], completion_basis="submitted")
    assert season.season_complete is True
    assert season.winner.name == "Anna"


def test_standing_basis_expects_players_with_results_outside_roster():
    """Cecilia left the active roster but has results; she still has to report on the last day."""
    season = compute_standing(
        [A, B],
        [DAY1, DAY2],
        [result(C, DAY1, 1), result(A, DAY2, 2), result(B, DAY2, 3)],
    )
    assert sorted(names(season)) == ["Anna", "Bertil", "Cecilia"]
    assert season.season_complete is False
    assert season.winner is None


def test_unknown_completion_basis_rejected():
    with pytest.raises(ValueError):
        compute_standing([A], [DAY1], [result(A, DAY1, 1)], completion_basis="typo")


def test_non_numeric_values_are_treated_as_not_played():
    season = compute_standing([A], [DAY1, DAY2], [result(A, DAY1, "x", "oops"), result(A, DAY2, "4", None)])
    anna = season.standing[0]
    assert anna.rounds == 1
    assert anna.total_points == 4
    assert anna.beer_debt == 0


def test_scored_placement_threshold():
    assert scored_placement(1) == 1
    assert scored_placement(16) == 16
    assert scored_placement(17) is None
    assert scored_placement(20) is None
    assert scored_placement(None) is None
    assert scored_placement(10, unscored=10) is None


def test_beer_debt_of():
    assert beer_debt_of(-3) == 3
    assert beer_debt_of(2) == 0
    assert beer_debt_of(0) == 0
    assert beer_debt_of(None) == 0


def test_average_two_decimals():
    entry = StandingEntry(player_id=1, name="Anna", nickname=None, rounds=3, total_points=7)
    assert entry.avg_placement == "2.33"


def test_rank_standing_name_tiebreak_is_case_insensitive():
    entries = [
        StandingEntry(player_id=1, name="bo", nickname=None),
        StandingEntry(player_id=2, name="Ada", nickname=None),
    ]
    assert [e.name for e in rank_standing(entries)] == ["Ada", "bo"]


def test_to_dict_shape():
    season = compute_standing([A], [DAY1], [result(A, DAY1, 2, -1)])
    data = season.to_dict()
    assert data["season_complete"] is True
    assert data["winner"]["name"] == "Anna"
    assert data["standing"][0] == {
        "player_id": 1,
        "name": "Anna",
        "nickname": "Ace",
        "rounds": 1,
        "total_points": 2,
        "beer_debt": 1,
        "placements": [2],
        "avg_placement": "2.00",
    }

"""
Project: SnapCall
Author: Xingnan Zhu
File Name: test_filtering.py
Description:
    Tests for situation / team matching and the ad hoc play slicers.
"""

from snapcall.core.models import SituationQuery
from snapcall.core.types import FieldResolvers
from snapcall.filtering import (
    available_defensive_fronts,
    available_formations,
    available_play_families,
    filter_by_distance_range,
    filter_by_down,
    filter_by_field_position,
    filter_by_game,
    filter_by_play_type,
    filter_by_quarter,
    filter_by_situation,
    filter_by_team,
    is_penalty_only,
    matches_situation,
    matches_team,
    unique_field_values,
)

RESOLVERS = FieldResolvers.for_mappings()


def _play(**kw) -> dict:
    base = {
        "game_id": "g1",
        "offense_team": "Central Eagles",
        "defense_team": "North Hawks",
        "quarter": 1,
        "down": 1,
        "distance": 10,
        "yard_line_start": 30,
        "yards_gained": 4,
        "play_family": "inside_run",
        "formation": "I-Form",
        "defensive_front": "4-3",
    }
    base.update(kw)
    return base


class TestMatchesSituation:
    def test_empty_query_matches_everything(self):
        assert matches_situation(_play(), RESOLVERS, SituationQuery())

    def test_down(self):
        assert matches_situation(_play(down=3), RESOLVERS, SituationQuery(down=3))
        assert not matches_situation(_play(down=2), RESOLVERS, SituationQuery(down=3))

    def test_distance_band(self):
        query = SituationQuery(distance_band="short")
        assert matches_situation(_play(distance=2), RESOLVERS, query)
        assert not matches_situation(_play(distance=3), RESOLVERS, query)

    def test_distance_band_fails_closed(self):
        query = SituationQuery(distance_band="short")
        assert not matches_situation(_play(distance=None), RESOLVERS, query)

    def test_field_zone_fails_closed(self):
        query = SituationQuery(field_zone="own_21_50")
        assert matches_situation(_play(), RESOLVERS, query)
        assert not matches_situation(_play(yard_line_start=None), RESOLVERS, query)
        assert not matches_situation(_play(distance=None), RESOLVERS, query)

    def test_field_zone_precedence(self):
        query = SituationQuery(field_zone="goal_to_go")
        assert matches_situation(_play(yard_line_start=92, distance=6), RESOLVERS, query)
        assert not matches_situation(
            _play(yard_line_start=92, distance=6), RESOLVERS, SituationQuery(field_zone="red_zone")
        )

    def test_formation_substring_case_insensitive(self):
        query = SituationQuery(formation="trips")
        assert matches_situation(_play(formation="Trips Right"), RESOLVERS, query)
        assert not matches_situation(_play(formation="I-Form"), RESOLVERS, query)

    def test_missing_string_field_does_not_match(self):
        query = SituationQuery(play_family="run")
        assert not matches_situation(_play(play_family=None), RESOLVERS, query)

    def test_absent_resolver_does_not_match(self):
        resolvers = FieldResolvers.for_mappings()
        bare = FieldResolvers(
            game_id=resolvers.game_id,
            offense_team=resolvers.offense_team,
            defense_team=resolvers.defense_team,
            down=resolvers.down,
            distance=resolvers.distance,
            yard_line_start=resolvers.yard_line_start,
        )
        assert not matches_situation(_play(), bare, SituationQuery(defensive_front="4-3"))
        assert matches_situation(_play(), bare, SituationQuery(down=1))

    def test_defensive_front(self):
        query = SituationQuery(defensive_front="4-3")
        assert matches_situation(_play(), RESOLVERS, query)
        assert not matches_situation(_play(defensive_front="6-2"), RESOLVERS, query)

    def test_penalty_flag(self):
        assert matches_situation(_play(is_penalty=True), RESOLVERS, SituationQuery(is_penalty=True))
        # absent flag reads as False
        assert matches_situation(_play(), RESOLVERS, SituationQuery(is_penalty=False))
        assert not matches_situation(_play(), RESOLVERS, SituationQuery(is_penalty=True))

    def test_all_fields_must_match(self):
        query = SituationQuery(down=1, distance_band="very_long", formation="I-Form")
        assert matches_situation(_play(), RESOLVERS, query)
        assert not matches_situation(_play(formation="Shotgun"), RESOLVERS, query)


class TestMatchesTeam:
    def test_substring(self):
        assert matches_team(_play(), RESOLVERS, "eagles")
        assert matches_team(_play(), RESOLVERS, "Central Eagles")
        assert not matches_team(_play(), RESOLVERS, "Hawks")

    def test_filter_by_team(self):
        plays = [_play(), _play(offense_team="North Hawks"), _play()]
        assert len(filter_by_team(plays, RESOLVERS, "Eagles")) == 2


class TestPenaltyOnly:
    def test_zero_yard_penalty(self):
        assert is_penalty_only(_play(is_penalty=True, yards_gained=0), RESOLVERS)

    def test_penalty_with_yards_is_kept(self):
        assert not is_penalty_only(_play(is_penalty=True, yards_gained=6), RESOLVERS)

    def test_missing_yards_count_as_zero(self):
        assert is_penalty_only(_play(is_penalty=True, yards_gained=None), RESOLVERS)

    def test_not_a_penalty(self):
        assert not is_penalty_only(_play(yards_gained=0), RESOLVERS)


class TestSlicers:
    def test_by_situation_keeps_order(self):
        plays = [_play(down=1, play_id="a"), _play(down=2), _play(down=1, play_id="b")]
        result = filter_by_situation(plays, RESOLVERS, SituationQuery(down=1))
        assert [p["play_id"] for p in result] == ["a", "b"]

    def test_by_game(self):
        plays = [_play(), _play(game_id="g2")]
        assert filter_by_game(plays, RESOLVERS, "g2") == [plays[1]]

    def test_by_quarter(self):
        plays = [_play(quarter=1), _play(quarter=4), _play(quarter=None)]
        assert filter_by_quarter(plays, RESOLVERS, 4) == [plays[1]]

    def test_by_down(self):
        plays = [_play(down=3), _play(down=4)]
        assert filter_by_down(plays, RESOLVERS, 4) == [plays[1]]

    def test_by_distance_range_inclusive(self):
        plays = [_play(distance=d) for d in (1, 3, 5, 7)] + [_play(distance=None)]
        result = filter_by_distance_range(plays, RESOLVERS, 3, 5)
        assert [p["distance"] for p in result] == [3, 5]

    def test_by_field_position(self):
        plays = [_play(yard_line_start=y) for y in (10, 50, 85)] + [_play(yard_line_start=None)]
        result = filter_by_field_position(plays, RESOLVERS, 50, 99)
        assert [p["yard_line_start"] for p in result] == [50, 85]

    def test_by_play_type(self):
        plays = [_play(play_family="outside_run"), _play(play_family="slant"), _play(play_family=None)]
        assert filter_by_play_type(plays, RESOLVERS, "RUN") == [plays[0]]


class TestFieldDiscovery:
    def test_unique_values_first_seen(self):
        plays = [_play(formation="Trips"), _play(formation=None), _play(formation="I-Form"), _play(formation="Trips")]
        assert unique_field_values(plays, lambda p: p["formation"]) == ["Trips", "I-Form"]

    def test_available_lists_sorted(self):
        plays = [
            _play(formation="Trips", play_family="slant", defensive_front="6-2"),
            _play(formation="Ace", play_family="dive_run"),
        ]
        assert available_formations(plays, RESOLVERS) == ["Ace", "Trips"]
        assert available_play_families(plays, RESOLVERS) == ["dive_run", "slant"]
        assert available_defensive_fronts(plays, RESOLVERS) == ["4-3", "6-2"]

"""
Project: SnapCall
Author: Xingnan Zhu
File Name: test_players.py
Description:
    Tests for player touch attribution and leaderboards.
"""

import math

import pytest

from snapcall.core.models import PlayerStatLine
from snapcall.core.types import FieldResolvers
from snapcall.players import (
    aggregate_player_stats,
    calculate_player_stats,
    normalize_player_name,
    player_had_touch,
    player_leaders,
    to_stat_lines,
)

RESOLVERS = FieldResolvers.for_mappings()


def _play(**kw) -> dict:
    base = {
        "game_id": "g1",
        "offense_team": "Team A",
        "defense_team": "Team B",
        "down": 1,
        "distance": 10,
        "yard_line_start": 30,
        "yards_gained": 0,
        "play_family": "inside_run",
    }
    base.update(kw)
    return base


def _plays() -> list[dict]:
    return [
        _play(primary_ball_carrier=" John Smith ", yards_gained=6),
        _play(
            down=3,
            distance=5,
            play_family="slant",
            passer="Tom Wilson",
            targeted_receiver="john smith",
            yards_gained=20,
        ),
        # same player in two roles, no family
        _play(
            down=2,
            play_family=None,
            primary_ball_carrier="Tom Wilson",
            passer="TOM WILSON",
            yards_gained=3,
        ),
    ]


def _line(player: str, **kw) -> PlayerStatLine:
    values = dict(
        player=player,
        touches=1,
        yards=0,
        successes=0,
        success_rate=0.0,
        explosives=0,
        touchdowns=0,
        turnovers=0,
        avg_yards_per_touch=0.0,
    )
    values.update(kw)
    return PlayerStatLine(**values)


class TestNormalization:
    def test_trim_and_lower(self):
        assert normalize_player_name("  John SMITH ") == "john smith"

    def test_variants_collapse(self):
        by_player = aggregate_player_stats(_plays(), RESOLVERS)
        assert list(by_player) == ["john smith", "tom wilson"]

    def test_player_had_touch(self):
        play = _plays()[1]
        assert player_had_touch(play, RESOLVERS, "JOHN SMITH")
        assert not player_had_touch(play, RESOLVERS, "Mike Johnson")


class TestAggregatePlayerStats:
    def test_totals(self):
        john = aggregate_player_stats(_plays(), RESOLVERS)["john smith"]
        assert john.touches == 2
        assert john.yards == 26
        assert john.successes == 2
        assert john.explosives == 1
        assert john.usage_by_play_family == {"inside_run": 1, "slant": 1}

    def test_double_role_counts_twice(self):
        tom = aggregate_player_stats(_plays(), RESOLVERS)["tom wilson"]
        assert tom.touches == 3
        assert tom.yards == 26
        assert tom.successes == 1
        assert tom.usage_by_play_family == {"slant": 1, "unknown": 2}

    def test_penalty_only_plays_skipped(self):
        plays = [_play(primary_ball_carrier="Mike", is_penalty=True, yards_gained=0)]
        assert aggregate_player_stats(plays, RESOLVERS) == {}

    def test_touchdowns_and_turnovers(self):
        plays = [
            _play(primary_ball_carrier="Mike", yards_gained=2, is_touchdown=True),
            _play(primary_ball_carrier="Mike", yards_gained=-4, is_turnover=True),
        ]
        mike = aggregate_player_stats(plays, RESOLVERS)["mike"]
        assert mike.touchdowns == 1
        assert mike.turnovers == 1
        assert mike.successes == 1
        assert mike.yards == -2


class TestStatLines:
    def test_derived_rates(self):
        lines = {line.player: line for line in to_stat_lines(aggregate_player_stats(_plays(), RESOLVERS))}
        assert lines["john smith"].avg_yards_per_touch == 13.0
        assert lines["john smith"].success_rate == 1.0
        assert math.isclose(lines["tom wilson"].avg_yards_per_touch, 26 / 3)
        assert math.isclose(lines["tom wilson"].success_rate, 1 / 3)


class TestPlayerLeaders:
    def test_default_sort_is_yards(self):
        lines = [_line("a", yards=5), _line("b", yards=30), _line("c", yards=12)]
        assert [line.player for line in player_leaders(lines)] == ["b", "c", "a"]

    def test_ties_keep_input_order(self):
        lines = to_stat_lines(aggregate_player_stats(_plays(), RESOLVERS))
        assert [line.player for line in player_leaders(lines)] == ["john smith", "tom wilson"]
        assert [line.player for line in player_leaders(lines, "touches")] == [
            "tom wilson",
            "john smith",
        ]

    @pytest.mark.parametrize(
        "sort_by", ["touches", "yards", "success_rate", "avg_yards_per_touch", "touchdowns"]
    )
    def test_every_sort_key(self, sort_by):
        lines = [_line("low", **{sort_by: 1}), _line("high", **{sort_by: 2})]
        assert player_leaders(lines, sort_by)[0].player == "high"

    def test_unknown_sort_key(self):
        with pytest.raises(ValueError, match="Unknown sort key"):
            player_leaders([_line("a")], "fumbles")

    def test_limit(self):
        lines = [_line(f"p{i}", yards=i) for i in range(30)]
        assert len(player_leaders(lines)) == 20
        assert len(player_leaders(lines, limit=5)) == 5


class TestCalculatePlayerStats:
    def test_top_twenty_by_yards(self):
        plays = [_play(primary_ball_carrier=f"Back {i}", yards_gained=i) for i in range(25)]
        leaders = calculate_player_stats(plays, RESOLVERS)
        assert len(leaders) == 20
        assert leaders[0].player == "back 24"
        assert leaders[-1].player == "back 5"

    def test_empty(self):
        assert calculate_player_stats([], RESOLVERS) == []

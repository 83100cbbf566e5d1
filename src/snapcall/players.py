"""
Project: SnapCall
Author: Xingnan Zhu
File Name: players.py
Description:
    Player touch attribution and leaderboards.

    A play credits one touch to each of up to three roles: ball carrier,
    passer and targeted receiver.  A name listed in two roles on the same
    play is credited twice.  Names are grouped by their trimmed, lower-cased
    form, and that normalized form is what the leaderboard shows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

from snapcall.core.models import DEFAULT_OPTIONS, AnalysisOptions, PlayerStatLine
from snapcall.core.types import FieldResolvers, PlayRecord
from snapcall.filtering import is_penalty_only
from snapcall.grouping import evaluate_play, touch_participants

logger = logging.getLogger(__name__)

LeaderSortKey = Literal["touches", "yards", "success_rate", "avg_yards_per_touch", "touchdowns"]
LEADER_SORT_KEYS: tuple[str, ...] = (
    "touches",
    "yards",
    "success_rate",
    "avg_yards_per_touch",
    "touchdowns",
)
DEFAULT_LEADER_LIMIT = 20
UNKNOWN_FAMILY = "unknown"


@dataclass
class PlayerTouchStats:
    """Running totals for one player."""

    touches: int = 0
    yards: float = 0
    successes: int = 0
    explosives: int = 0
    touchdowns: int = 0
    turnovers: int = 0
    usage_by_play_family: dict[str, int] = field(default_factory=dict)


def normalize_player_name(name: str) -> str:
    return name.strip().lower()


def touching_players(play: PlayRecord, resolvers: FieldResolvers) -> list[str]:
    """Raw names of every player credited with a touch on ``play``."""
    return touch_participants(play, resolvers)


def player_had_touch(play: PlayRecord, resolvers: FieldResolvers, player: str) -> bool:
    target = normalize_player_name(player)
    return any(normalize_player_name(n) == target for n in touching_players(play, resolvers))


def aggregate_player_stats(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> dict[str, PlayerTouchStats]:
    """Accumulate touch statistics per normalized player name.

    Returns a dict in first-touch order.
    """
    by_player: dict[str, PlayerTouchStats] = {}

    for play in plays:
        if options.drop_penalty_only and is_penalty_only(play, resolvers):
            continue

        outcome = evaluate_play(play, resolvers, options)
        family = outcome.play_family or UNKNOWN_FAMILY

        for name in touching_players(play, resolvers):
            stats = by_player.setdefault(normalize_player_name(name), PlayerTouchStats())
            stats.touches += 1
            stats.yards += outcome.yards
            stats.successes += outcome.success
            stats.explosives += outcome.explosive
            stats.touchdowns += outcome.touchdown
            stats.turnovers += outcome.turnover
            stats.usage_by_play_family[family] = stats.usage_by_play_family.get(family, 0) + 1

    logger.debug("Aggregated touches for %d players", len(by_player))
    return by_player


def to_stat_lines(by_player: dict[str, PlayerTouchStats]) -> list[PlayerStatLine]:
    lines = []
    for player, stats in by_player.items():
        touches = stats.touches
        lines.append(
            PlayerStatLine(
                player=player,
                touches=touches,
                yards=stats.yards,
                successes=stats.successes,
                success_rate=stats.successes / touches if touches > 0 else 0.0,
                explosives=stats.explosives,
                touchdowns=stats.touchdowns,
                turnovers=stats.turnovers,
                avg_yards_per_touch=stats.yards / touches if touches > 0 else 0.0,
                usage_by_play_family=dict(stats.usage_by_play_family),
            )
        )
    return lines


def player_leaders(
    lines: Sequence[PlayerStatLine],
    sort_by: LeaderSortKey = "yards",
    limit: int = DEFAULT_LEADER_LIMIT,
) -> list[PlayerStatLine]:
    """Top ``limit`` players by ``sort_by`` (descending; ties keep input order).

    Raises:
        ValueError: If ``sort_by`` is not one of LEADER_SORT_KEYS.
    """
    if sort_by not in LEADER_SORT_KEYS:
        msg = f"Unknown sort key: {sort_by!r} (expected one of {', '.join(LEADER_SORT_KEYS)})"
        raise ValueError(msg)
    return sorted(lines, key=lambda line: getattr(line, sort_by), reverse=True)[:limit]


def calculate_player_stats(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> list[PlayerStatLine]:
    """Leaderboard of the top 20 players by total yards."""
    lines = to_stat_lines(aggregate_player_stats(plays, resolvers, options))
    return player_leaders(lines, "yards", DEFAULT_LEADER_LIMIT)

"""
Project: SnapCall
Author: Xingnan Zhu
File Name: grouping.py
Description:
    Groups plays by play key and turns each group into a
    PlayEffectivenessSummary.

    Algorithm:
    1. Key every play: "<formation> | <family>" (+ " | <motion>" when
       motion participates).  Missing parts render as "—".
    2. Aggregate raw per-group arrays: yards, success, explosive, touchdown,
       turnover, touch participants and play ids.  Penalty-only plays are
       skipped when drop_penalty_only is set.
    3. Summarize: raw rates, EB-smoothed success rate, z-score of average
       yards against the yardage of ALL grouped plays, composite score,
       low-sample flag, top players, representative plays.
    4. Rank: composite desc → sample size desc → average yards desc.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from snapcall.core.models import (
    DEFAULT_OPTIONS,
    AdjustedMetrics,
    AnalysisOptions,
    PlayEffectivenessSummary,
    PlayKeyParts,
    RawMetrics,
)
from snapcall.core.types import FieldResolvers, PlayRecord
from snapcall.filtering import is_penalty_only
from snapcall.metrics import composite_score, is_explosive, is_success, smooth_success_rate, z_score

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"
TOP_PLAYERS = 3
REPRESENTATIVE_PLAYS = 3


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


def default_key_format(parts: PlayKeyParts) -> str:
    """``"Trips Right | slant"``, or ``"Trips Right | slant | jet"`` with motion."""
    if parts.motion_tag:
        return f"{parts.formation} | {parts.play_family} | {parts.motion_tag}"
    return f"{parts.formation} | {parts.play_family}"


def play_key_parts(
    play: PlayRecord,
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> PlayKeyParts:
    motion = None
    if options.include_motion_in_key:
        motion = resolvers.value("motion_tag", play) or ""
    return PlayKeyParts(
        formation=resolvers.value("formation", play) or PLACEHOLDER,
        play_family=resolvers.value("play_family", play) or PLACEHOLDER,
        motion_tag=motion,
    )


def generate_play_key(
    play: PlayRecord,
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> str:
    """Stable string signature used as the aggregation bucket."""
    formatter = options.key_format or default_key_format
    return formatter(play_key_parts(play, resolvers, options))


# ---------------------------------------------------------------------------
# Per-play evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlayOutcome:
    """Derived result of a single snap."""

    yards: float
    success: bool
    explosive: bool
    touchdown: bool
    turnover: bool
    play_family: str | None


def evaluate_play(
    play: PlayRecord,
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> PlayOutcome:
    """Success and explosiveness for one play.

    A play without down or distance is never a success.  A play without a
    family is judged against the run threshold.
    """
    down = resolvers.down(play)
    distance = resolvers.distance(play)
    yards = resolvers.yards(play)
    touchdown = resolvers.flag("is_touchdown", play)
    family = resolvers.value("play_family", play)

    success = (
        down is not None
        and distance is not None
        and is_success(down, distance, yards, touchdown)
    )
    explosive = is_explosive(
        family or "run", yards, options.explosive_run_yds, options.explosive_pass_yds
    )
    return PlayOutcome(
        yards=yards,
        success=success,
        explosive=explosive,
        touchdown=touchdown,
        turnover=resolvers.flag("is_turnover", play),
        play_family=family or None,
    )


def touch_participants(play: PlayRecord, resolvers: FieldResolvers) -> list[str]:
    """Ball carrier, passer and targeted receiver, each if present."""
    names = []
    for role in ("primary_ball_carrier", "passer", "targeted_receiver"):
        name = resolvers.value(role, play)
        if name:
            names.append(name)
    return names


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


@dataclass
class RawPlayStats:
    """Per-play arrays for one group, index-aligned (one entry per play)."""

    yards_gained: list[float] = field(default_factory=list)
    successes: list[bool] = field(default_factory=list)
    explosives: list[bool] = field(default_factory=list)
    touchdowns: list[bool] = field(default_factory=list)
    turnovers: list[bool] = field(default_factory=list)
    play_ids: list[str | None] = field(default_factory=list)
    players: list[str] = field(default_factory=list)  # one entry per touch

    @property
    def sample_size(self) -> int:
        return len(self.yards_gained)


def aggregate_raw_stats(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> RawPlayStats:
    """Accumulate raw arrays for a group of plays."""
    stats = RawPlayStats()
    skipped = 0

    for play in plays:
        if options.drop_penalty_only and is_penalty_only(play, resolvers):
            skipped += 1
            continue

        outcome = evaluate_play(play, resolvers, options)
        stats.players.extend(touch_participants(play, resolvers))

        play_id = resolvers.value("play_id", play)
        stats.play_ids.append(str(play_id) if play_id not in (None, "") else None)

        stats.yards_gained.append(outcome.yards)
        stats.successes.append(outcome.success)
        stats.explosives.append(outcome.explosive)
        stats.touchdowns.append(outcome.touchdown)
        stats.turnovers.append(outcome.turnover)

    if skipped:
        logger.debug("Skipped %d penalty-only plays during aggregation", skipped)
    return stats


def _rate(flags: Sequence[bool], n: int) -> float:
    return sum(flags) / n if n > 0 else 0.0


def _top_players(players: Sequence[str]) -> list[str]:
    # most_common keeps first-encountered order among equal counts
    return [name for name, _ in Counter(players).most_common(TOP_PLAYERS)]


def _representative_plays(stats: RawPlayStats) -> list[str]:
    """Highest-yardage plays with a known id; ties keep play order."""
    pairs = [
        (yards, play_id)
        for yards, play_id in zip(stats.yards_gained, stats.play_ids)
        if play_id is not None
    ]
    pairs.sort(key=lambda pair: pair[0], reverse=True)
    return [play_id for _, play_id in pairs[:REPRESENTATIVE_PLAYS]]


def summarize_group(
    key: str,
    stats: RawPlayStats,
    population_yards: Sequence[float],
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> PlayEffectivenessSummary:
    """Build the effectiveness summary for one group.

    Args:
        population_yards: Yards gained by every play that was grouped,
            used as the reference distribution for the yardage z-score.
    """
    n = stats.sample_size

    success_rate = _rate(stats.successes, n)
    avg_yards = sum(stats.yards_gained) / n if n > 0 else 0.0
    explosive_rate = _rate(stats.explosives, n)
    td_rate = _rate(stats.touchdowns, n)
    turnover_rate = _rate(stats.turnovers, n)

    smoothing = options.smoothing
    if smoothing.enabled:
        adjusted_success = smooth_success_rate(
            success_rate, n, smoothing.prior_success_rate, smoothing.weight
        )
    else:
        adjusted_success = success_rate

    score = composite_score(
        adjusted_success,
        z_score(avg_yards, population_yards),
        explosive_rate,
        turnover_rate,
        td_rate,
    )

    return PlayEffectivenessSummary(
        key=key,
        sample_size=n,
        raw=RawMetrics(
            success_rate=success_rate,
            avg_yards=avg_yards,
            explosive_rate=explosive_rate,
            td_rate=td_rate,
            turnover_rate=turnover_rate,
        ),
        adjusted=AdjustedMetrics(
            success_rate=adjusted_success,
            composite_score=score,
            low_sample=n < options.min_samples_per_bucket,
        ),
        top_players=_top_players(stats.players),
        representative_plays=_representative_plays(stats),
    )


def group_plays_by_key(
    plays: Sequence[PlayRecord],
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> dict[str, PlayEffectivenessSummary]:
    """Group plays by key and summarize each group.

    Returns a dict in first-occurrence order of each key.
    """
    groups: dict[str, list[PlayRecord]] = {}
    for play in plays:
        groups.setdefault(generate_play_key(play, resolvers, options), []).append(play)

    population = [
        y for y in (resolvers.yards(p) for p in plays)
        if not (isinstance(y, float) and math.isnan(y))
    ]

    summaries = {
        key: summarize_group(key, aggregate_raw_stats(group, resolvers, options), population, options)
        for key, group in groups.items()
    }
    logger.debug("Built %d play groups from %d plays", len(summaries), len(plays))
    return summaries


def rank_summaries(
    summaries: Iterable[PlayEffectivenessSummary],
) -> list[PlayEffectivenessSummary]:
    """Composite score desc, then sample size desc, then average yards desc."""
    return sorted(summaries, key=lambda s: s.rank_key, reverse=True)

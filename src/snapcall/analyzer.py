"""
Project: SnapCall
Author: Xingnan Zhu
File Name: analyzer.py
Description:
    Main analysis entry points.

    analyze_plays runs the whole pipeline in one pass:
      infer team → team filter → drop penalty-only plays → situation filter
      → group & rank → player leaderboard (situation set)
      → down/distance tables (team set, situation NOT applied)

    recommend_play runs the analysis and phrases the top-ranked play key
    as a one-line recommendation.
"""

from __future__ import annotations

import logging
from typing import Sequence

from snapcall.classification import down_distance_key
from snapcall.core.models import (
    DEFAULT_OPTIONS,
    AnalysisOptions,
    AnalysisReport,
    PlayEffectivenessSummary,
    Recommendation,
    ReportMeta,
    SituationQuery,
)
from snapcall.core.types import FieldResolvers, PlayRecord
from snapcall.filtering import filter_by_situation, filter_by_team, is_penalty_only
from snapcall.formatting import format_recommendation
from snapcall.grouping import group_plays_by_key, rank_summaries
from snapcall.players import calculate_player_stats

logger = logging.getLogger(__name__)

NO_RECOMMENDATION_MESSAGE = "No plays found for the specified situation."


def infer_team(plays: Sequence[PlayRecord], resolvers: FieldResolvers) -> str:
    """Most frequent offense team; ties go to the team seen first."""
    counts: dict[str, int] = {}
    for play in plays:
        team = resolvers.offense_team(play)
        counts[team] = counts.get(team, 0) + 1

    best, best_count = "", 0
    for team, count in counts.items():
        if count > best_count:
            best, best_count = team, count

    logger.debug("Inferred team %r from %d plays", best, len(plays))
    return best


def down_distance_tables(
    plays: Sequence[PlayRecord],
    resolvers: FieldResolvers,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> dict[str, list[PlayEffectivenessSummary]]:
    """Ranked play summaries for every down + distance band seen.

    Keys look like ``"1Medium"``.  Plays missing down or distance are skipped.
    """
    buckets: dict[str, list[PlayRecord]] = {}
    for play in plays:
        down = resolvers.down(play)
        distance = resolvers.distance(play)
        if down is None or distance is None:
            continue
        buckets.setdefault(down_distance_key(down, distance), []).append(play)

    return {
        key: rank_summaries(group_plays_by_key(bucket, resolvers, options).values())
        for key, bucket in buckets.items()
    }


def analyze_plays(
    plays: Sequence[PlayRecord],
    resolvers: FieldResolvers,
    situation: SituationQuery | None = None,
    options: AnalysisOptions | None = None,
) -> AnalysisReport:
    """Analyze plays for a situation and build the full report.

    Args:
        plays: Play records of any shape; never mutated.
        resolvers: Accessors for the fields of those records.
        situation: Situational filter.  None means "all situations".
        options: Analysis knobs.  None means DEFAULT_OPTIONS.

    Returns:
        AnalysisReport.  Empty or non-matching input yields an empty report
        with warnings rather than an exception.
    """
    situation = situation or SituationQuery()
    options = options or DEFAULT_OPTIONS
    warnings: list[str] = []

    team = options.team or infer_team(plays, resolvers)
    logger.info(
        "Analyzing %d plays for team %r, situation %s",
        len(plays), team, situation.describe(),
    )

    team_plays = filter_by_team(plays, resolvers, team)
    if not team_plays:
        warnings.append(f"No plays found for team: {team}")

    eligible = team_plays
    if options.drop_penalty_only:
        eligible = [p for p in team_plays if not is_penalty_only(p, resolvers)]

    situation_plays = filter_by_situation(eligible, resolvers, situation)
    if not situation_plays:
        warnings.append(f"No plays found matching situation: {situation.describe()}")

    ranked = rank_summaries(group_plays_by_key(situation_plays, resolvers, options).values())
    leaders = calculate_player_stats(situation_plays, resolvers, options)
    tables = down_distance_tables(team_plays, resolvers, options)

    for warning in warnings:
        logger.warning("%s", warning)
    logger.info(
        "Matched %d plays into %d play keys (%d players)",
        len(situation_plays), len(ranked), len(leaders),
    )

    return AnalysisReport(
        meta=ReportMeta(total_plays=len(situation_plays), team=team),
        situation=situation,
        ranked_plays=ranked,
        player_leaders=leaders,
        by_down_distance_tables=tables,
        warnings=warnings,
    )


def recommend_play(
    plays: Sequence[PlayRecord],
    resolvers: FieldResolvers,
    situation: SituationQuery | None = None,
    options: AnalysisOptions | None = None,
) -> Recommendation:
    """Recommend the top-ranked play key for a situation."""
    situation = situation or SituationQuery()
    report = analyze_plays(plays, resolvers, situation, options)
    best = report.best_play

    if best is None:
        return Recommendation(
            recommendation=None,
            message=NO_RECOMMENDATION_MESSAGE,
            warnings=list(report.warnings),
        )

    return Recommendation(
        recommendation=best,
        message=format_recommendation(situation, best),
        warnings=list(report.warnings),
    )

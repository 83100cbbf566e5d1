"""
Project: SnapCall
Author: Xingnan Zhu
File Name: formatting.py
Description:
    Human-readable rendering of analysis output: the one-line play
    recommendation and plain-text tables for ranked plays and players.
"""

from __future__ import annotations

import math
from typing import Sequence

from tabulate import tabulate

from snapcall.core.models import (
    AnalysisReport,
    PlayEffectivenessSummary,
    PlayerStatLine,
    SituationQuery,
)


def ordinal_suffix(num: int) -> str:
    """``1`` → ``"st"``, ``2`` → ``"nd"``, ``11`` → ``"th"``."""
    if 11 <= num % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")


def percent(rate: float) -> int:
    """Whole-number percentage, halves rounded up."""
    return math.floor(rate * 100 + 0.5)


def describe_situation(situation: SituationQuery) -> str:
    """``"1st & medium in the red zone"`` style description."""
    desc = ""
    if situation.down:
        desc += f"{situation.down}{ordinal_suffix(situation.down)} & "
    if situation.distance_band:
        desc += situation.distance_band.replace("_", "-", 1) + " "
    if situation.field_zone:
        desc += f"in the {situation.field_zone.replace('_', ' ', 1)}"
    return desc.strip()


def format_recommendation(situation: SituationQuery, summary: PlayEffectivenessSummary) -> str:
    return (
        f"On {describe_situation(situation)}, *{summary.key}* shows "
        f"{percent(summary.adjusted.success_rate)}% SR (n={summary.sample_size}), "
        f"{summary.raw.avg_yards:.1f} yds/play, "
        f"{percent(summary.raw.explosive_rate)}% explosive, "
        f"{percent(summary.raw.turnover_rate)}% TO."
    )


def format_ranked_table(
    summaries: Sequence[PlayEffectivenessSummary],
    limit: int | None = None,
) -> str:
    rows = []
    for i, s in enumerate(summaries[:limit], 1):
        rows.append([
            i,
            s.key,
            s.sample_size,
            f"{percent(s.adjusted.success_rate)}%",
            f"{s.raw.avg_yards:.1f}",
            f"{percent(s.raw.explosive_rate)}%",
            f"{percent(s.raw.turnover_rate)}%",
            f"{s.adjusted.composite_score:.3f}",
            "*" if s.adjusted.low_sample else "",
        ])
    return tabulate(
        rows,
        headers=["#", "Play", "N", "SR", "Yds", "Expl", "TO", "Score", "Low N"],
        tablefmt="simple",
        stralign="right",
    )


def format_player_table(lines: Sequence[PlayerStatLine], limit: int | None = None) -> str:
    rows = [
        [
            line.player,
            line.touches,
            f"{line.yards:g}",
            f"{percent(line.success_rate)}%",
            f"{line.avg_yards_per_touch:.1f}",
            line.explosives,
            line.touchdowns,
            line.turnovers,
        ]
        for line in lines[:limit]
    ]
    return tabulate(
        rows,
        headers=["Player", "Touches", "Yds", "SR", "Yds/Touch", "Expl", "TD", "TO"],
        tablefmt="simple",
        stralign="right",
    )


def format_report(report: AnalysisReport, limit: int | None = 10) -> str:
    """Multi-section text rendering of a full report."""
    sections = [
        f"Team: {report.meta.team}   Plays: {report.meta.total_plays}",
        format_ranked_table(report.ranked_plays, limit),
        format_player_table(report.player_leaders, limit),
    ]
    sections.extend(f"! {w}" for w in report.warnings)
    return "\n\n".join(sections)

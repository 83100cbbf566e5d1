"""
SnapCall: play-calling effectiveness analysis for football play-by-play logs.

Usage::

    from snapcall import (
        FieldResolvers, SituationQuery, AnalysisOptions,
        analyze_plays, recommend_play,
    )

    resolvers = FieldResolvers.for_mappings(play_id="id")
    report = analyze_plays(plays, resolvers, SituationQuery(down=3, distance_band="short"))
    print(recommend_play(plays, resolvers, SituationQuery(down=3)).message)
"""

from importlib.metadata import version
__version__ = version("snapcall")

# Core models
from snapcall.core.models import (
    DEFAULT_OPTIONS,
    DEFAULT_SMOOTHING,
    AdjustedMetrics,
    AnalysisOptions,
    AnalysisReport,
    PlayEffectivenessSummary,
    PlayerStatLine,
    PlayKeyParts,
    RawMetrics,
    Recommendation,
    ReportMeta,
    SituationQuery,
    SmoothingConfig,
)
from snapcall.core.types import DistanceBand, FieldResolvers, FieldZone

# Classification
from snapcall.classification import distance_band, down_distance_key, field_zone

# Filtering
from snapcall.filtering import filter_by_situation, filter_by_team, matches_situation, matches_team

# Metrics
from snapcall.metrics import (
    composite_score,
    is_explosive,
    is_success,
    smooth_success_rate,
    z_score,
)

# Grouping
from snapcall.grouping import generate_play_key, group_plays_by_key, rank_summaries

# Players
from snapcall.players import calculate_player_stats, normalize_player_name, player_leaders

# Analysis
from snapcall.analyzer import analyze_plays, recommend_play

# Text output
from snapcall.formatting import format_report

__all__ = [
    # Core
    "DEFAULT_OPTIONS",
    "DEFAULT_SMOOTHING",
    "AdjustedMetrics",
    "AnalysisOptions",
    "AnalysisReport",
    "DistanceBand",
    "FieldResolvers",
    "FieldZone",
    "PlayEffectivenessSummary",
    "PlayKeyParts",
    "PlayerStatLine",
    "RawMetrics",
    "Recommendation",
    "ReportMeta",
    "SituationQuery",
    "SmoothingConfig",
    # Classification
    "distance_band",
    "down_distance_key",
    "field_zone",
    # Filtering
    "filter_by_situation",
    "filter_by_team",
    "matches_situation",
    "matches_team",
    # Metrics
    "composite_score",
    "is_explosive",
    "is_success",
    "smooth_success_rate",
    "z_score",
    # Grouping
    "generate_play_key",
    "group_plays_by_key",
    "rank_summaries",
    # Players
    "calculate_player_stats",
    "normalize_player_name",
    "player_leaders",
    # Analysis
    "analyze_plays",
    "recommend_play",
    # Output
    "format_report",
]

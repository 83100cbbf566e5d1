"""
Core models and types shared across all SnapCall modules.
"""

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
from snapcall.core.types import DistanceBand, FieldResolvers, FieldZone, PlayRecord

__all__ = [
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
    "PlayRecord",
    "PlayerStatLine",
    "RawMetrics",
    "Recommendation",
    "ReportMeta",
    "SituationQuery",
    "SmoothingConfig",
]

"""
Project: SnapCall
Author: Xingnan Zhu
File Name: core/models.py
Description:
    Data models shared across all SnapCall modules.

    Inputs:  SituationQuery (what situation to look at) and AnalysisOptions
             (how to score it, including SmoothingConfig).
    Outputs: PlayEffectivenessSummary per play key, PlayerStatLine per
             player, and the AnalysisReport / Recommendation that bundle them.

    Every object here is built fresh by each analysis call; nothing is
    cached between calls.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping

from snapcall.core.types import DistanceBand, FieldZone

if TYPE_CHECKING:
    import pandas as pd


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    """``minSamplesPerBucket`` → ``min_samples_per_bucket``."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _normalized_keys(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    """Convert ``data`` keys to snake_case and reject keys ``cls`` lacks."""
    known = {f.name for f in fields(cls)}
    out = {_snake_case(k): v for k, v in data.items()}
    unknown = sorted(set(out) - known)
    if unknown:
        msg = f"Unknown {cls.__name__} field(s): {', '.join(unknown)}"
        raise ValueError(msg)
    return out


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SituationQuery:
    """Situational filter.  Unset fields impose no constraint.

    String fields match case-insensitively as substrings of the play's value.
    """

    down: int | None = None
    distance_band: DistanceBand | None = None
    field_zone: FieldZone | None = None
    formation: str | None = None
    play_family: str | None = None
    defensive_front: str | None = None
    is_penalty: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Only the fields that are set."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def describe(self) -> str:
        """Compact JSON form used in report warnings."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SituationQuery:
        return cls(**_normalized_keys(cls, data))


@dataclass(frozen=True)
class SmoothingConfig:
    """Empirical-Bayes prior used to shrink small-sample success rates."""

    enabled: bool = True
    prior_success_rate: float = 0.5
    weight: float = 5.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.prior_success_rate <= 1.0:
            msg = f"prior_success_rate must be within [0, 1], got {self.prior_success_rate!r}"
            raise ValueError(msg)
        if self.weight < 0:
            msg = f"Smoothing weight must be non-negative, got {self.weight!r}"
            raise ValueError(msg)


DEFAULT_SMOOTHING = SmoothingConfig()


@dataclass(frozen=True)
class PlayKeyParts:
    """The pieces a play key is rendered from.

    Missing formation / family arrive as the ``—`` placeholder.
    ``motion_tag`` is None unless motion participates in keys.
    """

    formation: str
    play_family: str
    motion_tag: str | None = None


KeyFormatter = Callable[[PlayKeyParts], str]


@dataclass(frozen=True)
class AnalysisOptions:
    """Knobs for one analysis run.

    ``team`` empty means "infer the most frequent offense team".
    ``key_format`` None means the default ``formation | family`` label.
    """

    team: str = ""
    min_samples_per_bucket: int = 6
    smoothing: SmoothingConfig = DEFAULT_SMOOTHING
    explosive_run_yds: float = 10
    explosive_pass_yds: float = 15
    drop_penalty_only: bool = True
    include_motion_in_key: bool = False
    key_format: KeyFormatter | None = None

    def __post_init__(self) -> None:
        if self.min_samples_per_bucket < 0:
            msg = f"min_samples_per_bucket must be non-negative, got {self.min_samples_per_bucket!r}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisOptions:
        """Merge a partial mapping over the defaults.

        Accepts snake_case or camelCase keys.  A nested ``smoothing``
        mapping is merged field by field over DEFAULT_SMOOTHING.
        """
        values = _normalized_keys(cls, data)
        smoothing = values.get("smoothing")
        if isinstance(smoothing, Mapping):
            values["smoothing"] = replace(
                DEFAULT_SMOOTHING, **_normalized_keys(SmoothingConfig, smoothing)
            )
        return replace(DEFAULT_OPTIONS, **values)


DEFAULT_OPTIONS = AnalysisOptions()


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawMetrics:
    """Plain per-group rates (counts / sample size)."""

    success_rate: float
    avg_yards: float
    explosive_rate: float
    td_rate: float
    turnover_rate: float


@dataclass(frozen=True)
class AdjustedMetrics:
    success_rate: float  # EB-smoothed
    composite_score: float  # used for ranking
    low_sample: bool


@dataclass(frozen=True)
class PlayEffectivenessSummary:
    """Effectiveness of one play key within the analyzed situation."""

    key: str
    sample_size: int
    raw: RawMetrics
    adjusted: AdjustedMetrics
    top_players: list[str] = field(default_factory=list)
    representative_plays: list[str] = field(default_factory=list)  # best by yards

    @property
    def rank_key(self) -> tuple[float, int, float]:
        """Key for sorting (higher is better).

        Composite score, then sample size, then average yards.
        """
        return (self.adjusted.composite_score, self.sample_size, self.raw.avg_yards)


@dataclass(frozen=True)
class PlayerStatLine:
    """Touch statistics for one player (name is the normalized form)."""

    player: str
    touches: int
    yards: float
    successes: int
    success_rate: float
    explosives: int
    touchdowns: int
    turnovers: int
    avg_yards_per_touch: float
    usage_by_play_family: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ReportMeta:
    total_plays: int
    team: str


@dataclass
class AnalysisReport:
    """Complete output of :func:`snapcall.analyzer.analyze_plays`."""

    meta: ReportMeta
    situation: SituationQuery
    ranked_plays: list[PlayEffectivenessSummary] = field(default_factory=list)
    player_leaders: list[PlayerStatLine] = field(default_factory=list)
    by_down_distance_tables: dict[str, list[PlayEffectivenessSummary]] = field(
        default_factory=dict
    )
    warnings: list[str] = field(default_factory=list)

    @property
    def best_play(self) -> PlayEffectivenessSummary | None:
        return self.ranked_plays[0] if self.ranked_plays else None

    def to_dict(self) -> dict[str, Any]:
        """Plain dict / list / scalar form for the display layer."""
        return asdict(self)

    def to_df(self) -> pd.DataFrame:
        """Convert the ranked plays to a DataFrame.

        Columns: rank, key, sample_size, success_rate, avg_yards,
                 explosive_rate, td_rate, turnover_rate,
                 adjusted_success_rate, composite_score, low_sample,
                 top_players, representative_plays
        """
        import pandas as _pd

        rows = []
        for i, summary in enumerate(self.ranked_plays, 1):
            rows.append({
                "rank": i,
                "key": summary.key,
                "sample_size": summary.sample_size,
                "success_rate": summary.raw.success_rate,
                "avg_yards": summary.raw.avg_yards,
                "explosive_rate": summary.raw.explosive_rate,
                "td_rate": summary.raw.td_rate,
                "turnover_rate": summary.raw.turnover_rate,
                "adjusted_success_rate": summary.adjusted.success_rate,
                "composite_score": summary.adjusted.composite_score,
                "low_sample": summary.adjusted.low_sample,
                "top_players": list(summary.top_players),
                "representative_plays": list(summary.representative_plays),
            })
        return _pd.DataFrame(rows)

    def players_to_df(self) -> pd.DataFrame:
        """Convert the player leaderboard to a DataFrame (one row per player)."""
        import pandas as _pd

        rows = [asdict(line) for line in self.player_leaders]
        return _pd.DataFrame(rows)


@dataclass(frozen=True)
class Recommendation:
    """Output of :func:`snapcall.analyzer.recommend_play`."""

    recommendation: PlayEffectivenessSummary | None
    message: str
    warnings: list[str] = field(default_factory=list)

"""
Project: SnapCall
Author: Xingnan Zhu
File Name: filtering.py
Description:
    Play filtering for situation-based analysis.

    Every predicate fails closed: a play that lacks the value a check needs
    is a non-match, never an "unknown = true".  String comparisons are
    case-insensitive substring containment, so "trips" matches
    "Trips Right" and a team query of "Eagles" matches "Central Eagles".
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from snapcall.classification import distance_band, field_zone
from snapcall.core.models import SituationQuery
from snapcall.core.types import FieldResolvers, PlayRecord

T = TypeVar("T")


def _contains(value: Any, needle: str) -> bool:
    """Case-insensitive substring test; absent or empty values never match."""
    if not value:
        return False
    return needle.lower() in str(value).lower()


def matches_situation(
    play: PlayRecord,
    resolvers: FieldResolvers,
    situation: SituationQuery,
) -> bool:
    """Check a play against every set field of the situation (logical AND)."""
    if situation.down is not None:
        if resolvers.down(play) != situation.down:
            return False

    if situation.distance_band is not None:
        distance = resolvers.distance(play)
        if distance is None or distance_band(distance) != situation.distance_band:
            return False

    if situation.field_zone is not None:
        start = resolvers.yard_line_start(play)
        distance = resolvers.distance(play)
        if start is None or distance is None:
            return False
        if field_zone(start, distance) != situation.field_zone:
            return False

    if situation.formation is not None:
        if not _contains(resolvers.value("formation", play), situation.formation):
            return False

    if situation.play_family is not None:
        if not _contains(resolvers.value("play_family", play), situation.play_family):
            return False

    if situation.defensive_front is not None:
        if not _contains(resolvers.value("defensive_front", play), situation.defensive_front):
            return False

    if situation.is_penalty is not None:
        if resolvers.flag("is_penalty", play) != situation.is_penalty:
            return False

    return True


def matches_team(play: PlayRecord, resolvers: FieldResolvers, team: str) -> bool:
    """True if ``team`` is a case-insensitive substring of the offense team.

    Short team names can over-match; callers supply a specific enough name.
    """
    return team.lower() in resolvers.offense_team(play).lower()


def is_penalty_only(play: PlayRecord, resolvers: FieldResolvers) -> bool:
    """A flagged penalty with exactly zero yards gained (absent yards count as 0)."""
    return resolvers.flag("is_penalty", play) and resolvers.yards(play) == 0


def filter_by_situation(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    situation: SituationQuery,
) -> list[PlayRecord]:
    return [p for p in plays if matches_situation(p, resolvers, situation)]


def filter_by_team(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    team: str,
) -> list[PlayRecord]:
    return [p for p in plays if matches_team(p, resolvers, team)]


# ---------------------------------------------------------------------------
# Ad hoc slicing
# ---------------------------------------------------------------------------


def filter_by_game(
    plays: Iterable[PlayRecord], resolvers: FieldResolvers, game_id: Any
) -> list[PlayRecord]:
    return [p for p in plays if resolvers.game_id(p) == game_id]


def filter_by_quarter(
    plays: Iterable[PlayRecord], resolvers: FieldResolvers, quarter: int
) -> list[PlayRecord]:
    """Plays in ``quarter``; always empty when the source has no quarter field."""
    return [p for p in plays if resolvers.value("quarter", p) == quarter]


def filter_by_down(
    plays: Iterable[PlayRecord], resolvers: FieldResolvers, down: int
) -> list[PlayRecord]:
    return [p for p in plays if resolvers.down(p) == down]


def filter_by_distance_range(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    min_distance: float,
    max_distance: float,
) -> list[PlayRecord]:
    """Plays whose yards-to-gain lies in ``[min_distance, max_distance]``."""
    out = []
    for play in plays:
        distance = resolvers.distance(play)
        if distance is not None and min_distance <= distance <= max_distance:
            out.append(play)
    return out


def filter_by_field_position(
    plays: Iterable[PlayRecord],
    resolvers: FieldResolvers,
    min_yard_line: float,
    max_yard_line: float,
) -> list[PlayRecord]:
    """Plays starting between ``min_yard_line`` and ``max_yard_line`` inclusive."""
    out = []
    for play in plays:
        start = resolvers.yard_line_start(play)
        if start is not None and min_yard_line <= start <= max_yard_line:
            out.append(play)
    return out


def filter_by_play_type(
    plays: Iterable[PlayRecord], resolvers: FieldResolvers, play_type: str
) -> list[PlayRecord]:
    """Plays whose family contains ``play_type`` (e.g. "run" matches "inside_run")."""
    return [p for p in plays if _contains(resolvers.value("play_family", p), play_type)]


# ---------------------------------------------------------------------------
# Field discovery
# ---------------------------------------------------------------------------


def unique_field_values(
    plays: Iterable[PlayRecord],
    extractor: Callable[[PlayRecord], T | None],
) -> list[T]:
    """Distinct non-None values in first-seen order."""
    seen: dict[T, None] = {}
    for play in plays:
        value = extractor(play)
        if value is not None:
            seen.setdefault(value, None)
    return list(seen)


def _available(plays: Iterable[PlayRecord], resolvers: FieldResolvers, name: str) -> list[str]:
    values = unique_field_values(plays, lambda p: resolvers.value(name, p))
    return sorted(v for v in values if isinstance(v, str))


def available_formations(plays: Iterable[PlayRecord], resolvers: FieldResolvers) -> list[str]:
    return _available(plays, resolvers, "formation")


def available_play_families(plays: Iterable[PlayRecord], resolvers: FieldResolvers) -> list[str]:
    return _available(plays, resolvers, "play_family")


def available_defensive_fronts(plays: Iterable[PlayRecord], resolvers: FieldResolvers) -> list[str]:
    return _available(plays, resolvers, "defensive_front")

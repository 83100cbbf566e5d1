"""
Project: SnapCall
Author: Xingnan Zhu
File Name: core/types.py
Description:
    Field resolver set and type aliases for the SnapCall data abstraction layer.
    Play records are opaque: the core never inspects them directly.  Every
    semantic field is read through a FieldResolvers instance supplied by the
    host application, so the same pipeline works for database rows, parsed
    spreadsheet dicts or any custom object.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Literal

PlayRecord = Any

DistanceBand = Literal["short", "medium", "long", "very_long"]
FieldZone = Literal["own_1_20", "own_21_50", "opp_49_21", "red_zone", "goal_to_go"]

Resolver = Callable[[PlayRecord], Any]

MANDATORY_FIELDS: tuple[str, ...] = (
    "game_id",
    "offense_team",
    "defense_team",
    "down",
    "distance",
    "yard_line_start",
)


@dataclass(frozen=True)
class FieldResolvers:
    """Accessor functions that extract one semantic value from a play record.

    The first six resolvers are mandatory.  The rest are optional
    capabilities: leaving one as ``None`` means the field is never present
    in this data source.  Use :meth:`value` to read any field with an
    explicit ``None`` for "not present".

    Field positions are measured 1–99 toward the opponent's goal line (100).
    """

    game_id: Resolver
    offense_team: Resolver
    defense_team: Resolver
    down: Resolver
    distance: Resolver  # yards to gain
    yard_line_start: Resolver

    quarter: Resolver | None = None
    yard_line_end: Resolver | None = None
    yards_gained: Resolver | None = None
    play_family: Resolver | None = None  # e.g. "outside_run", "slant"
    formation: Resolver | None = None  # e.g. "Trips Right"
    motion_tag: Resolver | None = None
    defensive_front: Resolver | None = None  # e.g. "6-2"
    passer: Resolver | None = None
    primary_ball_carrier: Resolver | None = None
    targeted_receiver: Resolver | None = None
    is_touchdown: Resolver | None = None
    is_turnover: Resolver | None = None
    is_penalty: Resolver | None = None
    penalty_yards: Resolver | None = None
    notes: Resolver | None = None
    play_id: Resolver | None = None

    def __post_init__(self) -> None:
        missing = [name for name in MANDATORY_FIELDS if not callable(getattr(self, name))]
        if missing:
            msg = f"Mandatory resolver(s) not callable: {', '.join(missing)}"
            raise TypeError(msg)

    def has(self, name: str) -> bool:
        """True if the data source provides ``name`` at all."""
        return getattr(self, name) is not None

    def value(self, name: str, play: PlayRecord) -> Any | None:
        """Resolve ``name`` for ``play``; ``None`` when the capability is absent."""
        resolver = getattr(self, name)
        if resolver is None:
            return None
        return resolver(play)

    def flag(self, name: str, play: PlayRecord) -> bool:
        """Resolve an optional boolean field, treating absence as False."""
        return bool(self.value(name, play))

    def yards(self, play: PlayRecord) -> float:
        """Yards gained on the play, 0 when not recorded."""
        gained = self.value("yards_gained", play)
        return 0 if gained is None else gained

    @classmethod
    def for_mappings(cls, **keys: str) -> FieldResolvers:
        """Build resolvers for dict-like records.

        Every field reads the record key of the same name unless remapped,
        e.g. ``FieldResolvers.for_mappings(play_id="id")``.  A missing key
        reads as ``None``.
        """
        names = [f.name for f in fields(cls)]
        unknown = sorted(set(keys) - set(names))
        if unknown:
            msg = f"Unknown resolver field(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return cls(**{name: _item_getter(keys.get(name, name)) for name in names})


def _item_getter(key: str) -> Resolver:
    return lambda play: play.get(key)

"""
Project: SnapCall
Author: Xingnan Zhu
File Name: classification.py
Description:
    Distance band and field zone classification.
    Offense perspective: field position runs 1–99 toward the opponent's
    goal line at 100.

    Distance bands (youth football conventions):
      short ≤ 2 < medium ≤ 6 < long ≤ 9 < very_long

    Field zones (first match wins):
      goal_to_go   distance ≤ 10 and position ≥ 90
      red_zone     position ≥ 80
      opp_49_21    position ≥ 51
      own_21_50    position ≥ 21
      own_1_20     everything else

    Every other module classifies through these functions.
"""

from __future__ import annotations

from snapcall.core.types import DistanceBand, FieldZone

DISTANCE_BANDS: tuple[DistanceBand, ...] = ("short", "medium", "long", "very_long")
FIELD_ZONES: tuple[FieldZone, ...] = (
    "own_1_20",
    "own_21_50",
    "opp_49_21",
    "red_zone",
    "goal_to_go",
)

SHORT_MAX = 2
MEDIUM_MAX = 6
LONG_MAX = 9

GOAL_TO_GO_MAX_DISTANCE = 10
GOAL_TO_GO_START = 90
RED_ZONE_START = 80
OPP_TERRITORY_START = 51
OWN_21_START = 21


def distance_band(distance: float) -> DistanceBand:
    """Classify yards-to-gain into a distance band."""
    if distance <= SHORT_MAX:
        return "short"
    if distance <= MEDIUM_MAX:
        return "medium"
    if distance <= LONG_MAX:
        return "long"
    return "very_long"


def field_zone(yard_line_start: float, distance: float) -> FieldZone:
    """Classify a starting field position into a zone.

    Goal-to-go is checked before the red zone, so a 1st-and-6 from the
    92 is ``goal_to_go`` even though it is also inside the 80.
    """
    if distance <= GOAL_TO_GO_MAX_DISTANCE and yard_line_start >= GOAL_TO_GO_START:
        return "goal_to_go"
    if yard_line_start >= RED_ZONE_START:
        return "red_zone"
    if yard_line_start >= OPP_TERRITORY_START:
        return "opp_49_21"
    if yard_line_start >= OWN_21_START:
        return "own_21_50"
    return "own_1_20"


def matches_distance_band(distance: float, target: DistanceBand) -> bool:
    return distance_band(distance) == target


def matches_field_zone(yard_line_start: float, distance: float, target: FieldZone) -> bool:
    return field_zone(yard_line_start, distance) == target


def down_distance_key(down: int, distance: float) -> str:
    """Cross-tab key such as ``"1Medium"`` or ``"3Very_long"``."""
    band = distance_band(distance)
    return f"{down}{band[0].upper()}{band[1:]}"

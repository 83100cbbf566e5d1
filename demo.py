"""SnapCall Demo: rank play calls from a small hand-charted game.

Usage:
    uv run python demo.py
"""

import logging

from snapcall import FieldResolvers, SituationQuery, analyze_plays, format_report, recommend_play


def _play(play_id, down, distance, start, yards, family, formation, **extra):
    play = {
        "id": play_id,
        "game_id": "game1",
        "offense_team": "Team A",
        "defense_team": "Team B",
        "down": down,
        "distance": distance,
        "yard_line_start": start,
        "yards_gained": yards,
        "play_family": family,
        "formation": formation,
    }
    play.update(extra)
    return play


SAMPLE_PLAYS = [
    _play("1", 1, 5, 25, 5, "inside_run", "I-Form", primary_ball_carrier="John Smith"),
    _play("2", 1, 5, 30, 12, "outside_run", "I-Form", primary_ball_carrier="Mike Johnson"),
    _play("3", 1, 5, 35, 8, "slant", "Trips Right", passer="Tom Wilson", targeted_receiver="Chris Davis"),
    _play("4", 1, 5, 40, 15, "slant", "Trips Right", passer="Tom Wilson", targeted_receiver="Chris Davis"),
    _play("5", 2, 2, 30, 3, "inside_run", "I-Form", primary_ball_carrier="John Smith"),
    _play("6", 2, 2, 33, 6, "outside_run", "I-Form", primary_ball_carrier="Mike Johnson"),
    _play("7", 3, 8, 30, 4, "inside_run", "I-Form", primary_ball_carrier="John Smith"),
    _play("8", 3, 8, 33, 10, "outside_run", "I-Form", primary_ball_carrier="Mike Johnson"),
    _play("9", 1, 5, 85, 10, "inside_run", "I-Form", primary_ball_carrier="John Smith", is_touchdown=True),
    _play("10", 2, 2, 88, 5, "outside_run", "I-Form", primary_ball_carrier="Mike Johnson", is_touchdown=True),
]


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    resolvers = FieldResolvers.for_mappings(play_id="id")

    situation = SituationQuery(down=1, distance_band="medium")
    report = analyze_plays(SAMPLE_PLAYS, resolvers, situation)

    print("=" * 60)
    print(f"SITUATION {situation.describe()}")
    print("=" * 60)
    print(format_report(report, limit=5))

    print("\nDown & distance tables:")
    for key, table in report.by_down_distance_tables.items():
        best = table[0]
        print(f"  {key:<12} {best.key} (score {best.adjusted.composite_score:.3f}, n={best.sample_size})")

    print()
    for query in (situation, SituationQuery(down=3, distance_band="long"), SituationQuery(field_zone="goal_to_go")):
        print(recommend_play(SAMPLE_PLAYS, resolvers, query).message)


if __name__ == "__main__":
    main()

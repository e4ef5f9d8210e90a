"""
Drink tracker CLI demo. Run from project root: python -m drink_tracker
Creates a sample session, prints current BAC, sober time and curve, and
optionally saves a graph.
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta

from drink_tracker.catalog import drink_from_preset
from drink_tracker.config import DEFAULT_SEX, DEFAULT_WEIGHT_KG, LOG_LEVEL
from drink_tracker.drinks import UserProfile
from drink_tracker.graph import save_bac_graph
from drink_tracker.session import Session
from drink_tracker.status import bac_status, format_permille, time_until_sober_text


def main(argv=None):
    parser = argparse.ArgumentParser(description="Drink tracker: log drinks and view BAC over time")
    parser.add_argument("--weight", type=float, default=DEFAULT_WEIGHT_KG, help="Body weight (kg)")
    parser.add_argument("--female", action="store_true", default=DEFAULT_SEX == "female", help="Female")
    parser.add_argument("--graph", type=str, metavar="FILE", help="Save BAC graph to FILE (e.g. bac_graph.png)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default from DRINK_TRACKER_LOG_LEVEL)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    now = datetime.now()
    session = Session(UserProfile(sex="female" if args.female else "male", weight_kg=args.weight))
    session.add_drink(drink_from_preset("beer-regular", now - timedelta(hours=2)))
    session.add_drink(drink_from_preset("beer-regular", now - timedelta(hours=2)))
    session.add_drink(drink_from_preset("wine", now - timedelta(hours=1)))
    print("Demo session: 2 beers 2h ago, 1 glass of wine 1h ago")

    bac = session.bac_now(now)
    sober_at = session.sober_time(now)
    print(f"Weight: {args.weight} kg, units: {session.total_units:.1f}")
    print(f"BAC now: {format_permille(bac)} ({bac_status(bac)['title']})")
    if sober_at is not None:
        print(f"Sober at {sober_at:%H:%M} ({time_until_sober_text(sober_at, now)})")

    curve = session.series(now)
    print(f"Curve points: {len(curve)}")

    if args.graph:
        try:
            path = save_bac_graph(curve, output_path=args.graph, sober_at=sober_at)
            print(f"Graph saved: {path}")
        except ImportError:
            print("matplotlib not installed. pip install matplotlib", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)

#!/usr/bin/env python3
"""
Cascade report from the command line.

Builds the dependency graph from the configured reference data and prints
the blast radius of a disruption at one node.

Usage:
    python scripts/run_cascade.py cable:marea
    python scripts/run_cascade.py cable:seamewe6 --disruption 0.5
    python scripts/run_cascade.py --stats
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from infracascade.engine import get_cascade_context  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Simulate an infrastructure disruption")
    parser.add_argument("source_id", nargs="?", help="Namespaced node id, e.g. cable:marea")
    parser.add_argument("--disruption", type=float, default=1.0, help="Disruption level (0..1)")
    parser.add_argument("--stats", action="store_true", help="Print graph statistics and exit")
    args = parser.parse_args()

    context = get_cascade_context()

    if args.stats or not args.source_id:
        stats = context.graph_stats()
        for key, value in stats.model_dump().items():
            print(f"  {key:<12} {value}")
        return

    result = context.simulate_cascade(args.source_id, args.disruption)
    if result is None:
        print(f"Node {args.source_id} not found")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"Disruption of {result.source.name} at {args.disruption:.0%}")
    print("=" * 60)

    print(f"\nCountries affected ({len(result.countries_affected)}):")
    for country in result.countries_affected:
        print(
            f"  {country.impact_level.value:<9} {country.country_name:<24} "
            f"capacity {country.affected_capacity:.2f}"
        )

    if result.redundancies:
        print("\nAlternative cables:")
        for alt in result.redundancies:
            print(f"  {alt.name:<30} avg share {alt.capacity_share:.2f}")


if __name__ == "__main__":
    main()

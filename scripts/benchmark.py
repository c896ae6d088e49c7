#!/usr/bin/env python
"""
Time prim3d Ray/Plane queries over a random scene.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --count 5000 --iterations 10
    python scripts/benchmark.py --seed 42 --only intersect_box intersect_sphere
"""

import argparse
import sys
from pathlib import Path

# Add project paths for development
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from prim3d.profiling import print_benchmark_result, run_benchmark


def main():
    parser = argparse.ArgumentParser(description="Benchmark prim3d ray and plane queries")
    parser.add_argument('--count', type=int, default=1000,
                        help="Calls per query per iteration (default: 1000)")
    parser.add_argument('--iterations', '-n', type=int, default=3,
                        help="Number of timed iterations (default: 3)")
    parser.add_argument('--seed', type=int, default=0,
                        help="Random seed for the scene (default: 0)")
    parser.add_argument('--only', nargs='+', metavar='QUERY',
                        help="Run only the named queries")
    args = parser.parse_args()

    try:
        result = run_benchmark(count=args.count, iterations=args.iterations,
                               seed=args.seed, only=args.only)
    except ValueError as e:
        parser.error(str(e))

    print_benchmark_result(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())

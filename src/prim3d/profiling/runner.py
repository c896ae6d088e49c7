"""
Benchmarking utilities for prim3d queries.

This module times each Ray/Plane query over a reproducible random scene
and reports per-query statistics.

Usage:
    from prim3d.profiling import run_benchmark, print_benchmark_result

    result = run_benchmark(count=1000, iterations=5, seed=0)
    print(result.queries['intersect_box'].median_ms)
    print_benchmark_result(result)
"""

import os
import sys
import statistics
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from prim3d.mathutils.vec3 import Vec3
from prim3d.mathutils.prim_math import normal_matrix, rot_matrix, mat_mul, translate_matrix
from prim3d.mathutils.prim_plane import Plane
from prim3d.mathutils.prim_ray import Ray
from prim3d.mathutils.prim_shapes import Box3, Line3, Sphere
from .profile import enable_profiling, get_profile_results, is_profiling_enabled, perf_marker, reset_profile


# =============================================================================
# Terminal Color Support
# =============================================================================

def supports_color() -> bool:
    """Check if terminal supports color output."""
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    return sys.platform != 'win32'


if supports_color():
    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[91m"
else:
    RESET = DIM = BOLD = GREEN = YELLOW = RED = ""


def format_time(ms: float) -> str:
    """Format milliseconds for human-readable display."""
    if ms >= 1000:
        return f"{ms/1000:.2f}s"
    elif ms >= 1:
        return f"{ms:.2f}ms"
    else:
        return f"{ms*1000:.1f}µs"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class QueryTiming:
    """Aggregated timings for one query across iterations."""
    name: str
    calls: int
    hits: int
    all_ms: List[float] = field(default_factory=list)

    @property
    def median_ms(self) -> float:
        return statistics.median(self.all_ms) if self.all_ms else 0.0

    @property
    def mean_ms(self) -> float:
        return statistics.mean(self.all_ms) if self.all_ms else 0.0

    @property
    def min_ms(self) -> float:
        return min(self.all_ms) if self.all_ms else 0.0

    @property
    def max_ms(self) -> float:
        return max(self.all_ms) if self.all_ms else 0.0

    @property
    def per_call_us(self) -> float:
        return self.median_ms * 1000 / self.calls if self.calls else 0.0


@dataclass
class BenchmarkResult:
    """Result of run_benchmark()."""
    count: int
    iterations: int
    seed: int
    queries: Dict[str, QueryTiming] = field(default_factory=dict)


# =============================================================================
# Query Suite
# =============================================================================

def _unit_vectors(rng: np.random.Generator, count: int) -> np.ndarray:
    v = rng.normal(size=(count, 3))
    return v / np.linalg.norm(v, axis=1, keepdims=True)


def build_query_suite(count: int, seed: int = 0) -> List[Tuple[str, Callable[[], int]]]:
    """
    Build named query loops over a random scene.

    Each entry is ``(name, run)`` where ``run()`` performs ``count`` calls
    of one query and returns the number of hits (non-None / True results).
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")

    rng = np.random.default_rng(seed)
    origins = rng.uniform(-10.0, 10.0, size=(count, 3))
    directions = _unit_vectors(rng, count)
    rays = [Ray(o, d) for o, d in zip(origins, directions)]

    points = rng.uniform(-10.0, 10.0, size=(count, 3))
    seg_ends = rng.uniform(-10.0, 10.0, size=(count, 2, 3))
    centers = rng.uniform(-10.0, 10.0, size=(count, 3))
    radii = rng.uniform(0.5, 3.0, size=count)
    spheres = [Sphere(c, r) for c, r in zip(centers, radii)]
    half_sizes = rng.uniform(0.5, 3.0, size=(count, 3))
    boxes = [Box3(c - h, c + h) for c, h in zip(centers, half_sizes)]
    triangles = rng.uniform(-10.0, 10.0, size=(count, 3, 3))
    planes = [Plane().set_from_normal_and_coplanar_point(n, p)
              for n, p in zip(_unit_vectors(rng, count), points)]
    lines = [Line3(s, e) for s, e in seg_ends]
    matrix = mat_mul(rot_matrix(30.0, 45.0, 60.0), translate_matrix(1.0, 2.0, 3.0))
    n_matrix = normal_matrix(matrix)
    target = Vec3()

    def distance_sq_to_point():
        for ray, p in zip(rays, points):
            ray.distance_sq_to_point(p)
        return count

    def distance_sq_to_segment():
        for ray, (v0, v1) in zip(rays, seg_ends):
            ray.distance_sq_to_segment(v0, v1)
        return count

    def intersect_sphere():
        return sum(ray.intersect_sphere(s, target) is not None for ray, s in zip(rays, spheres))

    def intersect_plane():
        return sum(ray.intersect_plane(p, target) is not None for ray, p in zip(rays, planes))

    def intersect_box():
        return sum(ray.intersect_box(b, target) is not None for ray, b in zip(rays, boxes))

    def intersect_triangle():
        return sum(ray.intersect_triangle(t[0], t[1], t[2], False, target) is not None
                   for ray, t in zip(rays, triangles))

    def plane_intersect_line():
        return sum(p.intersect_line(line, target) is not None for p, line in zip(planes, lines))

    def plane_apply_matrix4():
        for p in planes:
            p.clone().apply_matrix4(matrix, n_matrix)
        return count

    return [
        ('distance_sq_to_point', distance_sq_to_point),
        ('distance_sq_to_segment', distance_sq_to_segment),
        ('intersect_sphere', intersect_sphere),
        ('intersect_plane', intersect_plane),
        ('intersect_box', intersect_box),
        ('intersect_triangle', intersect_triangle),
        ('plane_intersect_line', plane_intersect_line),
        ('plane_apply_matrix4', plane_apply_matrix4),
    ]


# =============================================================================
# Running
# =============================================================================

def run_benchmark(count: int = 1000, iterations: int = 3, seed: int = 0,
                  only: Optional[List[str]] = None) -> BenchmarkResult:
    """
    Time every query in the suite.

    Args:
        count: Calls per query per iteration.
        iterations: Number of timed iterations.
        seed: Seed for the random scene.
        only: Optional list of query names to run.

    Returns:
        BenchmarkResult with one QueryTiming per query.
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")

    suite = build_query_suite(count, seed)
    if only:
        unknown = set(only) - {name for name, _ in suite}
        if unknown:
            raise ValueError(f"Unknown query name(s): {', '.join(sorted(unknown))}")
        suite = [(name, run) for name, run in suite if name in only]

    result = BenchmarkResult(count=count, iterations=iterations, seed=seed)
    was_enabled = is_profiling_enabled()
    enable_profiling(True)
    try:
        for _ in range(iterations):
            reset_profile()
            hits = {}
            for name, run in suite:
                with perf_marker(name):
                    hits[name] = run()

            markers = get_profile_results()
            for name, _ in suite:
                timing = result.queries.setdefault(
                    name, QueryTiming(name=name, calls=count, hits=hits[name]))
                timing.all_ms.append(markers.get(name, {}).get('total_ms', 0.0))
    finally:
        enable_profiling(was_enabled)
        reset_profile()

    return result


def print_benchmark_result(result: BenchmarkResult) -> None:
    """Print a per-query timing table."""
    print()
    print("=" * 70)
    print(f"{BOLD}PRIM3D QUERY BENCHMARK{RESET}")
    print("=" * 70)
    print(f"  Calls/query: {result.count}")
    print(f"  Iterations:  {result.iterations}")
    print(f"  Seed:        {result.seed}")
    print()
    print(f"  {'query':<26}{'median':>12}{'per call':>12}{'hits':>10}")
    print("─" * 70)
    for timing in result.queries.values():
        print(f"  {timing.name:<26}{format_time(timing.median_ms):>12}"
              f"{DIM}{format_time(timing.per_call_us / 1000):>12}{RESET}"
              f"{timing.hits:>10}")
    print()

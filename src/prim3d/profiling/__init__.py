"""
prim3d Profiling Package

This package provides profiling and benchmarking utilities for prim3d:

- profile: Lightweight timing markers (perf_marker context manager)
- runner: Query benchmarking (run_benchmark, QueryTiming, BenchmarkResult)

Quick usage:
    from prim3d.profiling import perf_marker, enable_profiling

    enable_profiling()

    with perf_marker("my_section"):
        ...

    # For benchmarking:
    from prim3d.profiling import run_benchmark
    result = run_benchmark(count=1000, iterations=3)
"""

# Re-export from profile module
from .profile import (
    enable_profiling,
    is_profiling_enabled,
    reset_profile,
    get_profile_results,
    perf_marker,
    _PROFILING_COMPILED_OUT,
)

# Re-export from runner module
from .runner import (
    QueryTiming,
    BenchmarkResult,
    build_query_suite,
    run_benchmark,
    print_benchmark_result,
    format_time,
)

__all__ = [
    # Profile markers
    'enable_profiling',
    'is_profiling_enabled',
    'reset_profile',
    'get_profile_results',
    'perf_marker',
    '_PROFILING_COMPILED_OUT',
    # Benchmark utilities
    'QueryTiming',
    'BenchmarkResult',
    'build_query_suite',
    'run_benchmark',
    'print_benchmark_result',
    'format_time',
]

"""
Tests for the prim3d.profiling profile module.
"""
import os
import subprocess
import sys
from pathlib import Path

import pytest

from prim3d.profiling import _PROFILING_COMPILED_OUT

SRC_PATH = str(Path(__file__).resolve().parent.parent.parent / "src")


def _run_python(code, *flags, extra_env=None):
    env = os.environ.copy()
    env["PYTHONPATH"] = SRC_PATH + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("PRIM3D_NO_PROFILING", None)
    if extra_env:
        env.update(extra_env)
    return subprocess.run([sys.executable, *flags, "-c", code],
                          capture_output=True, text=True, env=env)


@pytest.fixture
def profiling_on():
    from prim3d.profiling import enable_profiling, reset_profile
    reset_profile()
    enable_profiling(True)
    yield
    enable_profiling(False)
    reset_profile()


class TestProfilingCompiledOut:
    """Tests for the zero-overhead compile-out feature."""

    def test_normal_mode_not_compiled_out(self):
        """Without -O or the env var, profiling should NOT be compiled out."""
        result = _run_python("from prim3d.profiling import _PROFILING_COMPILED_OUT; "
                             "print(_PROFILING_COMPILED_OUT)")
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "False" in result.stdout

    def test_optimized_mode_compiled_out(self):
        """When running with python -O, profiling should be compiled out."""
        result = _run_python("from prim3d.profiling import _PROFILING_COMPILED_OUT; "
                             "print(_PROFILING_COMPILED_OUT)", "-O")
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "True" in result.stdout

    def test_env_var_compiles_out(self):
        """When PRIM3D_NO_PROFILING=1, profiling should be compiled out."""
        result = _run_python("from prim3d.profiling import _PROFILING_COMPILED_OUT; "
                             "print(_PROFILING_COMPILED_OUT)",
                             extra_env={"PRIM3D_NO_PROFILING": "1"})
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "True" in result.stdout

    def test_compiled_out_mode_has_noop_functions(self):
        """When compiled out, all functions should be no-ops that don't error."""
        code = """
from prim3d.profiling import (
    enable_profiling, is_profiling_enabled, reset_profile, get_profile_results, perf_marker
)

enable_profiling()
assert not is_profiling_enabled()
reset_profile()

with perf_marker("test"):
    pass

assert perf_marker("a") is perf_marker("b")
assert get_profile_results() == {}

print("OK")
"""
        result = _run_python(code, extra_env={"PRIM3D_NO_PROFILING": "1"})
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "OK" in result.stdout


@pytest.mark.skipif(_PROFILING_COMPILED_OUT, reason="profiling compiled out")
class TestProfilingFunctionality:
    """Tests for actual profiling functionality."""

    def test_disabled_by_default_records_nothing(self):
        """Markers record nothing until enable_profiling() is called."""
        from prim3d.profiling import is_profiling_enabled, reset_profile, perf_marker, get_profile_results

        reset_profile()
        assert not is_profiling_enabled()

        with perf_marker("idle_marker"):
            pass

        assert get_profile_results() == {}

    def test_perf_marker_records_timing(self, profiling_on):
        """Test that perf_marker records timing data."""
        from prim3d.profiling import perf_marker, get_profile_results
        import time

        with perf_marker("test_marker"):
            time.sleep(0.01)

        results = get_profile_results()

        assert "test_marker" in results
        assert results["test_marker"]["count"] == 1
        assert results["test_marker"]["total_ms"] >= 5

    def test_results_report_all_stats(self, profiling_on):
        """Each marker reports count, totals and extremes in milliseconds."""
        from prim3d.profiling import perf_marker, get_profile_results

        for _ in range(3):
            with perf_marker("stats_marker"):
                pass

        stats = get_profile_results()["stats_marker"]
        assert set(stats) == {'count', 'total_ms', 'avg_ms', 'min_ms', 'max_ms', 'parents'}
        assert stats['count'] == 3
        assert stats['min_ms'] <= stats['avg_ms'] <= stats['max_ms']
        assert stats['parents'] == {}

    def test_nested_markers_track_hierarchy(self, profiling_on):
        """Test that nested markers track parent-child relationships."""
        from prim3d.profiling import perf_marker, get_profile_results

        with perf_marker("outer"):
            with perf_marker("inner"):
                pass

        results = get_profile_results()

        assert "outer" in results
        assert "inner" in results
        assert results["inner"]["parents"].get("outer", 0) == 1

    def test_multiple_calls_accumulate(self, profiling_on):
        """Test that multiple calls to same marker accumulate stats."""
        from prim3d.profiling import perf_marker, get_profile_results

        for _ in range(5):
            with perf_marker("repeated"):
                pass

        assert get_profile_results()["repeated"]["count"] == 5

    def test_reset_clears_data(self, profiling_on):
        """Test that reset_profile clears all data."""
        from prim3d.profiling import reset_profile, perf_marker, get_profile_results

        with perf_marker("before_reset"):
            pass

        assert "before_reset" in get_profile_results()

        reset_profile()

        assert get_profile_results() == {}

    def test_disable_drops_open_marker(self, profiling_on):
        """A marker still open when recording stops is not recorded."""
        from prim3d.profiling import enable_profiling, perf_marker, get_profile_results

        with perf_marker("interrupted"):
            enable_profiling(False)
            enable_profiling(True)

        assert "interrupted" not in get_profile_results()

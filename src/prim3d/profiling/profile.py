"""
Timing markers for prim3d query code.

Usage:
    from prim3d.profiling import enable_profiling, perf_marker, get_profile_results

    enable_profiling()

    with perf_marker("intersect_box"):
        for ray in rays:
            ray.intersect_box(box)

    results = get_profile_results()
    # {'intersect_box': {'count': 1, 'total_ms': 3.1, 'avg_ms': 3.1, ...}}

    reset_profile()

A marker records nothing until enable_profiling() is called, so a marker
left around library code costs one flag check per entry.

Compiled-out mode:
    When PRIM3D_NO_PROFILING=1 is set, or Python runs with -O, the
    recorder is replaced at import time by one whose markers are a shared
    no-op context manager. Changing the switch requires a new process.
"""

import os
import time
from typing import Dict, Any, List, Tuple

_PROFILING_COMPILED_OUT = (
    os.environ.get('PRIM3D_NO_PROFILING', '').lower() in ('1', 'true', 'yes')
    or not __debug__
)

_perf = time.perf_counter


class _NullMarker:
    __slots__ = ()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


class _NullRecorder:
    """Recorder used when profiling is compiled out."""

    enabled = False

    def __init__(self):
        self._marker = _NullMarker()

    def set_enabled(self, enabled: bool) -> None:
        pass

    def clear(self) -> None:
        pass

    def results(self) -> Dict[str, Dict[str, Any]]:
        return {}

    def marker(self, name: str):
        return self._marker


class _MarkerStats:
    __slots__ = ('count', 'total', 'low', 'high', 'parents')

    def __init__(self):
        self.count = 0
        self.total = 0.0
        self.low = float('inf')
        self.high = 0.0
        self.parents: Dict[str, int] = {}

    def add(self, elapsed_ms: float, parent) -> None:
        self.count += 1
        self.total += elapsed_ms
        if elapsed_ms < self.low:
            self.low = elapsed_ms
        if elapsed_ms > self.high:
            self.high = elapsed_ms
        if parent is not None:
            self.parents[parent] = self.parents.get(parent, 0) + 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'total_ms': round(self.total, 3),
            'avg_ms': round(self.total / self.count, 3),
            'min_ms': round(self.low, 3),
            'max_ms': round(self.high, 3),
            'parents': dict(self.parents),
        }


class _TimingMarker:
    """Reusable context manager bound to one marker name."""
    __slots__ = ('name', '_recorder')

    def __init__(self, name: str, recorder: '_TimingRecorder'):
        self.name = name
        self._recorder = recorder

    def __enter__(self):
        recorder = self._recorder
        if recorder.enabled:
            recorder.open.append((self.name, _perf()))
        return self

    def __exit__(self, *args):
        recorder = self._recorder
        if recorder.enabled and recorder.open:
            name, start = recorder.open.pop()
            # A marker opened before reset_profile() or enable_profiling()
            # is dropped rather than closed against the wrong entry
            if name == self.name:
                parent = recorder.open[-1][0] if recorder.open else None
                recorder.record(name, (_perf() - start) * 1000, parent)
        return False


class _TimingRecorder:
    """Aggregates marker timings as each marker exits."""

    def __init__(self):
        self.enabled = False
        self.open: List[Tuple[str, float]] = []
        self._stats: Dict[str, _MarkerStats] = {}
        self._markers: Dict[str, _TimingMarker] = {}

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        self.open.clear()

    def clear(self) -> None:
        self._stats.clear()
        self.open.clear()

    def record(self, name: str, elapsed_ms: float, parent) -> None:
        stats = self._stats.get(name)
        if stats is None:
            stats = self._stats[name] = _MarkerStats()
        stats.add(elapsed_ms, parent)

    def results(self) -> Dict[str, Dict[str, Any]]:
        return {name: stats.as_dict() for name, stats in self._stats.items()}

    def marker(self, name: str) -> _TimingMarker:
        marker = self._markers.get(name)
        if marker is None:
            marker = self._markers[name] = _TimingMarker(name, self)
        return marker


_recorder = _NullRecorder() if _PROFILING_COMPILED_OUT else _TimingRecorder()


def enable_profiling(enabled: bool = True) -> None:
    """Start or stop recording. Has no effect when profiling is compiled out."""
    _recorder.set_enabled(enabled)


def is_profiling_enabled() -> bool:
    return _recorder.enabled


def reset_profile():
    """Drop all recorded timings."""
    _recorder.clear()


def get_profile_results() -> Dict[str, Dict[str, Any]]:
    """
    Get per-marker statistics recorded since the last reset.

    Returns:
        Dict mapping marker names to their stats:
        {
            'intersect_box': {
                'count': 3,
                'total_ms': 9.3,
                'avg_ms': 3.1,
                'min_ms': 2.9,
                'max_ms': 3.4,
                'parents': {'benchmark': 3}
            }
        }
    """
    return _recorder.results()


def perf_marker(name: str):
    """
    Context manager that times the enclosed block under ``name``.

    Usage:
        with perf_marker("distance_sq_to_segment"):
            ...
    """
    return _recorder.marker(name)

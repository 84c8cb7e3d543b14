"""Named scope profilers with a push/pop stack of active measurements."""

from __future__ import annotations

import math
import sys
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

DEFAULT_CAPACITY = 100
MAX_U64 = 2**64 - 1
MAX_R64 = sys.float_info.max


class ProfilerError(Exception):
    """Raised when the profiler registry or its stack is misused."""


def _default_cycle_clock() -> int:
    return time.perf_counter_ns()


def _default_time_clock() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class Profiler:
    """Timing statistics gathered for one named scope."""

    name: str
    cycle_diff: int = 0
    time_diff: float = 0.0
    min_cycles: int = MAX_U64
    max_cycles: int = 0
    min_time: float = MAX_R64
    max_time: float = 0.0
    total_cycles: int = 0
    total_time: float = 0.0
    cycle_start: int = 0
    time_start: float = 0.0
    count: int = field(default=0)

    def record(self, cycles: int, elapsed_ms: float) -> None:
        """Fold one measurement into the statistics."""
        self.cycle_diff = cycles
        self.time_diff = elapsed_ms
        self.min_cycles = min(cycles, self.min_cycles)
        self.max_cycles = max(cycles, self.max_cycles)
        self.min_time = min(elapsed_ms, self.min_time)
        self.max_time = max(elapsed_ms, self.max_time)
        self.total_cycles += cycles
        self.total_time += elapsed_ms
        self.count += 1

    def avg_cycles(self) -> int:
        """Average cycle count per measurement, rounded; 0 if none."""
        if self.count == 0:
            return 0
        return math.floor(self.total_cycles / self.count + 0.5)

    def avg_time(self) -> float:
        """Average elapsed milliseconds per measurement; 0 if none."""
        if self.count == 0:
            return 0.0
        return self.total_time / self.count


class ProfilerRegistry:
    """A fixed-capacity set of profilers and a stack of the running ones."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        cycle_clock: Callable[[], int] | None = None,
        time_clock: Callable[[], float] | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._cycle_clock = cycle_clock or _default_cycle_clock
        self._time_clock = time_clock or _default_time_clock
        self._profilers: list[Profiler] = []
        self._stack: list[int] = []

    def register(self, name: str) -> int:
        """Return the index for ``name``, creating a profiler if needed."""
        for index, profiler in enumerate(self._profilers):
            if profiler.name == name:
                return index
        if len(self._profilers) >= self.capacity:
            raise ProfilerError(f"more than {self.capacity} profilers registered")
        self._profilers.append(Profiler(name))
        return len(self._profilers) - 1

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._profilers):
            raise ProfilerError(f"no profiler at index {index}")

    def push_index(self, index: int) -> None:
        """Push an index onto the stack of running profilers."""
        self._check_index(index)
        if len(self._stack) >= self.capacity:
            raise ProfilerError("profiler stack overflow")
        self._stack.append(index)

    def pop_index(self) -> int:
        """Pop the most recently pushed index."""
        if not self._stack:
            raise ProfilerError("profiler stack is empty")
        return self._stack.pop()

    def push(self, index: int) -> None:
        """Start measuring with the profiler at ``index``."""
        self._check_index(index)
        profiler = self._profilers[index]
        profiler.cycle_start = self._cycle_clock()
        profiler.time_start = self._time_clock()
        self.push_index(index)

    def pop(self) -> Profiler:
        """Stop the innermost running profiler and record its measurement."""
        profiler = self._profilers[self.pop_index()]
        cycles = self._cycle_clock() - profiler.cycle_start
        elapsed = self._time_clock() - profiler.time_start
        profiler.record(cycles, elapsed)
        return profiler

    @contextmanager
    def profile(self, name: str) -> Iterator[Profiler]:
        """Measure the enclosed block under ``name``."""
        index = self.register(name)
        self.push(index)
        try:
            yield self._profilers[index]
        finally:
            self.pop()

    @property
    def depth(self) -> int:
        """Number of profilers currently running."""
        return len(self._stack)

    def __getitem__(self, index: int) -> Profiler:
        return self._profilers[index]

    def __len__(self) -> int:
        return len(self._profilers)
"""A bounded ring-buffer job queue served by worker threads."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_CAPACITY = 256


def default_worker_count() -> int:
    """One worker per logical core, less the submitting thread."""
    return max(1, (os.cpu_count() or 2) - 1)


@dataclass(frozen=True)
class Job:
    """A procedure and the data it is called with."""

    proc: Callable[[Any], Any]
    data: Any = None

    def run(self) -> None:
        self.proc(self.data)


class JobQueue:
    """Jobs submitted to a fixed ring buffer and run by worker threads.

    A ring of ``capacity`` slots holds at most ``capacity - 1`` waiting jobs;
    submitting to a full ring blocks until a worker takes one.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 2:
            raise ValueError("capacity must be at least 2")
        self.capacity = capacity
        self._slots: list[Job | None] = [None] * capacity
        self._read = 0
        self._write = 0
        self._available = 0
        self._closed = False
        self._cond = threading.Condition()
        self._threads: list[threading.Thread] = []
        self._index_by_ident: dict[int, int] = {}
        self._errors: list[BaseException] = []

    def submit(self, proc: Callable[[Any], Any], data: Any = None) -> None:
        """Queue ``proc(data)``, blocking while the ring is full."""
        job = Job(proc, data)
        with self._cond:
            while (self._write + 1) % self.capacity == self._read and not self._closed:
                self._cond.wait()
            if self._closed:
                raise RuntimeError("job queue is closed")
            self._slots[self._write] = job
            self._write = (self._write + 1) % self.capacity
            self._available += 1
            self._cond.notify_all()

    def start_workers(self, count: int | None = None) -> None:
        """Start ``count`` worker threads serving the queue."""
        if count is None:
            count = default_worker_count()
        if count < 1:
            raise ValueError("count must be positive")
        with self._cond:
            if self._closed:
                raise RuntimeError("job queue is closed")
            for _ in range(count):
                index = len(self._threads)
                thread = threading.Thread(
                    target=self._worker, args=(index,), name=f"worker-{index}", daemon=True
                )
                self._threads.append(thread)
                thread.start()

    def _worker(self, index: int) -> None:
        with self._cond:
            self._index_by_ident[threading.get_ident()] = index
        while True:
            with self._cond:
                while self._read == self._write and not self._closed:
                    self._cond.wait()
                if self._read == self._write:
                    return
                job = self._slots[self._read]
                self._slots[self._read] = None
                self._read = (self._read + 1) % self.capacity
                self._cond.notify_all()
            try:
                job.run()
            except BaseException as exc:  # noqa: BLE001 - reported by wait_for_all
                with self._cond:
                    self._errors.append(exc)
            finally:
                with self._cond:
                    self._available -= 1
                    self._cond.notify_all()

    def wait_for_all(self) -> None:
        """Block until every submitted job has finished.

        Re-raises the first exception a job raised since the last wait.
        """
        with self._cond:
            if self._available > 0 and not any(t.is_alive() for t in self._threads):
                raise RuntimeError("jobs are pending but no workers are running")
            while self._available > 0:
                self._cond.wait()
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]

    def thread_index(self) -> int:
        """Index of the calling worker thread, or -1 for any other thread."""
        with self._cond:
            return self._index_by_ident.get(threading.get_ident(), -1)

    def pending(self) -> int:
        """Number of jobs submitted and not yet finished."""
        with self._cond:
            return self._available

    def close(self) -> None:
        """Let workers finish queued jobs, then stop and join them."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
            threads = list(self._threads)
        for thread in threads:
            if thread is not threading.current_thread():
                thread.join()

    def __enter__(self) -> JobQueue:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
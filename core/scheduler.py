"""
core/scheduler.py — Tick-driven job clock for Typing Taro.

The scheduler owns a millisecond clock that only moves when advance() is
called. It holds two kinds of jobs:

    every(interval, cb) — periodic; used for the fall tick
    after(delay, cb)    — one-shot; used for the stage transition delay

Every job can be cancelled. A cancelled job never fires again, even if it
was already due inside the advance() call that cancelled it. This is what
keeps a fall tick armed for a finished session from touching the next one.

Usage:
    scheduler = Scheduler()
    job = scheduler.every(50, controller.tick)

    # each frame:
    scheduler.advance(dt_ms)

    # on reset:
    job.cancel()            # or scheduler.cancel_all()
"""

from __future__ import annotations
import itertools
from typing import Callable


class Job:
    """A scheduled callback.

    Attributes:
        callback:  Zero-argument callable to run when due.
        due_ms:    Clock time at which the job next fires.
        interval:  Period in ms for repeating jobs, None for one-shot jobs.
        cancelled: True once cancel() has been called or a one-shot fired.
    """

    def __init__(self, callback: Callable[[], None], due_ms: float,
                 interval: float | None, seq: int) -> None:
        self.callback  = callback
        self.due_ms    = due_ms
        self.interval  = interval
        self.cancelled = False
        self._seq      = seq

    def cancel(self) -> None:
        """Stop the job from firing again. Safe to call repeatedly."""
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled

    def _sort_key(self) -> tuple[float, int]:
        return (self.due_ms, self._seq)


class Scheduler:
    """Cooperative job clock advanced explicitly by the game loop.

    Attributes:
        now_ms: Current clock time in milliseconds.
        _jobs:  Live jobs, pruned of cancelled ones on every advance().
    """

    def __init__(self) -> None:
        """Create a scheduler at time 0 with no jobs."""
        self.now_ms: float = 0.0
        self._jobs: list[Job] = []
        self._seq = itertools.count()

    def every(self, interval_ms: float, callback: Callable[[], None]) -> Job:
        """Schedule callback every interval_ms, first firing one interval from now.

        Raises:
            ValueError: If interval_ms is not positive.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        return self._add(Job(callback, self.now_ms + interval_ms, interval_ms, next(self._seq)))

    def after(self, delay_ms: float, callback: Callable[[], None]) -> Job:
        """Schedule callback once, delay_ms from now."""
        return self._add(Job(callback, self.now_ms + max(0.0, delay_ms), None, next(self._seq)))

    def _add(self, job: Job) -> Job:
        self._jobs.append(job)
        return job

    def advance(self, dt_ms: float) -> None:
        """Move the clock forward and fire every job that falls due.

        Jobs fire in due-time order, ties broken by scheduling order. A
        repeating job fires once per elapsed interval. Jobs scheduled by a
        callback fire within the same call if they fall due before the new
        clock time.

        Args:
            dt_ms: Milliseconds elapsed since the last call. Negative values
                   are treated as 0.
        """
        target = self.now_ms + max(0.0, dt_ms)
        while True:
            due = [j for j in self._jobs if j.active and j.due_ms <= target]
            if not due:
                break
            job = min(due, key=Job._sort_key)
            self.now_ms = job.due_ms
            if job.interval is None:
                job.cancelled = True
            else:
                job.due_ms += job.interval
            job.callback()
        self.now_ms = target
        self._jobs = [j for j in self._jobs if j.active]

    def cancel_all(self) -> None:
        """Cancel every pending job."""
        for job in self._jobs:
            job.cancel()
        self._jobs.clear()

    def pending(self) -> int:
        """Return the number of live jobs."""
        return sum(1 for j in self._jobs if j.active)

"""Cancellable background re-fetch on a fixed interval."""

from __future__ import annotations

from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler

__all__ = ["Poller"]


class Poller:
    """Run ``callback`` every ``interval_seconds`` until :meth:`stop` is called.

    The scheduler is created on :meth:`start` so a stopped poller can be
    started again (mount, unmount, mount).  A tick that fires while the
    previous call is still running is skipped.
    """

    job_id = "microblog-refresh"

    def __init__(self, callback: Callable[[], object], interval_seconds: int) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.callback = callback
        self.interval_seconds = interval_seconds
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def _tick(self) -> None:
        try:
            self.callback()
        except Exception as exc:  # pragma: no cover - keep the schedule alive
            print(f"[ERROR] Scheduled refresh failed: {exc}")

    def start(self) -> None:
        if self.running:
            return
        scheduler = BackgroundScheduler(daemon=True)
        scheduler.add_job(
            self._tick,
            "interval",
            seconds=self.interval_seconds,
            id=self.job_id,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler

    def stop(self) -> None:
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is not None and scheduler.running:
            scheduler.shutdown(wait=False)

"""Render time and memory budgeting with worker count hints."""

from __future__ import annotations

import os
from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class PerformanceTargets:
    render_ms_max: float = 2000.0
    rss_mb_max: float = 300.0


@dataclass(frozen=True)
class BudgetStatus:
    render_ms: float
    cpu_percent: float
    rss_mb: float
    overloaded: bool
    warning: str | None
    recommended_workers: int


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        self._max_workers = max(1, os.cpu_count() or 1)
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self, render_ms: float, workers: int = 1) -> BudgetStatus:
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)

        warning = None
        rec_workers = max(1, int(workers))
        overloaded = False

        if rss_mb > self.targets.rss_mb_max:
            overloaded = True
            warning = "memory_over_budget"
            rec_workers = max(1, rec_workers - 1)
        elif render_ms > self.targets.render_ms_max:
            overloaded = True
            warning = "render_over_budget"
            rec_workers = min(self._max_workers, rec_workers * 2)

        return BudgetStatus(
            render_ms=float(render_ms),
            cpu_percent=cpu,
            rss_mb=rss_mb,
            overloaded=overloaded,
            warning=warning,
            recommended_workers=rec_workers,
        )

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ticktest.outcome import CategoryResult


@dataclass
class CategoryTiming:
    """Wall-clock timing of one category run, in seconds.

    ``total`` is always set; the per-test figures are ``None`` for a
    category with no tests.
    """

    count: int
    total: float
    avg: float | None = None
    min: float | None = None
    max: float | None = None
    stddev: float | None = None
    slowest_test: str | None = None

    def per_test(self) -> dict[str, float]:
        """Per-test figures that are available, keyed by statistic name."""
        stats = {
            "avg": self.avg,
            "min": self.min,
            "max": self.max,
            "stddev": self.stddev,
        }
        return {k: v for k, v in stats.items() if v is not None}

    def to_dict(self) -> dict[str, float | int | str | None]:
        return asdict(self)


def category_timing(result: CategoryResult) -> CategoryTiming:
    """Summarize the test durations of a category result."""
    durations = np.array(
        [o.duration_seconds for o in result.outcomes], dtype=float
    )
    if durations.size == 0:
        return CategoryTiming(count=0, total=0.0)

    return CategoryTiming(
        count=int(durations.size),
        total=round(float(durations.sum()), 6),
        avg=round(float(durations.mean()), 4),
        min=round(float(durations.min()), 4),
        max=round(float(durations.max()), 4),
        stddev=round(float(durations.std()), 4),
        slowest_test=result.outcomes[int(durations.argmax())].name,
    )

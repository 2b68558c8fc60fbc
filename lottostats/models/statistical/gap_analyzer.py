"""
lottostats/models/statistical/gap_analyzer.py
Gaps (in draws) between consecutive appearances of each number.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np

from lottostats.models.draw import Draw, Selector, incidence_matrix, main_numbers


@dataclass(frozen=True)
class GapStat:
    number: int
    min_gap: int
    max_gap: int
    avg_gap: float
    current_gap: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class GapAnalyzer:
    """Min/max/average spacing between appearances, plus the current gap."""

    def __init__(self, max_number: int, selector: Selector = main_numbers):
        if max_number <= 0:
            raise ValueError(f"max_number must be positive, got {max_number}")
        self.max_number = max_number
        self.selector = selector

    def analyze(self, draws: Sequence[Draw]) -> list[GapStat]:
        """
        Numbers seen fewer than twice have no gaps and report 0 for min/max/avg.
        If never seen, current_gap = len(draws).
        Sorted by current gap descending.
        """
        matrix = incidence_matrix(draws, self.max_number, self.selector)
        results: list[GapStat] = []

        for idx in range(self.max_number):
            appearances = matrix[:, idx].nonzero()[0]
            current = int(appearances[0]) if len(appearances) else len(draws)
            if len(appearances) < 2:
                results.append(GapStat(idx + 1, 0, 0, 0.0, current))
                continue
            gaps = np.diff(appearances)
            results.append(GapStat(
                number=idx + 1,
                min_gap=int(gaps.min()),
                max_gap=int(gaps.max()),
                avg_gap=round(float(gaps.mean()), 2),
                current_gap=current,
            ))

        return sorted(results, key=lambda g: g.current_gap, reverse=True)

    def get_gaps(self, draws: Sequence[Draw]) -> dict[int, int]:
        """Returns {number: draws_since_last_appearance}."""
        return {g.number: g.current_gap for g in self.analyze(draws)}

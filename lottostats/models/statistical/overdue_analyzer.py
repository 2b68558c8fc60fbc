"""
lottostats/models/statistical/overdue_analyzer.py
Compare draws since last appearance with each number's own average interval.
A ratio of 1.0 is on schedule, above 1.0 is overdue.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

from lottostats.models.draw import Draw, Selector, first_occurrence, incidence_matrix, main_numbers


@dataclass(frozen=True)
class OverdueStat:
    number: int
    draws_since_last_drawn: int
    expected_interval: float
    overdue_ratio: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class OverdueAnalyzer:
    """Score each number by how late it is relative to its historical cadence."""

    def __init__(self, max_number: int, selector: Selector = main_numbers):
        if max_number <= 0:
            raise ValueError(f"max_number must be positive, got {max_number}")
        self.max_number = max_number
        self.selector = selector

    def analyze(self, draws: Sequence[Draw]) -> list[OverdueStat]:
        """
        Never-drawn numbers use expected_interval = total draws, so they report
        ratio 0 (not enough data) instead of dividing by zero.
        Sorted by overdue_ratio descending.
        """
        total_draws = len(draws)
        matrix = incidence_matrix(draws, self.max_number, self.selector)
        appearances = matrix.sum(axis=0)
        since = first_occurrence(matrix)

        results: list[OverdueStat] = []
        for idx in range(self.max_number):
            seen = int(appearances[idx])
            expected = total_draws / seen if seen > 0 else float(total_draws)
            draws_since = int(since[idx])
            ratio = draws_since / expected if expected > 0 else 0.0
            results.append(OverdueStat(
                number=idx + 1,
                draws_since_last_drawn=draws_since,
                expected_interval=round(expected, 2),
                overdue_ratio=round(ratio, 2),
            ))

        return sorted(results, key=lambda s: s.overdue_ratio, reverse=True)

    @staticmethod
    def get_most_overdue(stats: list[OverdueStat], top_n: int = 10) -> list[OverdueStat]:
        return stats[:top_n]

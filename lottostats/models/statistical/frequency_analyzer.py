"""
lottostats/models/statistical/frequency_analyzer.py
Per-number occurrence counts across the full draw history.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

from lottostats.models.draw import Draw, Selector, first_occurrence, incidence_matrix, main_numbers


@dataclass(frozen=True)
class NumberFrequency:
    number: int
    count: int
    percentage: float
    last_drawn_date: str | None
    draws_since_last_drawn: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class FrequencyAnalyzer:
    """Count how often each number 1..max_number has been drawn."""

    def __init__(self, max_number: int, selector: Selector = main_numbers):
        if max_number <= 0:
            raise ValueError(f"max_number must be positive, got {max_number}")
        self.max_number = max_number
        self.selector = selector

    def analyze(self, draws: Sequence[Draw]) -> list[NumberFrequency]:
        """
        One entry per number, never-drawn numbers included with count 0.
        Sorted by count descending; ties keep numeric order.
        """
        total_draws = len(draws)
        matrix = incidence_matrix(draws, self.max_number, self.selector)
        counts = matrix.sum(axis=0)
        since = first_occurrence(matrix)

        results: list[NumberFrequency] = []
        for idx in range(self.max_number):
            count = int(counts[idx])
            last_drawn = None
            if count:
                # Zero-padded ISO dates compare correctly as strings
                last_drawn = max(draws[row].date for row in matrix[:, idx].nonzero()[0])
            results.append(NumberFrequency(
                number=idx + 1,
                count=count,
                percentage=(count / total_draws) * 100 if total_draws > 0 else 0.0,
                last_drawn_date=last_drawn,
                draws_since_last_drawn=int(since[idx]),
            ))

        return sorted(results, key=lambda f: f.count, reverse=True)

    @staticmethod
    def get_most_frequent(frequencies: list[NumberFrequency], top_n: int = 10) -> list[NumberFrequency]:
        return frequencies[:top_n]

    @staticmethod
    def get_least_frequent(frequencies: list[NumberFrequency], bottom_n: int = 10) -> list[NumberFrequency]:
        return sorted(frequencies, key=lambda f: f.count)[:bottom_n]

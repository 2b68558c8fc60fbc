"""
lottostats/models/statistical/hot_cold_analyzer.py
Hot/warm/cold classification from occurrence counts over nested windows.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Sequence

from lottostats.models.draw import Draw, Selector, first_n, incidence_matrix, main_numbers

RECENT_WINDOW = 20
MEDIUM_WINDOW = 100

# Score weights: recent 3x, medium 2x, all-time 1x
RECENT_WEIGHT = 3
MEDIUM_WEIGHT = 2
ALL_TIME_WEIGHT = 1

HOT = "hot"
WARM = "warm"
COLD = "cold"


@dataclass(frozen=True)
class HotColdScore:
    number: int
    score: int
    recent_count: int
    medium_count: int
    all_time_count: int
    classification: str = WARM

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class HotColdAnalyzer:
    """Score each number by recent momentum and split the ranking into thirds."""

    def __init__(
        self,
        max_number: int,
        selector: Selector = main_numbers,
        recent_window: int = RECENT_WINDOW,
        medium_window: int = MEDIUM_WINDOW,
    ):
        if max_number <= 0:
            raise ValueError(f"max_number must be positive, got {max_number}")
        self.max_number = max_number
        self.selector = selector
        self.recent_window = recent_window
        self.medium_window = medium_window

    def analyze(self, draws: Sequence[Draw]) -> list[HotColdScore]:
        """
        Windows are nested: a recent draw also counts toward medium and all-time.
        Returned sorted by score descending.
        """
        matrix = incidence_matrix(draws, self.max_number, self.selector)
        recent = matrix[: len(first_n(draws, self.recent_window))].sum(axis=0)
        medium = matrix[: len(first_n(draws, self.medium_window))].sum(axis=0)
        all_time = matrix.sum(axis=0)

        results: list[HotColdScore] = []
        for idx in range(self.max_number):
            r, m, a = int(recent[idx]), int(medium[idx]), int(all_time[idx])
            results.append(HotColdScore(
                number=idx + 1,
                score=r * RECENT_WEIGHT + m * MEDIUM_WEIGHT + a * ALL_TIME_WEIGHT,
                recent_count=r,
                medium_count=m,
                all_time_count=a,
            ))

        results.sort(key=lambda s: s.score, reverse=True)
        # Hot and warm bands get floor(max/3) each; cold absorbs the remainder
        third = len(results) // 3
        return [
            replace(s, classification=HOT if i < third else WARM if i < third * 2 else COLD)
            for i, s in enumerate(results)
        ]

    @staticmethod
    def get_hot_numbers(scores: list[HotColdScore], top_n: int = 10) -> list[HotColdScore]:
        return [s for s in scores if s.classification == HOT][:top_n]

    @staticmethod
    def get_cold_numbers(scores: list[HotColdScore], bottom_n: int = 10) -> list[HotColdScore]:
        """Coldest first."""
        return [s for s in reversed(scores) if s.classification == COLD][:bottom_n]

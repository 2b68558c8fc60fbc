"""
lottostats/models/statistical/pair_analyzer.py
Co-occurrence counts of unordered main-number pairs within a draw.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Sequence

from lottostats.models.draw import Draw, first_n

DEFAULT_TOP_COUNT = 20


@dataclass(frozen=True)
class PairStat:
    pair: tuple[int, int]
    count: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {"pair": list(self.pair), "count": self.count, "percentage": self.percentage}


class PairAnalyzer:
    """Most common number pairs. Bonus numbers never take part in pairing."""

    def __init__(self, top_count: int = DEFAULT_TOP_COUNT, window: int | None = None):
        """
        window: only pair the newest `window` draws of the history handed in.
        None pairs every draw given.
        """
        self.top_count = top_count
        self.window = window

    def analyze(self, draws: Sequence[Draw]) -> list[PairStat]:
        if self.window is not None:
            draws = first_n(draws, self.window)
        total_draws = len(draws)

        counter: Counter = Counter()
        for draw in draws:
            counter.update(combinations(sorted(set(draw.numbers)), 2))

        # most_common keeps first-seen order for equal counts
        return [
            PairStat(
                pair=pair,
                count=count,
                percentage=(count / total_draws) * 100 if total_draws > 0 else 0.0,
            )
            for pair, count in counter.most_common(self.top_count)
        ]

    @staticmethod
    def pairs_containing(pairs: list[PairStat], number: int) -> list[PairStat]:
        return [p for p in pairs if number in p.pair]

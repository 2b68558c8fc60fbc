"""
lottostats/models/draw.py
Draw records, game ranges and helpers over a newest-first draw history.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Sequence

import numpy as np


@dataclass(frozen=True)
class Draw:
    """One historical drawing. `date` is a zero-padded YYYY-MM-DD string."""

    date: str
    numbers: tuple[int, ...]
    bonus_number: int | None = None
    multiplier: int | None = None

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {"date": self.date, "numbers": list(self.numbers)}
        if self.bonus_number is not None:
            record["bonusNumber"] = self.bonus_number
        if self.multiplier is not None:
            record["multiplier"] = self.multiplier
        return record

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Draw":
        bonus = record.get("bonusNumber", record.get("bonus_number"))
        multiplier = record.get("multiplier")
        return cls(
            date=str(record["date"]),
            numbers=tuple(int(n) for n in record["numbers"]),
            bonus_number=int(bonus) if bonus is not None else None,
            multiplier=int(multiplier) if multiplier is not None else None,
        )


@dataclass(frozen=True)
class GameConfig:
    """Number universe of one game: main pool 1..main_max, bonus pool 1..bonus_max."""

    slug: str
    name: str
    main_count: int
    main_max: int
    bonus_max: int | None = None
    main_label: str = "Main"
    bonus_label: str = "Bonus"
    source_url: str = ""
    bonus_field: str | None = None

    def __post_init__(self) -> None:
        if self.main_max <= 0:
            raise ValueError(f"{self.slug}: main_max must be positive, got {self.main_max}")
        if not 0 < self.main_count <= self.main_max:
            raise ValueError(f"{self.slug}: main_count must be in [1, {self.main_max}], got {self.main_count}")
        if self.bonus_max is not None and self.bonus_max <= 0:
            raise ValueError(f"{self.slug}: bonus_max must be positive, got {self.bonus_max}")

    @property
    def has_bonus(self) -> bool:
        return self.bonus_max is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


Selector = Callable[[Draw], Sequence[int]]


def main_numbers(draw: Draw) -> Sequence[int]:
    return draw.numbers


def bonus_numbers(draw: Draw) -> Sequence[int]:
    return () if draw.bonus_number is None else (draw.bonus_number,)


def sort_newest_first(draws: Sequence[Draw]) -> list[Draw]:
    """Establish the history ordering every analyzer relies on (index 0 = most recent)."""
    return sorted(draws, key=lambda d: d.date, reverse=True)


def first_n(draws: Sequence[Draw], n: int) -> Sequence[Draw]:
    """The newest `n` draws; the whole history when n exceeds its length."""
    if n < 0:
        raise ValueError(f"Window size must be non-negative, got {n}")
    return draws[:n]


def incidence_matrix(draws: Sequence[Draw], max_number: int, selector: Selector = main_numbers) -> np.ndarray:
    """
    Boolean matrix of shape (len(draws), max_number).
    Row i, column n-1 is True when number n was selected from draw i.
    Values outside 1..max_number are ignored.
    """
    if max_number <= 0:
        raise ValueError(f"max_number must be positive, got {max_number}")
    matrix = np.zeros((len(draws), max_number), dtype=bool)
    for row, draw in enumerate(draws):
        for num in selector(draw):
            if 1 <= num <= max_number:
                matrix[row, num - 1] = True
    return matrix


def first_occurrence(matrix: np.ndarray) -> np.ndarray:
    """Row index of the first True per column; the row count for all-False columns."""
    n_draws = matrix.shape[0]
    if n_draws == 0:
        return np.zeros(matrix.shape[1], dtype=int)
    seen = matrix.any(axis=0)
    return np.where(seen, matrix.argmax(axis=0), n_draws)

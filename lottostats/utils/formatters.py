"""
lottostats/utils/formatters.py
Display helpers for report output.
"""
from __future__ import annotations

from datetime import datetime
from typing import Sequence

from lottostats.models.draw import Draw


def format_date(date_str: str) -> str:
    """'2024-01-15' → 'January 15, 2024'. Unparsable input is returned unchanged."""
    try:
        d = datetime.strptime(date_str, "%Y-%m-%d")
    except (TypeError, ValueError):
        return date_str
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_number(num: int) -> str:
    return f"{num:02d}"


def format_numbers(nums: Sequence[int], bonus: int | None = None) -> str:
    text = " ".join(format_number(n) for n in nums)
    return f"{text} + {format_number(bonus)}" if bonus is not None else text


def format_currency(amount: float) -> str:
    return f"${amount:,.0f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def years_range(draws: Sequence[Draw]) -> list[int]:
    """Distinct draw years, newest first."""
    years = {int(d.date[:4]) for d in draws if d.date[:4].isdigit()}
    return sorted(years, reverse=True)

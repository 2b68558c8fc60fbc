"""
lottostats/models/game_odds.py
Jackpot odds for a game's number matrix, and uniform quick picks.
"""
from __future__ import annotations

import math
import secrets
from dataclasses import asdict, dataclass
from typing import Any

from lottostats.models.draw import GameConfig

LIGHTNING_ODDS = 2_000_000      # 1 in 2 million per year
DRAWS_PER_YEAR = 156            # three drawings a week


@dataclass(frozen=True)
class JackpotOdds:
    main_combinations: int
    bonus_options: int
    total_combinations: int
    lightning_multiple: int
    years_at_one_ticket_per_draw: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def jackpot_odds(game_config: GameConfig) -> JackpotOdds:
    """
    1-in-N odds of matching every main number and the bonus.
    A game without a bonus ball counts as a single bonus option.
    """
    main = math.comb(game_config.main_max, game_config.main_count)
    bonus = game_config.bonus_max or 1
    total = main * bonus
    return JackpotOdds(
        main_combinations=main,
        bonus_options=bonus,
        total_combinations=total,
        lightning_multiple=round(total / LIGHTNING_ODDS),
        years_at_one_ticket_per_draw=round(total / DRAWS_PER_YEAR),
    )


@dataclass(frozen=True)
class QuickPick:
    numbers: tuple[int, ...]
    bonus_number: int | None

    def to_dict(self) -> dict[str, Any]:
        return {"numbers": list(self.numbers), "bonus_number": self.bonus_number}


def _draw_ball(max_number: int) -> int:
    return secrets.randbelow(max_number) + 1


def quick_pick(game_config: GameConfig) -> QuickPick:
    """Distinct main numbers (ascending) plus a bonus, from the OS CSPRNG. No history involved."""
    picked: list[int] = []
    while len(picked) < game_config.main_count:
        num = _draw_ball(game_config.main_max)
        if num not in picked:
            picked.append(num)

    bonus = _draw_ball(game_config.bonus_max) if game_config.has_bonus else None
    return QuickPick(numbers=tuple(sorted(picked)), bonus_number=bonus)

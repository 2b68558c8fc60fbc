"""
lottostats/models/recommendation_engine.py
Weighted blend of frequency, hot/cold, overdue and pair signals → recommended sets.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, NamedTuple, Sequence

from lottostats.models.draw import Draw, GameConfig, Selector, bonus_numbers, main_numbers
from lottostats.models.statistical.frequency_analyzer import FrequencyAnalyzer
from lottostats.models.statistical.hot_cold_analyzer import HOT, HotColdAnalyzer
from lottostats.models.statistical.overdue_analyzer import OverdueAnalyzer
from lottostats.models.statistical.pair_analyzer import DEFAULT_TOP_COUNT, PairAnalyzer, PairStat
from lottostats.utils.logger import get_logger

log = get_logger("recommendation")

OVERDUE_RATIO_CAP = 3.0
MAX_REASONS = 4


# ── Strategies ────────────────────────────────────────────────────

class Strategy(str, Enum):
    BALANCED = "balanced"
    TRENDING = "trending"
    CONTRARIAN = "contrarian"


@dataclass(frozen=True)
class StrategyWeights:
    frequency: float
    hot: float
    overdue: float
    pairs: float

    @property
    def total(self) -> float:
        return self.frequency + self.hot + self.overdue + self.pairs


@dataclass(frozen=True)
class StrategyProfile:
    name: str
    description: str
    weights: StrategyWeights


def strategy_profile(strategy: Strategy | str) -> StrategyProfile:
    """Weight vector and display name for a strategy. Unknown names raise ValueError."""
    strategy = Strategy(strategy)
    if strategy is Strategy.BALANCED:
        return StrategyProfile(
            name="Balanced",
            description="A well-rounded blend of frequency trends, momentum, and overdue numbers.",
            weights=StrategyWeights(frequency=0.30, hot=0.30, overdue=0.25, pairs=0.15),
        )
    if strategy is Strategy.TRENDING:
        return StrategyProfile(
            name="Trending",
            description="Favors numbers showing strong momentum in recent draws.",
            weights=StrategyWeights(frequency=0.20, hot=0.50, overdue=0.15, pairs=0.15),
        )
    return StrategyProfile(
        name="Contrarian",
        description="Targets statistically overdue numbers that are due for a comeback.",
        weights=StrategyWeights(frequency=0.15, hot=0.10, overdue=0.60, pairs=0.15),
    )


# ── Reasoning rules ───────────────────────────────────────────────

def _round_half_up(value: float) -> int:
    return int(value + 0.5)


@dataclass(frozen=True)
class NumberSignals:
    """The per-number inputs the reasoning rules look at."""

    number: int
    frequency_rank: float
    classification: str
    overdue_ratio: float

    @property
    def top_percent(self) -> int:
        return _round_half_up(self.frequency_rank * 100 + 1)

    @property
    def overdue_percent(self) -> int:
        return _round_half_up(self.overdue_ratio * 100)


class ReasoningRule(NamedTuple):
    predicate: Callable[[NumberSignals], bool]
    template: str

    def render(self, signals: NumberSignals) -> str:
        return self.template.format(s=signals)


# Evaluated in this order; first matches win when more than MAX_REASONS apply
MAIN_REASONING_RULES: tuple[ReasoningRule, ...] = (
    ReasoningRule(lambda s: s.frequency_rank < 0.2, "Top {s.top_percent}% most frequent"),
    ReasoningRule(lambda s: s.classification == HOT, "Currently trending hot"),
    ReasoningRule(lambda s: s.overdue_ratio > 1.5, "Overdue by {s.overdue_percent}%"),
)

BONUS_REASONING_RULES: tuple[ReasoningRule, ...] = (
    ReasoningRule(lambda s: s.frequency_rank < 0.2, "Frequently drawn bonus"),
)


def apply_rules(signals: NumberSignals, rules: Sequence[ReasoningRule]) -> list[str]:
    return [rule.render(signals) for rule in rules if rule.predicate(signals)][:MAX_REASONS]


# ── Scoring ───────────────────────────────────────────────────────

def normalized_rank(ranked: Sequence[int], number: int) -> float:
    """Position of `number` in a best-first ranking divided by its length, in [0, 1)."""
    return ranked.index(number) / len(ranked)


@dataclass
class NumberScore:
    number: int
    score: float
    reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecommendedSet:
    numbers: tuple[int, ...]
    bonus_number: int | None
    strategy: str
    reasoning: tuple[str, ...]
    confidence_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "numbers": list(self.numbers),
            "bonus_number": self.bonus_number,
            "strategy": self.strategy,
            "reasoning": list(self.reasoning),
            "confidence_score": self.confidence_score,
        }


def score_pool(
    draws: Sequence[Draw],
    max_number: int,
    selector: Selector,
    weights: StrategyWeights,
    rules: Sequence[ReasoningRule],
    pairs: list[PairStat] | None = None,
) -> list[NumberScore]:
    """
    Composite score per number 1..max_number, best first (ties keep numeric order).
    Pair bonus is only applied when `pairs` is given.
    """
    frequencies = FrequencyAnalyzer(max_number, selector).analyze(draws)
    hot_cold = HotColdAnalyzer(max_number, selector).analyze(draws)
    overdue = {o.number: o for o in OverdueAnalyzer(max_number, selector).analyze(draws)}

    freq_ranked = [f.number for f in frequencies]
    hot_ranked = [h.number for h in hot_cold]
    classification = {h.number: h.classification for h in hot_cold}

    scores: list[NumberScore] = []
    for num in range(1, max_number + 1):
        freq_rank = normalized_rank(freq_ranked, num)
        hot_rank = normalized_rank(hot_ranked, num)
        ratio = overdue[num].overdue_ratio

        score = (1 - freq_rank) * weights.frequency
        score += (1 - hot_rank) * weights.hot
        score += min(ratio / OVERDUE_RATIO_CAP, 1) * weights.overdue
        if pairs is not None:
            pair_pct = sum(p.percentage for p in PairAnalyzer.pairs_containing(pairs, num))
            score += min(pair_pct / 100, 1) * weights.pairs

        signals = NumberSignals(num, freq_rank, classification[num], ratio)
        scores.append(NumberScore(number=num, score=score, reasons=apply_rules(signals, rules)))

    return sorted(scores, key=lambda s: s.score, reverse=True)


def select_numbers(ranked: list[NumberScore], count: int, offset: int) -> list[NumberScore]:
    """
    Walk the top `count * 3 + offset` candidates starting at `offset`, then
    backfill from the top of that pool if the walk runs short.
    """
    pool = ranked[: count * 3 + offset]
    selected: list[NumberScore] = []
    used: set[int] = set()

    for candidate in pool[offset:]:
        if len(selected) >= count:
            break
        if candidate.number not in used:
            selected.append(candidate)
            used.add(candidate.number)

    for candidate in pool:
        if len(selected) >= count:
            break
        if candidate.number not in used:
            selected.append(candidate)
            used.add(candidate.number)

    return selected


class RecommendationEngine:
    """
    Blends the four analyzers under a strategy's weights and picks
    `count` distinct candidate sets for a game.
    """

    def __init__(
        self,
        game_config: GameConfig,
        pair_top_count: int = DEFAULT_TOP_COUNT,
        pair_window: int | None = None,
    ):
        self.game_config = game_config
        self.pair_analyzer = PairAnalyzer(top_count=pair_top_count, window=pair_window)

    def score_numbers(
        self, draws: Sequence[Draw], strategy: Strategy | str = Strategy.BALANCED
    ) -> tuple[list[NumberScore], list[NumberScore]]:
        """Return (main scores, bonus scores), each best first."""
        weights = strategy_profile(strategy).weights
        cfg = self.game_config

        main_scores = score_pool(
            draws, cfg.main_max, main_numbers, weights, MAIN_REASONING_RULES,
            pairs=self.pair_analyzer.analyze(draws),
        )
        bonus_scores: list[NumberScore] = []
        if cfg.bonus_max is not None:
            bonus_scores = score_pool(draws, cfg.bonus_max, bonus_numbers, weights, BONUS_REASONING_RULES)
        return main_scores, bonus_scores

    def recommend(
        self,
        draws: Sequence[Draw],
        strategy: Strategy | str = Strategy.BALANCED,
        count: int = 3,
    ) -> list[RecommendedSet]:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        profile = strategy_profile(strategy)
        main_scores, bonus_scores = self.score_numbers(draws, strategy)
        main_count = self.game_config.main_count

        sets: list[RecommendedSet] = []
        for i in range(count):
            selected = select_numbers(main_scores, main_count, offset=i * 2)
            bonus = bonus_scores[i % len(bonus_scores)].number if bonus_scores else None

            reasoning = [r for s in selected for r in s.reasons if r][:MAX_REASONS]
            if not reasoning:
                reasoning = [f"Selected using {profile.name.lower()} strategy analysis"]

            mean_score = sum(s.score for s in selected) / len(selected)
            sets.append(RecommendedSet(
                numbers=tuple(sorted(s.number for s in selected)),
                bonus_number=bonus,
                strategy=profile.name,
                reasoning=tuple(reasoning),
                confidence_score=max(0, min(100, _round_half_up(mean_score * 100))),
            ))

        log.info(
            f"{self.game_config.slug}: {len(sets)} {profile.name} sets from {len(draws)} draws"
        )
        return sets


def recommend(
    draws: Sequence[Draw],
    game_config: GameConfig,
    strategy: Strategy | str = Strategy.BALANCED,
    count: int = 3,
) -> list[RecommendedSet]:
    return RecommendationEngine(game_config).recommend(draws, strategy, count)

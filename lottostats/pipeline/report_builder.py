"""
lottostats/pipeline/report_builder.py
Build the statistics, recommendation, odds and quick-pick payloads a page renders.
History-based payloads are recomputed from the raw draws on each call.
"""
from __future__ import annotations

from typing import Any, Sequence

from lottostats.models.draw import Draw, bonus_numbers, sort_newest_first
from lottostats.models.game_odds import jackpot_odds, quick_pick
from lottostats.models.recommendation_engine import RecommendationEngine, Strategy, strategy_profile
from lottostats.models.statistical.frequency_analyzer import FrequencyAnalyzer
from lottostats.models.statistical.gap_analyzer import GapAnalyzer
from lottostats.models.statistical.hot_cold_analyzer import HotColdAnalyzer
from lottostats.models.statistical.overdue_analyzer import OverdueAnalyzer
from lottostats.models.statistical.pair_analyzer import PairAnalyzer
from lottostats.utils import draw_store
from lottostats.utils.config import PAIR_REPORT_TOP, PAIR_WINDOW, get_game_config
from lottostats.utils.logger import get_logger

log = get_logger("pipeline.report")


def _history(slug: str, draws: Sequence[Draw] | None) -> list[Draw]:
    if draws is None:
        return draw_store.load_draws(slug)
    return sort_newest_first(draws)


def build_statistics_report(slug: str, draws: Sequence[Draw] | None = None, top_n: int = 10) -> dict[str, Any]:
    """
    Frequency, hot/cold, overdue, gap and pair stats for the main pool,
    frequency and hot/cold for the bonus pool.
    """
    cfg = get_game_config(slug)
    history = _history(slug, draws)
    log.info(f"[STATS] {cfg.name}: {len(history)} draws")

    main_freq = FrequencyAnalyzer(cfg.main_max)
    main_hot_cold = HotColdAnalyzer(cfg.main_max)
    main_overdue = OverdueAnalyzer(cfg.main_max)

    frequency = main_freq.analyze(history)
    hot_cold = main_hot_cold.analyze(history)
    overdue = main_overdue.analyze(history)
    gaps = GapAnalyzer(cfg.main_max).analyze(history)
    pairs = PairAnalyzer(top_count=PAIR_REPORT_TOP, window=PAIR_WINDOW).analyze(history)

    report: dict[str, Any] = {
        "lottery": slug,
        "name": cfg.name,
        "total_draws": len(history),
        "latest_draw": history[0].to_dict() if history else None,
        "main": {
            "frequency": [f.to_dict() for f in frequency],
            "most_frequent": [f.to_dict() for f in main_freq.get_most_frequent(frequency, top_n)],
            "least_frequent": [f.to_dict() for f in main_freq.get_least_frequent(frequency, top_n)],
            "hot_cold": [h.to_dict() for h in hot_cold],
            "hot": [h.to_dict() for h in main_hot_cold.get_hot_numbers(hot_cold, top_n)],
            "cold": [h.to_dict() for h in main_hot_cold.get_cold_numbers(hot_cold, top_n)],
            "overdue": [o.to_dict() for o in main_overdue.get_most_overdue(overdue, top_n)],
            "gaps": [g.to_dict() for g in gaps],
            "pairs": [p.to_dict() for p in pairs],
        },
        "bonus": None,
    }

    if cfg.bonus_max is not None:
        report["bonus"] = {
            "frequency": [f.to_dict() for f in FrequencyAnalyzer(cfg.bonus_max, bonus_numbers).analyze(history)],
            "hot_cold": [h.to_dict() for h in HotColdAnalyzer(cfg.bonus_max, bonus_numbers).analyze(history)],
        }
    return report


def build_recommendation_report(slug: str, draws: Sequence[Draw] | None = None, count: int = 3) -> dict[str, Any]:
    """Recommended sets for every strategy."""
    cfg = get_game_config(slug)
    history = _history(slug, draws)
    engine = RecommendationEngine(cfg)

    strategies: dict[str, Any] = {}
    for strategy in Strategy:
        profile = strategy_profile(strategy)
        strategies[strategy.value] = {
            "name": profile.name,
            "description": profile.description,
            "sets": [s.to_dict() for s in engine.recommend(history, strategy, count)],
        }

    log.info(f"[RECOMMEND] {cfg.name}: {count} sets × {len(strategies)} strategies")
    return {"lottery": slug, "name": cfg.name, "total_draws": len(history), "strategies": strategies}


def build_odds_report(slug: str) -> dict[str, Any]:
    """Jackpot odds for a game; depends only on its number matrix."""
    cfg = get_game_config(slug)
    return {"lottery": slug, "name": cfg.name, "odds": jackpot_odds(cfg).to_dict()}


def build_quick_picks(slug: str, count: int = 1) -> dict[str, Any]:
    """`count` independent random tickets for a game."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    cfg = get_game_config(slug)
    picks = [quick_pick(cfg).to_dict() for _ in range(count)]
    log.info(f"[QUICK PICK] {cfg.name}: {len(picks)} tickets")
    return {"lottery": slug, "name": cfg.name, "picks": picks}

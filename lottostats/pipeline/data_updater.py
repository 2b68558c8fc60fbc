"""
lottostats/pipeline/data_updater.py
Refresh the stored draw history of a game from its SODA feed.
"""
from __future__ import annotations

from lottostats.crawlers.soda_crawler import SodaCrawler
from lottostats.utils import draw_store
from lottostats.utils.config import GAME_LABELS, get_game_config
from lottostats.utils.logger import get_logger

log = get_logger("pipeline.updater")


def update_game_data(slug: str, dry_run: bool = False) -> dict:
    """
    Fetch the full history and save it only when it differs from what is stored.
    Returns a summary dict for the CLI.
    """
    label = GAME_LABELS.get(slug, slug)
    log.info(f"[UPDATE] Fetching {label} data | dry_run={dry_run}")

    game_config = get_game_config(slug)
    crawler = SodaCrawler(game_config)
    draws = crawler.fetch_all()

    result = {"lottery": slug, "fetched": len(draws), "changed": False, "saved": False}
    if not draws:
        log.warning(f"No valid draws found for {label}")
        return result

    existing = draw_store.load_draws(slug)
    result["changed"] = existing != draws
    if not result["changed"]:
        log.info(f"No changes for {label}")
        return result

    if dry_run:
        log.info(f"[DRY RUN] Would save {len(draws)} draws for {label} (had {len(existing)})")
        return result

    draw_store.save_draws(slug, draws)
    result["saved"] = True
    log.info(f"[DONE] {label}: {len(existing)} → {len(draws)} draws, latest {draws[0].date}")
    return result

"""
lottostats/utils/draw_store.py
Draw history provider. JSON files under DATA_DIR by default,
the Supabase `lottery_results` table when DRAW_STORE_BACKEND=supabase.
Histories are always returned newest first.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from lottostats.models.draw import Draw, sort_newest_first
from lottostats.utils import config
from lottostats.utils.logger import get_logger

log = get_logger("draw_store")


def _data_path(slug: str) -> Path:
    return Path(config.DATA_DIR) / f"{slug}.json"


# ── JSON backend ──────────────────────────────────────────────────

def read_json(slug: str) -> dict[str, Any] | None:
    """Raw `{lottery, lastUpdated, draws}` document, or None if not saved yet."""
    path = _data_path(slug)
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def serialize(slug: str, draws: Sequence[Draw]) -> str:
    document = {
        "lottery": slug,
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
        "draws": [d.to_dict() for d in draws],
    }
    return json.dumps(document, indent=2)


def _load_json(slug: str) -> list[Draw]:
    document = read_json(slug)
    if document is None:
        log.warning(f"No stored draws for {slug} at {_data_path(slug)}")
        return []
    return [Draw.from_dict(d) for d in document.get("draws", [])]


def _save_json(slug: str, draws: Sequence[Draw]) -> None:
    path = _data_path(slug)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(serialize(slug, draws))
    log.info(f"Saved {len(draws)} draws to {path}")


# ── Supabase backend ──────────────────────────────────────────────

def _load_supabase(slug: str, limit: int | None) -> list[Draw]:
    from lottostats.utils import supabase_client as db

    rows = db.get_recent_results(slug, limit=limit)
    return [
        Draw(
            date=row["draw_date"],
            numbers=tuple(row["numbers"]),
            bonus_number=row.get("bonus_number"),
            multiplier=row.get("multiplier"),
        )
        for row in rows
    ]


def _save_supabase(slug: str, draws: Sequence[Draw]) -> None:
    from lottostats.utils import supabase_client as db

    db.upsert_lottery_results([
        {
            "lottery": slug,
            "draw_date": d.date,
            "numbers": list(d.numbers),
            "bonus_number": d.bonus_number,
            "multiplier": d.multiplier,
        }
        for d in draws
    ])


# ── Public API ────────────────────────────────────────────────────

def load_draws(slug: str, limit: int | None = None) -> list[Draw]:
    """Newest-first history for a game, optionally only the newest `limit` draws."""
    if config.DRAW_STORE_BACKEND == "supabase":
        draws = _load_supabase(slug, limit)
    elif config.DRAW_STORE_BACKEND == "json":
        draws = _load_json(slug)
    else:
        raise ValueError(f"Unknown DRAW_STORE_BACKEND: {config.DRAW_STORE_BACKEND}")

    draws = sort_newest_first(draws)
    return draws[:limit] if limit is not None else draws


def save_draws(slug: str, draws: Sequence[Draw]) -> None:
    draws = sort_newest_first(draws)
    if config.DRAW_STORE_BACKEND == "supabase":
        _save_supabase(slug, draws)
    elif config.DRAW_STORE_BACKEND == "json":
        _save_json(slug, draws)
    else:
        raise ValueError(f"Unknown DRAW_STORE_BACKEND: {config.DRAW_STORE_BACKEND}")

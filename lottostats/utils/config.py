"""
lottostats/utils/config.py
Load env vars and per-game config JSON files.
"""
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from lottostats.models.draw import GameConfig

load_dotenv()

ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = ROOT / "config" / "games"

# ── Logging ───────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR: str = os.getenv("LOG_DIR", "logs")
LOG_FILE: bool = os.getenv("LOG_FILE", "true").lower() in ("1", "true", "yes")

# ── Draw storage ──────────────────────────────────────────────────
DATA_DIR = Path(os.getenv("LOTTOSTATS_DATA_DIR", str(ROOT / "data")))
DRAW_STORE_BACKEND: str = os.getenv("DRAW_STORE_BACKEND", "json")  # json | supabase

# ── Supabase (only needed when DRAW_STORE_BACKEND=supabase) ──────
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

# ── NY Open Data (SODA) ──────────────────────────────────────────
SODA_APP_TOKEN: str = os.getenv("SODA_APP_TOKEN", "")
SODA_LIMIT: int = int(os.getenv("SODA_LIMIT", "50000"))

# ── Analysis windows ──────────────────────────────────────────────
PAIR_WINDOW: int = 200          # statistics page pairs: newest 200 draws
PAIR_REPORT_TOP: int = 15

# ── Games ─────────────────────────────────────────────────────────
GAME_CONFIG_FILES: dict[str, str] = {
    "powerball": "powerball.json",
    "mega-millions": "mega_millions.json",
}

GAME_LABELS: dict[str, str] = {
    "powerball": "Powerball",
    "mega-millions": "Mega Millions",
}

_game_config_cache: dict[str, GameConfig] = {}


def load_game_json(slug: str) -> dict[str, Any]:
    """Read the raw JSON config for a game."""
    filename = GAME_CONFIG_FILES.get(slug)
    if not filename:
        raise ValueError(f"Unknown game: {slug}")
    path = CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_game_config(slug: str) -> GameConfig:
    """Load and cache the GameConfig for a game slug."""
    if slug in _game_config_cache:
        return _game_config_cache[slug]
    raw = load_game_json(slug)
    source = raw.get("data_source", {})
    config = GameConfig(
        slug=slug,
        name=raw.get("name", GAME_LABELS.get(slug, slug)),
        main_count=raw["main_numbers"]["count"],
        main_max=raw["main_numbers"]["max"],
        bonus_max=(raw.get("bonus_number") or {}).get("max"),
        main_label=raw["main_numbers"].get("label", "Main"),
        bonus_label=(raw.get("bonus_number") or {}).get("label", "Bonus"),
        source_url=source.get("url", ""),
        bonus_field=source.get("bonus_field"),
    )
    _game_config_cache[slug] = config
    return config


def get_all_game_slugs() -> list[str]:
    return list(GAME_CONFIG_FILES.keys())

"""
lottostats/utils/supabase_client.py
Supabase wrapper for the `lottery_results` table.
"""
from __future__ import annotations

from typing import Any

from supabase import Client, create_client

from lottostats.utils.config import SUPABASE_KEY, SUPABASE_URL
from lottostats.utils.logger import get_logger

log = get_logger("supabase")

_client: Client | None = None


def get_client() -> Client:
    global _client
    if _client is None:
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set for the supabase draw store")
        _client = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _client


# ── lottery_results ───────────────────────────────────────────────

def upsert_lottery_results(records: list[dict[str, Any]]) -> int:
    """Upsert draw rows. Unique key: (lottery, draw_date)."""
    if not records:
        return 0
    db = get_client()
    resp = (
        db.table("lottery_results")
        .upsert(records, on_conflict="lottery,draw_date")
        .execute()
    )
    count = len(resp.data or [])
    log.info(f"Upserted {count} lottery_results rows")
    return count


def get_recent_results(lottery: str, limit: int | None = None) -> list[dict[str, Any]]:
    db = get_client()
    q = (
        db.table("lottery_results")
        .select("*")
        .eq("lottery", lottery)
        .order("draw_date", desc=True)
    )
    if limit is not None:
        q = q.limit(limit)
    resp = q.execute()
    return resp.data or []

"""
lottostats/crawlers/soda_crawler.py
Crawler for the NY Open Data (Socrata SODA) lottery datasets.
Powerball: bonus ball is the last value of `winning_numbers`.
Mega Millions: bonus ball is a separate `mega_ball` field.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from lottostats.crawlers.base_crawler import BaseCrawler
from lottostats.models.draw import Draw, GameConfig, sort_newest_first
from lottostats.utils.config import SODA_APP_TOKEN, SODA_LIMIT
from lottostats.utils.logger import get_logger

log = get_logger("crawler.soda")


class SodaCrawler(BaseCrawler):
    """Fetch draw history for one game from its SODA resource URL."""

    def __init__(self, game_config: GameConfig, limit: int = SODA_LIMIT, app_token: str = SODA_APP_TOKEN, **kwargs):
        super().__init__(game_config=game_config, **kwargs)
        if not game_config.source_url:
            raise ValueError(f"{game_config.slug}: no data source URL configured")
        self.url = game_config.source_url
        self.limit = limit
        if app_token:
            self.session.headers["X-App-Token"] = app_token

    # ── Core fetch ────────────────────────────────────────────────

    def fetch_all(self) -> list[Draw]:
        return self._fetch({"$limit": self.limit, "$order": "draw_date DESC"})

    def fetch_latest(self) -> Draw | None:
        draws = self._fetch({"$limit": 1, "$order": "draw_date DESC"})
        return draws[0] if draws else None

    def fetch_date_range(self, from_date: str, to_date: str) -> list[Draw]:
        where = f"draw_date between '{from_date}T00:00:00' and '{to_date}T23:59:59'"
        return self._fetch({"$limit": self.limit, "$order": "draw_date DESC", "$where": where})

    # ── Parsing ───────────────────────────────────────────────────

    def _fetch(self, params: dict[str, Any]) -> list[Draw]:
        resp = self._get(self.url, params=params)
        if resp is None:
            return []

        raw = resp.json()
        if not isinstance(raw, list):
            log.error(f"Unexpected response for {self.game_config.name}: expected a list, got {type(raw).__name__}")
            return []
        log.info(f"Received {len(raw)} records for {self.game_config.name}")
        return self.parse_records(raw)

    def parse_records(self, records: list[dict[str, Any]]) -> list[Draw]:
        """Parse + validate raw records, skipping bad rows. Result is newest first."""
        draws: list[Draw] = []
        skipped = 0
        for record in records:
            draw = self.parse_record(record, self.game_config)
            if draw is not None and self.validate_draw(draw):
                draws.append(draw)
            else:
                skipped += 1
        if skipped:
            log.warning(f"Skipped {skipped} invalid records for {self.game_config.name}")
        return sort_newest_first(draws)

    @staticmethod
    def parse_record(record: dict[str, Any], game_config: GameConfig) -> Draw | None:
        """Turn one SODA record into a Draw, or None if a field is missing or malformed."""
        draw_date = _parse_date(record.get("draw_date"))
        winning = record.get("winning_numbers")
        if not draw_date or not winning:
            return None

        try:
            values = [int(v) for v in str(winning).split()]
        except ValueError:
            return None

        main_count = game_config.main_count
        bonus_field = game_config.bonus_field
        bonus: int | None = None

        if bonus_field and record.get(bonus_field):
            if len(values) < main_count:
                return None
            try:
                bonus = int(record[bonus_field])
            except ValueError:
                return None
        elif game_config.has_bonus:
            if len(values) < main_count + 1:
                return None
            bonus = values[main_count]
        elif len(values) < main_count:
            return None

        multiplier = None
        if record.get("multiplier"):
            try:
                multiplier = int(record["multiplier"])
            except ValueError:
                log.debug(f"Ignoring bad multiplier {record['multiplier']!r} on {draw_date}")

        return Draw(
            date=draw_date,
            numbers=tuple(values[:main_count]),
            bonus_number=bonus,
            multiplier=multiplier,
        )


def _parse_date(text: Any) -> str | None:
    """'2024-01-15T00:00:00.000' → '2024-01-15'."""
    if not text:
        return None
    day = str(text).strip().split("T")[0]
    try:
        return datetime.strptime(day, "%Y-%m-%d").strftime("%Y-%m-%d")
    except ValueError:
        return None

"""
lottostats/crawlers/base_crawler.py
Abstract base crawler with retry logic and structural validation.
"""
from __future__ import annotations

import random
import time
from abc import ABC, abstractmethod

import requests

from lottostats.models.draw import Draw, GameConfig
from lottostats.utils.logger import get_logger

log = get_logger("crawler")


class BaseCrawler(ABC):
    """Abstract base class for all draw-history crawlers."""

    def __init__(self, game_config: GameConfig, max_retries: int = 3):
        self.game_config = game_config
        self.max_retries = max_retries
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "lottostats/1.0 (+https://data.ny.gov)",
            "Accept": "application/json",
        })

    # ── HTTP helpers ──────────────────────────────────────────────

    def _get(self, url: str, params: dict | None = None, timeout: int = 30) -> requests.Response | None:
        """GET with retry + exponential backoff."""
        for attempt in range(1, self.max_retries + 1):
            try:
                log.debug(f"GET {url} params={params} (attempt {attempt})")
                resp = self.session.get(url, params=params, timeout=timeout)
                resp.raise_for_status()
                return resp
            except requests.RequestException as exc:
                log.warning(f"Request failed (attempt {attempt}/{self.max_retries}): {exc}")
                if attempt < self.max_retries:
                    sleep_time = 2 ** attempt + random.uniform(0, 1)
                    time.sleep(sleep_time)
        log.error(f"All {self.max_retries} attempts failed for {url}")
        return None

    # ── Validation ────────────────────────────────────────────────

    def validate_draw(self, draw: Draw) -> bool:
        """
        Structural checks only: date shape, main count, duplicates, positive values.
        Values above today's ranges are kept; games changed their matrices over
        the years and the analyzers skip numbers outside 1..max themselves.
        """
        cfg = self.game_config
        nums = draw.numbers

        if len(draw.date) != 10 or draw.date[4] != "-" or draw.date[7] != "-":
            log.error(f"Bad draw date {draw.date!r}")
            return False
        if len(nums) != cfg.main_count:
            log.error(f"Expected {cfg.main_count} numbers, got {len(nums)}: {nums}")
            return False
        if len(set(nums)) != len(nums):
            log.error(f"Duplicate numbers: {nums}")
            return False
        if not all(n >= 1 for n in nums):
            log.error(f"Non-positive numbers: {nums}")
            return False
        if cfg.has_bonus and (draw.bonus_number is None or draw.bonus_number < 1):
            log.error(f"Missing or non-positive bonus: {draw.bonus_number}")
            return False

        return True

    # ── Abstract interface ────────────────────────────────────────

    @abstractmethod
    def fetch_all(self) -> list[Draw]:
        """Fetch the full available history, newest first."""
        ...

    @abstractmethod
    def fetch_date_range(self, from_date: str, to_date: str) -> list[Draw]:
        """Fetch all draws between from_date and to_date (YYYY-MM-DD), newest first."""
        ...

    @abstractmethod
    def fetch_latest(self) -> Draw | None:
        """Fetch the most recent draw."""
        ...

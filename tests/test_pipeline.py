"""tests/test_pipeline.py"""
import json
from unittest.mock import patch

import pytest

from lottostats.models.draw import Draw
from lottostats.utils import config, draw_store

HISTORY = [
    Draw("2024-01-15", (5, 11, 22, 23, 69), bonus_number=7, multiplier=2),
    Draw("2024-01-13", (1, 2, 3, 4, 5), bonus_number=26),
    Draw("2024-01-10", (1, 2, 30, 40, 50), bonus_number=7),
]


class TestDrawStore:
    @pytest.fixture(autouse=True)
    def _data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "DATA_DIR", tmp_path)
        monkeypatch.setattr(config, "DRAW_STORE_BACKEND", "json")
        self.data_dir = tmp_path

    def test_missing_file_is_empty_history(self):
        assert draw_store.load_draws("powerball") == []

    def test_save_and_load(self):
        draw_store.save_draws("powerball", list(reversed(HISTORY)))
        assert draw_store.load_draws("powerball") == HISTORY
        assert draw_store.load_draws("powerball", limit=2) == HISTORY[:2]

    def test_document_layout(self):
        draw_store.save_draws("powerball", HISTORY)
        with open(self.data_dir / "powerball.json", encoding="utf-8") as f:
            document = json.load(f)
        assert document["lottery"] == "powerball"
        assert "lastUpdated" in document
        assert document["draws"][0] == {
            "date": "2024-01-15", "numbers": [5, 11, 22, 23, 69], "bonusNumber": 7, "multiplier": 2,
        }

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setattr(config, "DRAW_STORE_BACKEND", "sqlite")
        with pytest.raises(ValueError):
            draw_store.load_draws("powerball")

    @patch("lottostats.utils.supabase_client.get_recent_results")
    def test_supabase_backend(self, mock_recent, monkeypatch):
        monkeypatch.setattr(config, "DRAW_STORE_BACKEND", "supabase")
        mock_recent.return_value = [
            {"draw_date": "2024-01-13", "numbers": [1, 2, 3, 4, 5], "bonus_number": 26, "multiplier": None},
            {"draw_date": "2024-01-15", "numbers": [5, 11, 22, 23, 69], "bonus_number": 7, "multiplier": 2},
        ]
        assert draw_store.load_draws("powerball") == HISTORY[:2]
        mock_recent.assert_called_once_with("powerball", limit=None)

    def test_zero_limit_is_empty(self):
        draw_store.save_draws("powerball", HISTORY)
        assert draw_store.load_draws("powerball", limit=0) == []

    @patch("lottostats.utils.supabase_client.get_recent_results")
    def test_supabase_zero_limit_passed_through(self, mock_recent, monkeypatch):
        monkeypatch.setattr(config, "DRAW_STORE_BACKEND", "supabase")
        mock_recent.return_value = []
        assert draw_store.load_draws("powerball", limit=0) == []
        mock_recent.assert_called_once_with("powerball", limit=0)


class TestDataUpdater:
    @patch("lottostats.pipeline.data_updater.draw_store")
    @patch("lottostats.pipeline.data_updater.SodaCrawler")
    def test_saves_when_changed(self, mock_crawler_cls, mock_store):
        mock_crawler_cls.return_value.fetch_all.return_value = HISTORY
        mock_store.load_draws.return_value = HISTORY[1:]

        from lottostats.pipeline.data_updater import update_game_data
        result = update_game_data("powerball")

        assert result == {"lottery": "powerball", "fetched": 3, "changed": True, "saved": True}
        mock_store.save_draws.assert_called_once_with("powerball", HISTORY)

    @patch("lottostats.pipeline.data_updater.draw_store")
    @patch("lottostats.pipeline.data_updater.SodaCrawler")
    def test_skips_unchanged(self, mock_crawler_cls, mock_store):
        mock_crawler_cls.return_value.fetch_all.return_value = HISTORY
        mock_store.load_draws.return_value = list(HISTORY)

        from lottostats.pipeline.data_updater import update_game_data
        result = update_game_data("powerball")

        assert result["changed"] is False
        mock_store.save_draws.assert_not_called()

    @patch("lottostats.pipeline.data_updater.draw_store")
    @patch("lottostats.pipeline.data_updater.SodaCrawler")
    def test_empty_fetch_keeps_existing(self, mock_crawler_cls, mock_store):
        mock_crawler_cls.return_value.fetch_all.return_value = []

        from lottostats.pipeline.data_updater import update_game_data
        result = update_game_data("mega-millions")

        assert result["fetched"] == 0
        mock_store.load_draws.assert_not_called()
        mock_store.save_draws.assert_not_called()

    @patch("lottostats.pipeline.data_updater.draw_store")
    @patch("lottostats.pipeline.data_updater.SodaCrawler")
    def test_dry_run(self, mock_crawler_cls, mock_store):
        mock_crawler_cls.return_value.fetch_all.return_value = HISTORY
        mock_store.load_draws.return_value = []

        from lottostats.pipeline.data_updater import update_game_data
        result = update_game_data("powerball", dry_run=True)

        assert result["changed"] is True
        assert result["saved"] is False
        mock_store.save_draws.assert_not_called()


class TestReportBuilder:
    def test_statistics_report(self):
        from lottostats.pipeline.report_builder import build_statistics_report
        report = build_statistics_report("powerball", draws=list(reversed(HISTORY)))

        assert report["total_draws"] == 3
        assert report["latest_draw"]["date"] == "2024-01-15"
        assert len(report["main"]["frequency"]) == 69
        assert report["main"]["frequency"][0]["number"] in (1, 2, 5)
        assert report["main"]["pairs"][0]["pair"] == [1, 2]
        assert len(report["bonus"]["frequency"]) == 26
        assert report["bonus"]["frequency"][0] == {
            "number": 7, "count": 2, "percentage": pytest.approx(66.67, abs=0.01),
            "last_drawn_date": "2024-01-15", "draws_since_last_drawn": 0,
        }

    def test_statistics_report_empty(self):
        from lottostats.pipeline.report_builder import build_statistics_report
        report = build_statistics_report("mega-millions", draws=[])
        assert report["latest_draw"] is None
        assert report["main"]["pairs"] == []
        assert all(f["count"] == 0 for f in report["main"]["frequency"])

    @patch("lottostats.pipeline.report_builder.draw_store")
    def test_recommendation_report_loads_history(self, mock_store):
        mock_store.load_draws.return_value = HISTORY

        from lottostats.pipeline.report_builder import build_recommendation_report
        report = build_recommendation_report("powerball", count=2)

        mock_store.load_draws.assert_called_once_with("powerball")
        assert set(report["strategies"]) == {"balanced", "trending", "contrarian"}
        for strat in report["strategies"].values():
            assert len(strat["sets"]) == 2
            assert all(len(s["numbers"]) == 5 for s in strat["sets"])

    def test_odds_report(self):
        from lottostats.pipeline.report_builder import build_odds_report
        report = build_odds_report("mega-millions")
        assert report["name"] == "Mega Millions"
        assert report["odds"]["total_combinations"] == 302_575_350

    def test_quick_picks(self):
        from lottostats.pipeline.report_builder import build_quick_picks
        report = build_quick_picks("powerball", count=4)
        assert len(report["picks"]) == 4
        for pick in report["picks"]:
            assert len(set(pick["numbers"])) == 5
            assert all(1 <= n <= 69 for n in pick["numbers"])
            assert 1 <= pick["bonus_number"] <= 26

    def test_quick_picks_negative_count(self):
        from lottostats.pipeline.report_builder import build_quick_picks
        with pytest.raises(ValueError):
            build_quick_picks("powerball", count=-1)


class TestFormatters:
    def test_format_date(self):
        from lottostats.utils.formatters import format_date
        assert format_date("2024-01-15") == "January 15, 2024"
        assert format_date("not-a-date") == "not-a-date"

    def test_numbers_and_percent(self):
        from lottostats.utils.formatters import format_currency, format_numbers, format_percentage
        assert format_numbers([5, 12], 3) == "05 12 + 03"
        assert format_percentage(12.345, 1) == "12.3%"
        assert format_currency(1234567) == "$1,234,567"

    def test_years_range(self):
        from lottostats.utils.formatters import years_range
        draws = HISTORY + [Draw("2022-06-01", (1, 2, 3, 4, 5))]
        assert years_range(draws) == [2024, 2022]


class TestLogger:
    def test_areas_share_package_root(self):
        from lottostats.utils.logger import ROOT_LOGGER, get_logger
        crawler = get_logger("crawler")
        soda = get_logger("crawler.soda")
        assert soda.name == "lottostats.crawler.soda"
        assert soda.parent is crawler
        assert soda.handlers == []
        assert get_logger("lottostats.crawler.soda") is soda
        assert get_logger().name == ROOT_LOGGER

    def test_root_configured_once(self):
        from lottostats.utils.logger import get_logger
        root = get_logger()
        handlers = list(root.handlers)
        get_logger("pipeline.report")
        assert root.handlers == handlers
        assert root.propagate is False

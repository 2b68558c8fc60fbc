"""tests/test_crawlers.py"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from lottostats.crawlers.soda_crawler import SodaCrawler
from lottostats.models.draw import Draw, GameConfig
from lottostats.utils.config import get_game_config

POWERBALL = GameConfig(
    slug="powerball", name="Powerball", main_count=5, main_max=69, bonus_max=26,
    source_url="https://data.ny.gov/resource/d6yy-54nr.json",
)
MEGA = GameConfig(
    slug="mega-millions", name="Mega Millions", main_count=5, main_max=70, bonus_max=25,
    source_url="https://data.ny.gov/resource/5xaw-6ayf.json", bonus_field="mega_ball",
)


class TestGameConfigFiles:
    def test_powerball_config(self):
        cfg = get_game_config("powerball")
        assert (cfg.main_count, cfg.main_max, cfg.bonus_max) == (5, 69, 26)
        assert cfg.bonus_field is None

    def test_mega_millions_config(self):
        cfg = get_game_config("mega-millions")
        assert (cfg.main_count, cfg.main_max, cfg.bonus_max) == (5, 70, 25)
        assert cfg.bonus_field == "mega_ball"

    def test_unknown_game(self):
        with pytest.raises(ValueError):
            get_game_config("lotto-max")


class TestSodaParsing:
    def test_powerball_bonus_from_winning_numbers(self):
        record = {
            "draw_date": "2024-01-15T00:00:00.000",
            "winning_numbers": "05 11 22 23 69 07",
            "multiplier": "2",
        }
        assert SodaCrawler.parse_record(record, POWERBALL) == Draw("2024-01-15", (5, 11, 22, 23, 69), 7, 2)

    def test_mega_bonus_from_separate_field(self):
        record = {
            "draw_date": "2024-01-16T00:00:00.000",
            "winning_numbers": "01 02 03 04 70",
            "mega_ball": "10",
        }
        draw = SodaCrawler.parse_record(record, MEGA)
        assert draw.numbers == (1, 2, 3, 4, 70)
        assert draw.bonus_number == 10
        assert draw.multiplier is None

    def test_missing_fields(self):
        assert SodaCrawler.parse_record({"winning_numbers": "1 2 3 4 5 6"}, POWERBALL) is None
        assert SodaCrawler.parse_record({"draw_date": "2024-01-15T00:00:00.000"}, POWERBALL) is None

    def test_non_numeric(self):
        record = {"draw_date": "2024-01-15T00:00:00.000", "winning_numbers": "05 xx 22 23 69 07"}
        assert SodaCrawler.parse_record(record, POWERBALL) is None

    def test_too_few_numbers(self):
        record = {"draw_date": "2024-01-15T00:00:00.000", "winning_numbers": "05 11 22 23 69"}
        assert SodaCrawler.parse_record(record, POWERBALL) is None

    def test_bad_date(self):
        record = {"draw_date": "15/01/2024", "winning_numbers": "05 11 22 23 69 07"}
        assert SodaCrawler.parse_record(record, POWERBALL) is None


class TestDrawValidation:
    def setup_method(self):
        self.crawler = SodaCrawler(POWERBALL)

    def test_valid(self):
        assert self.crawler.validate_draw(Draw("2024-01-15", (5, 11, 22, 23, 69), 7)) is True

    def test_wrong_count(self):
        assert self.crawler.validate_draw(Draw("2024-01-15", (5, 11, 22, 23), 7)) is False

    def test_duplicates(self):
        assert self.crawler.validate_draw(Draw("2024-01-15", (5, 5, 22, 23, 69), 7)) is False

    def test_non_positive_numbers(self):
        assert self.crawler.validate_draw(Draw("2024-01-15", (0, 11, 22, 23, 69), 7)) is False
        assert self.crawler.validate_draw(Draw("2024-01-15", (5, 11, 22, 23, 69), 0)) is False

    def test_missing_bonus(self):
        assert self.crawler.validate_draw(Draw("2024-01-15", (5, 11, 22, 23, 69))) is False

    def test_values_above_current_ranges_kept(self):
        # range checks belong to the analyzers; Powerball drew 1-35 red balls before October 2015
        assert self.crawler.validate_draw(Draw("2013-06-01", (5, 11, 22, 23, 70), 7)) is True
        assert self.crawler.validate_draw(Draw("2013-06-01", (5, 11, 22, 23, 59), 33)) is True

    def test_parse_records_keeps_older_matrix(self):
        records = [
            {"draw_date": "2024-01-15T00:00:00.000", "winning_numbers": "10 20 30 40 50 26"},
            {"draw_date": "2013-06-01T00:00:00.000", "winning_numbers": "05 11 22 23 59 33"},
        ]
        draws = self.crawler.parse_records(records)
        assert len(draws) == 2
        assert draws[1] == Draw("2013-06-01", (5, 11, 22, 23, 59), 33)

    def test_parse_records_skips_invalid_and_sorts(self):
        records = [
            {"draw_date": "2024-01-13T00:00:00.000", "winning_numbers": "01 02 03 04 05 06"},
            {"draw_date": "2024-01-15T00:00:00.000", "winning_numbers": "10 20 30 40 50 26"},
            {"draw_date": "2024-01-14T00:00:00.000", "winning_numbers": "01 01 03 04 05 06"},
            {"draw_date": "2024-01-12T00:00:00.000"},
        ]
        draws = self.crawler.parse_records(records)
        assert [d.date for d in draws] == ["2024-01-15", "2024-01-13"]


class TestSodaFetch:
    def setup_method(self):
        self.crawler = SodaCrawler(MEGA, app_token="token-123")

    def test_app_token_header(self):
        assert self.crawler.session.headers["X-App-Token"] == "token-123"

    def test_fetch_all(self):
        resp = MagicMock()
        resp.json.return_value = [
            {"draw_date": "2024-01-12T00:00:00.000", "winning_numbers": "01 02 03 04 05", "mega_ball": "3"},
            {"draw_date": "2024-01-16T00:00:00.000", "winning_numbers": "06 07 08 09 10", "mega_ball": "4"},
        ]
        with patch.object(self.crawler.session, "get", return_value=resp) as mock_get:
            draws = self.crawler.fetch_all()

        assert [d.date for d in draws] == ["2024-01-16", "2024-01-12"]
        params = mock_get.call_args.kwargs["params"]
        assert params["$order"] == "draw_date DESC"

    def test_fetch_date_range_filters(self):
        resp = MagicMock()
        resp.json.return_value = []
        with patch.object(self.crawler.session, "get", return_value=resp) as mock_get:
            assert self.crawler.fetch_date_range("2024-01-01", "2024-01-31") == []
        where = mock_get.call_args.kwargs["params"]["$where"]
        assert "2024-01-01T00:00:00" in where and "2024-01-31T23:59:59" in where

    def test_unexpected_payload(self):
        resp = MagicMock()
        resp.json.return_value = {"error": "bad query"}
        with patch.object(self.crawler.session, "get", return_value=resp):
            assert self.crawler.fetch_all() == []

    @patch("lottostats.crawlers.base_crawler.time.sleep")
    def test_retries_then_gives_up(self, mock_sleep):
        with patch.object(self.crawler.session, "get", side_effect=requests.ConnectionError("down")) as mock_get:
            assert self.crawler.fetch_latest() is None
        assert mock_get.call_count == self.crawler.max_retries
        assert mock_sleep.call_count == self.crawler.max_retries - 1

    def test_requires_source_url(self):
        cfg = GameConfig(slug="local", name="Local", main_count=3, main_max=10)
        with pytest.raises(ValueError):
            SodaCrawler(cfg)

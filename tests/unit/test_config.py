"""Tests for core.config: config.json loading and saving."""

import json
from decimal import Decimal

from investment_calculator.core.config import AppConfig, get_config, reset_config, save_config


class TestGetConfig:
    def test_defaults_without_file(self):
        cfg = get_config()
        assert cfg.withholding_rate == Decimal("0.15")
        assert cfg.forecast_top == 100
        assert cfg.benchmark_rate_factor == Decimal("0.98")

    def test_reads_file(self, isolated_config):
        isolated_config.write_text(json.dumps({
            "withholding_rate": "0.2",
            "request_timeout": 3,
            "log_level": "debug",
        }))
        cfg = get_config()
        assert cfg.withholding_rate == Decimal("0.2")
        assert cfg.request_timeout == 3.0
        assert cfg.log_level == "DEBUG"
        assert cfg.currency == "BRL"

    def test_malformed_file_falls_back(self, isolated_config):
        isolated_config.write_text("{not json")
        assert get_config() == AppConfig()

    def test_cached(self, isolated_config):
        first = get_config()
        isolated_config.write_text(json.dumps({"currency": "USD"}))
        assert get_config() is first


class TestSaveConfig:
    def test_round_trip(self, isolated_config):
        save_config(AppConfig(benchmark_rate_factor=Decimal("1.0"), forecast_top=50))
        reset_config()
        cfg = get_config()
        assert cfg.benchmark_rate_factor == Decimal("1.0")
        assert cfg.forecast_top == 50
        assert json.loads(isolated_config.read_text())["forecast_top"] == 50

"""Shared pytest fixtures for investment calculator tests."""

from decimal import Decimal

import pytest

from investment_calculator.core.config import set_config_path
from investment_calculator.external.rate_table import Indicator, StaticRateTableProvider


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Each test reads/writes its own config.json. Resets the cached config after."""
    path = tmp_path / "config.json"
    set_config_path(str(path))
    yield path
    set_config_path(None)


@pytest.fixture
def static_provider():
    """Flat 12% p.a. forecasts for both indicators, 2020–2060."""
    flat = {year: Decimal("12") for year in range(2020, 2061)}
    return StaticRateTableProvider({
        Indicator.INFLATION: dict(flat),
        Indicator.BENCHMARK: dict(flat),
    })

"""Forecast rate tables via the Banco Central do Brasil Focus survey (Olinda OData API)."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, Optional

import requests
from loguru import logger

from ..core.config import get_config
from ..core.exceptions import RateTableUnavailable
from ..core.models import ForecastRecord, RateTable


class Indicator(str, Enum):
    INFLATION = "IPCA"
    BENCHMARK = "Selic"


def latest_per_year(records: Iterable[ForecastRecord]) -> dict[int, ForecastRecord]:
    """Keep only the most recently observed record for each reference year."""
    latest: dict[int, ForecastRecord] = {}
    for rec in records:
        current = latest.get(rec.reference_year)
        if current is None or rec.observation_date > current.observation_date:
            latest[rec.reference_year] = rec
    return latest


class RateTableProvider(ABC):
    """Supplies year → annual forecast rate (%) for an indicator."""

    @abstractmethod
    def fetch_rate_table(self, indicator: Indicator) -> RateTable:
        """Return the table, or raise RateTableUnavailable."""
        ...


class StaticRateTableProvider(RateTableProvider):
    """Serves fixed tables from memory (offline use and tests)."""

    def __init__(self, tables: dict[Indicator, RateTable]):
        self.tables = tables
        self.calls: list[Indicator] = []

    def fetch_rate_table(self, indicator: Indicator) -> RateTable:
        self.calls.append(indicator)
        table = self.tables.get(indicator)
        if not table:
            raise RateTableUnavailable(indicator.value, "no static table configured")
        return dict(table)


class FocusRateTableProvider(RateTableProvider):
    """Fetches annual market expectations from the BCB Focus survey (free, no API key).

    Only reference years from the current year onward are requested. The
    benchmark (Selic) forecast is scaled once by benchmark_rate_factor to
    approximate the CDI, which trades slightly below the policy rate.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        top: Optional[int] = None,
        benchmark_rate_factor: Optional[Decimal] = None,
        today: Optional[date] = None,
    ):
        cfg = get_config()
        self.base_url = base_url or cfg.forecast_api_url
        self.timeout = timeout if timeout is not None else cfg.request_timeout
        self.top = top if top is not None else cfg.forecast_top
        self.benchmark_rate_factor = (
            benchmark_rate_factor if benchmark_rate_factor is not None
            else cfg.benchmark_rate_factor
        )
        self.today = today

    def _current_year(self) -> int:
        return (self.today or date.today()).year

    def build_params(self, indicator: Indicator) -> dict[str, str]:
        year = self._current_year()
        return {
            "$filter": (
                f"Indicador eq '{indicator.value}' and DataReferencia ge '{year}' "
                f"and Data ge '{year}-01-01'"
            ),
            "$orderby": "Data desc",
            "$top": str(self.top),
            "$format": "json",
        }

    @staticmethod
    def parse_record(item: dict) -> ForecastRecord:
        """Convert one OData item into a ForecastRecord.

        Raises:
            KeyError, ValueError, InvalidOperation: on a malformed item.
        """
        return ForecastRecord(
            indicator=item["Indicador"],
            reference_year=int(item["DataReferencia"]),
            observation_date=datetime.strptime(item["Data"][:10], "%Y-%m-%d").date(),
            average_rate=Decimal(str(item["Media"])),
        )

    def fetch_records(self, indicator: Indicator) -> list[ForecastRecord]:
        logger.debug(f"Requesting {indicator.value} forecasts from {self.base_url}")
        try:
            resp = requests.get(
                self.base_url,
                params=self.build_params(indicator),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            items = resp.json()["value"]
            return [self.parse_record(item) for item in items]
        except requests.RequestException as e:
            logger.warning(f"Forecast request for {indicator.value} failed: {e}")
            raise RateTableUnavailable(indicator.value, f"request failed: {e}") from e
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.warning(f"Malformed forecast payload for {indicator.value}: {e}")
            raise RateTableUnavailable(indicator.value, f"malformed response: {e}") from e

    def fetch_rate_table(self, indicator: Indicator) -> RateTable:
        year = self._current_year()
        records = [r for r in self.fetch_records(indicator) if r.reference_year >= year]
        latest = latest_per_year(records)
        if not latest:
            raise RateTableUnavailable(indicator.value, f"no forecasts for {year} onward")

        table: RateTable = {}
        for ref_year, rec in sorted(latest.items()):
            rate = rec.average_rate
            if indicator == Indicator.BENCHMARK:
                rate = (rate * self.benchmark_rate_factor).quantize(Decimal("0.001"))
            table[ref_year] = rate
        logger.debug(f"{indicator.value} rate table: {table}")
        return table

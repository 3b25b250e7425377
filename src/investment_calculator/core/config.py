"""Application configuration — loaded from config.json at project root."""

import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from loguru import logger

FOCUS_API_URL = (
    "https://olinda.bcb.gov.br/olinda/servico/Expectativas/versao/v1/odata/"
    "ExpectativasMercadoAnuais"
)


@dataclass
class AppConfig:
    withholding_rate: Decimal = Decimal("0.15")
    forecast_api_url: str = FOCUS_API_URL
    request_timeout: float = 10.0
    forecast_top: int = 100
    benchmark_rate_factor: Decimal = Decimal("0.98")
    currency: str = "BRL"
    log_level: str = "WARNING"


_DEFAULTS = AppConfig()
_cached: Optional[AppConfig] = None
_path_override: Optional[Path] = None


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: current working directory
    return Path.cwd()


def _config_path() -> Path:
    if _path_override is not None:
        return _path_override
    return _find_project_root() / "config.json"


def set_config_path(path: Optional[str]) -> None:
    """Point the loader at another config.json (None restores the default)."""
    global _path_override
    _path_override = Path(path) if path else None
    reset_config()


def reset_config() -> None:
    global _cached
    _cached = None


def get_config() -> AppConfig:
    global _cached
    if _cached is not None:
        return _cached
    path = _config_path()
    if not path.exists():
        _cached = AppConfig()
        return _cached
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        _cached = AppConfig(
            withholding_rate=Decimal(str(data.get("withholding_rate", _DEFAULTS.withholding_rate))),
            forecast_api_url=data.get("forecast_api_url", _DEFAULTS.forecast_api_url),
            request_timeout=float(data.get("request_timeout", _DEFAULTS.request_timeout)),
            forecast_top=int(data.get("forecast_top", _DEFAULTS.forecast_top)),
            benchmark_rate_factor=Decimal(
                str(data.get("benchmark_rate_factor", _DEFAULTS.benchmark_rate_factor))
            ),
            currency=data.get("currency", _DEFAULTS.currency),
            log_level=str(data.get("log_level", _DEFAULTS.log_level)).upper(),
        )
    except (OSError, ValueError, ArithmeticError, AttributeError) as e:
        logger.warning(f"Could not read {path}: {e}. Using default settings.")
        _cached = AppConfig()
    return _cached


def save_config(cfg: AppConfig) -> None:
    global _cached
    _cached = cfg
    data = {
        "withholding_rate": str(cfg.withholding_rate),
        "forecast_api_url": cfg.forecast_api_url,
        "request_timeout": cfg.request_timeout,
        "forecast_top": cfg.forecast_top,
        "benchmark_rate_factor": str(cfg.benchmark_rate_factor),
        "currency": cfg.currency,
        "log_level": cfg.log_level,
    }
    _config_path().write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

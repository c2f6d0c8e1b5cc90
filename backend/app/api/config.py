from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEV_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")
ANALYTICS_PERIODS = ("1_month", "3_months", "6_months", "1_year", "2_years", "all")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS")
    if raw is None:
        origins = list(DEV_ORIGINS)
    else:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        raise RuntimeError("CORS_ALLOW_ORIGINS must not be empty.")
    if not any(origin in origins for origin in DEV_ORIGINS):
        logger.warning("CORS allowlist does not include local dev origins: %s", origins)
    return origins


def contract_expiring_days() -> int:
    return _int_env("CONTRACT_EXPIRING_DAYS", 30)


def webhook_timeout_seconds() -> float:
    return _float_env("WEBHOOK_TIMEOUT_SECONDS", 10.0)


def analytics_default_period() -> str:
    period = os.getenv("ANALYTICS_DEFAULT_PERIOD", "6_months")
    if period not in ANALYTICS_PERIODS:
        logger.warning("Ignoring invalid ANALYTICS_DEFAULT_PERIOD=%r, using 6_months", period)
        return "6_months"
    return period


def auto_create_tables() -> bool:
    return os.getenv("AUTO_CREATE_TABLES") == "1"

# Runtime configuration
# Every knob comes from the environment so the CLI and tests share defaults.

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


DEFAULT_TAX_RATE = _env_float("SCRATCHER_TAX_RATE", 24.0)
IGNORE_UNDER_500 = _env_bool("SCRATCHER_IGNORE_UNDER_500", False)
APPLY_TAX = _env_bool("SCRATCHER_APPLY_TAX", False)

LOG_LEVEL = os.getenv("SCRATCHER_LOG_LEVEL", "INFO").upper()

FETCH_TIMEOUT = _env_float("SCRATCHER_FETCH_TIMEOUT", 30.0)
USER_AGENT = os.getenv(
    "SCRATCHER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36",
)

OTEL_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
SERVICE_NAME = "scratcher-ev"

import os
from typing import FrozenSet


def _truthy(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def api_base_url() -> str:
    return os.getenv("API_BASE_URL", "http://api:8000").rstrip("/")


def api_timeout_seconds() -> float:
    try:
        return float(os.getenv("API_TIMEOUT_SECONDS", "10"))
    except ValueError:
        return 10.0


def admin_token() -> str | None:
    token = os.getenv("ADMIN_TOKEN", "").strip()
    return token or None


def admin_telegram_ids() -> FrozenSet[int]:
    """Telegram user ids allowed to open the panel, from ADMIN_TELEGRAM_IDS."""
    raw = os.getenv("ADMIN_TELEGRAM_IDS", "")
    ids = set()
    for part in raw.split(","):
        part = part.strip()
        if part.lstrip("-").isdigit():
            ids.add(int(part))
    return frozenset(ids)


def log_json_enabled() -> bool:
    return _truthy(os.getenv("LOG_JSON"), default=True)

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from force_event_bot import config

logger = logging.getLogger(__name__)

EVENTS_PATH = "/admin/events"
FORCE_EVENT_PATH = "/admin/events/force"


def _build_headers() -> Dict[str, str]:
    headers: Dict[str, str] = {}
    token = config.admin_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _log_error_response(label: str, url: str, resp: httpx.Response) -> None:
    # Log response body to aid debugging (422 details, etc.)
    try:
        body_text = resp.text
    except Exception:
        body_text = None
    logger.error(
        label,
        extra={
            "url": url,
            "status_code": resp.status_code,
            "response_body": (body_text if body_text is not None else "<unavailable>"),
        },
    )


@retry(
    retry=retry_if_exception_type(httpx.TransportError),
    wait=wait_fixed(1),
    stop=stop_after_attempt(3),
    reraise=True,
)
async def api_get_one(path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    url = f"{config.api_base_url()}{path}"
    logger.info("API GET ONE", extra={"url": url})
    async with httpx.AsyncClient(timeout=config.api_timeout_seconds()) as client:
        resp = await client.get(url, params=params or {}, headers=_build_headers())
        logger.info("API GET ONE response", extra={"url": url, "status_code": resp.status_code})
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError:
            _log_error_response("API GET ONE error", url, resp)
            raise
        return resp.json()


async def api_post(path: str, json: Dict[str, Any]) -> Dict[str, Any]:
    # Not retried: forcing an event twice is not idempotent.
    url = f"{config.api_base_url()}{path}"
    logger.info("API POST", extra={"url": url})
    async with httpx.AsyncClient(timeout=config.api_timeout_seconds()) as client:
        resp = await client.post(url, json=json, headers=_build_headers())
        logger.info("API POST response", extra={"url": url, "status_code": resp.status_code})
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError:
            _log_error_response("API POST error", url, resp)
            raise
        if not resp.content:
            return {}
        return resp.json()


def _normalize_records(value: Any) -> list[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


async def fetch_panel_data() -> Dict[str, list[Dict[str, Any]]]:
    """Load categories and events from the game backend.

    Non-list fields become empty lists and non-mapping entries are dropped.
    """
    data = await api_get_one(EVENTS_PATH)
    if not isinstance(data, dict):
        logger.warning("Unexpected panel payload", extra={"payload_type": type(data).__name__})
        data = {}
    return {
        "categories": _normalize_records(data.get("categories")),
        "events": _normalize_records(data.get("events")),
    }


async def force_event(event_type: str, announce: bool) -> Dict[str, Any]:
    logger.info("Force event", extra={"event_type": event_type, "announce": announce})
    return await api_post(FORCE_EVENT_PATH, json={"type": event_type, "announce": bool(announce)})

"""
modules/tool_usage/catalog_client.py
-------------------------------------
HTTP client for the remote catalog (USE_STUB_CATALOG=false).

Endpoints (relative to CATALOG_BASE_URL):
    GET /hotels?destination=<name>      → {"hotels": [ {...}, ... ]}
    GET /activities?destination=<name>  → {"activities": [ {...}, ... ]}

Record shapes match modules/tool_usage/catalog_data.py.

The fetch is the only blocking call in itinerary generation, so it is retried
with exponential backoff on connection errors, timeouts and 5xx responses.
After the last attempt CatalogUnavailableError is raised; callers fall back to
the bundled catalog.
"""

from __future__ import annotations

import logging
import time
from functools import wraps

import requests

import config
from modules.errors import CatalogUnavailableError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = {500, 502, 503, 504}


def retry_with_backoff(max_retries: int | None = None, initial_delay: float | None = None):
    """
    Retry a `func(url, ...)` call on transient failures.

    Delays double after every failed attempt (0.5s, 1s, 2s with defaults).
    Defaults are read from config at call time.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(url: str, *args, **kwargs):
            retries = config.CATALOG_MAX_RETRIES if max_retries is None else max_retries
            delay = config.CATALOG_BACKOFF_SECONDS if initial_delay is None else initial_delay
            last_error: Exception | None = None

            for attempt in range(retries + 1):
                try:
                    return func(url, *args, **kwargs)
                except (requests.ConnectionError, requests.Timeout) as exc:
                    last_error = exc
                except requests.HTTPError as exc:
                    status = exc.response.status_code if exc.response is not None else None
                    if status not in _RETRYABLE_STATUS:
                        raise
                    last_error = exc

                if attempt < retries:
                    logger.warning(
                        "Catalog request failed (attempt %d/%d), retrying in %.1fs: %s",
                        attempt + 1, retries + 1, delay, last_error,
                    )
                    time.sleep(delay)
                    delay *= 2

            logger.error("Catalog request to %s failed after %d attempts", url, retries + 1)
            raise CatalogUnavailableError(url, retries + 1) from last_error

        return wrapper
    return decorator


@retry_with_backoff()
def _get_json(url: str, params: dict) -> dict:
    resp = requests.get(url, params=params, timeout=config.CATALOG_REQUEST_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def fetch_catalog(resource: str, destination: str) -> list[dict]:
    """
    Fetch raw `resource` records ("hotels" | "activities") for a destination.

    A 404 means the catalog has no such destination and returns [].
    Raises CatalogUnavailableError once retries are exhausted.
    """
    url = f"{config.CATALOG_BASE_URL.rstrip('/')}/{resource}"
    try:
        payload = _get_json(url, {"destination": destination})
    except requests.HTTPError as exc:
        if exc.response is not None and exc.response.status_code == 404:
            return []
        raise CatalogUnavailableError(url, 1) from exc
    return list(payload.get(resource, []))

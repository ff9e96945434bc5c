# ecofootprint/integrations/fetcher.py — product page download
from __future__ import annotations
import logging

import requests

from ..config import FETCH_TIMEOUT, USER_AGENT
from ..errors import FetchError

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": USER_AGENT}


def fetch_page(url: str, timeout: float = FETCH_TIMEOUT) -> str:
    """GET ``url`` and return the body. Non-2xx, timeouts and network errors raise FetchError."""
    logger.info("[fetch] GET %s", url)
    try:
        r = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.Timeout as e:
        logger.error("[fetch] timeout after %ss for %s", timeout, url)
        raise FetchError(None, f"Timed out fetching product page after {timeout}s") from e
    except requests.RequestException as e:
        logger.error("[fetch] request error for %s: %s", url, e)
        raise FetchError(None, "Failed to fetch product page") from e

    if not 200 <= r.status_code < 300:
        logger.error("[fetch] %s answered %s", url, r.status_code)
        raise FetchError(r.status_code, f"Failed to fetch product page (status {r.status_code})")
    return r.text

"""Client utilities for the Yandex Maps organisation search API."""

import logging
from typing import Any, Dict

import requests

logger = logging.getLogger(__name__)
_BASE_URL = "https://search-maps.yandex.ru/v1/"
REQUEST_TIMEOUT = 10


class YandexMapsError(RuntimeError):
    """Raised when the search API returns an error or an unexpected payload."""


def search_places(
    session: requests.Session,
    text: str,
    api_key: str,
    *,
    results: int = 20,
    lang: str = "ru_RU",
) -> Dict[str, Any]:
    params = {
        "apikey": api_key,
        "text": text,
        "type": "biz",
        "lang": lang,
        "results": results,
    }
    response = session.get(_BASE_URL, params=params, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    try:
        payload = response.json()
    except ValueError as exc:
        raise YandexMapsError("search response is not valid JSON") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("features"), list):
        keys = list(payload.keys())[:10] if isinstance(payload, dict) else type(payload).__name__
        logger.error("search_places returned no features list: keys=%s", keys)
        raise YandexMapsError("search response is missing the features list")
    return payload

"""Fetch and parse the promokodi.ru pizza coupon listing."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

LISTING_URL = "https://promokodi.ru/category/pitstsa/"
USER_AGENT = "PizzaCatalogBot/1.0"
REQUEST_TIMEOUT = 10

COUPON_ITEM_SELECTOR = ".coupon-item"
COUPON_TITLE_SELECTOR = ".coupon-title"
COUPON_CODE_SELECTOR = ".coupon-code"


class ScrapeError(RuntimeError):
    """Raised when the coupon listing cannot be fetched or parsed."""


class PlaywrightRenderer:
    """Thin wrapper around Playwright to render JavaScript-heavy pages."""

    def __init__(self, timeout_ms: int = REQUEST_TIMEOUT * 1000) -> None:
        self._playwright = None
        self._browser = None
        self._timeout_ms = timeout_ms

    def _ensure_browser(self) -> None:
        if self._playwright is None:
            from playwright.sync_api import sync_playwright

            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=True)

    def render(self, url: str) -> str:
        self._ensure_browser()
        page = self._browser.new_page()
        try:
            page.goto(url, wait_until="networkidle", timeout=self._timeout_ms)
            return page.content()
        finally:
            page.close()

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None


def fetch_coupon_page(
    session: requests.Session,
    url: str = LISTING_URL,
    *,
    renderer: Optional[PlaywrightRenderer] = None,
) -> str:
    """Return the listing HTML, rendered through Playwright when a renderer is given."""
    if renderer is not None:
        return renderer.render(url)

    response = session.get(
        url,
        timeout=REQUEST_TIMEOUT,
        allow_redirects=True,
        headers={"User-Agent": USER_AGENT, "Accept": "text/html,application/xhtml+xml"},
    )
    response.raise_for_status()
    content_type = response.headers.get("Content-Type", "").lower()
    if "text/html" not in content_type:
        raise ScrapeError(f"Unexpected content-type at {url}: {content_type or 'missing'}")
    return response.text


def parse_coupon_items(html: str) -> List[Tuple[str, str]]:
    """Extract raw ``(title, code)`` pairs from every coupon block on the page."""
    soup = BeautifulSoup(html, "html.parser")
    items: List[Tuple[str, str]] = []
    for block in soup.select(COUPON_ITEM_SELECTOR):
        title_node = block.select_one(COUPON_TITLE_SELECTOR)
        code_node = block.select_one(COUPON_CODE_SELECTOR)
        title = title_node.get_text() if title_node else ""
        code = code_node.get_text() if code_node else ""
        items.append((title, code))
    logger.debug("Parsed %d coupon blocks", len(items))
    return items

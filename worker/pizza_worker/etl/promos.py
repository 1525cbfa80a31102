"""Promo code collectors: a live scrape of the coupon listing and a static fallback."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import requests

from pizza_worker.core.config import Settings
from pizza_worker.etl.transform import PIZZA_TERM
from pizza_worker.models import CollectorResult, PromoRecord
from pizza_worker.vendors import promokodi

logger = logging.getLogger(__name__)

STATIC_PROMOS: Sequence[PromoRecord] = (
    PromoRecord(code="PIZZA10", description="Скидка 10% на первый заказ пиццы"),
    PromoRecord(code="DODO2024", description="Вторая пицца за полцены в Додо Пицца"),
    PromoRecord(code="FREEDELIVERY", description="Бесплатная доставка пиццы от 800 ₽"),
)


class ScrapedPromoCollector:
    """Scrape pizza coupons from promokodi.ru.

    Titles are matched against the pizza term case-insensitively, the same way
    vendor names are, so "Пицца ..." headlines are kept.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        url: str = promokodi.LISTING_URL,
        use_js_renderer: bool = False,
    ) -> None:
        self.session = session or requests.Session()
        self.url = url
        self.use_js_renderer = use_js_renderer

    def collect(self) -> CollectorResult:
        renderer = promokodi.PlaywrightRenderer() if self.use_js_renderer else None
        try:
            html = promokodi.fetch_coupon_page(self.session, self.url, renderer=renderer)
            items = promokodi.parse_coupon_items(html)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Unable to collect promo codes from %s: %s", self.url, exc)
            return CollectorResult.failed(f"promos: {exc}")
        finally:
            if renderer is not None:
                renderer.close()

        records: List[PromoRecord] = []
        for title, code in items:
            if not title or not code or PIZZA_TERM not in title.lower():
                continue
            code = code.strip()
            if not code:
                continue
            records.append(PromoRecord(code=code, description=title.strip()))

        logger.info("Collected %d pizza promo codes out of %d coupons", len(records), len(items))
        return CollectorResult(records=records)


class StaticPromoCollector:
    """Degraded fallback used when scraping is unavailable or unwanted."""

    def __init__(self, promos: Sequence[PromoRecord] = STATIC_PROMOS) -> None:
        self.promos = promos

    def collect(self) -> CollectorResult:
        return CollectorResult(records=[PromoRecord(p.code, p.description) for p in self.promos])


class DisabledPromoCollector:
    def collect(self) -> CollectorResult:
        return CollectorResult()


def build_promo_collector(settings: Settings, session: Optional[requests.Session] = None):
    if settings.promo_source == "static":
        return StaticPromoCollector()
    if settings.promo_source == "off":
        return DisabledPromoCollector()
    return ScrapedPromoCollector(session=session, use_js_renderer=settings.promo_use_js_renderer)

"""Collect pizza vendors for the configured city from Yandex Maps."""

import logging
from typing import List, Optional

import requests

from pizza_worker.core.config import DEFAULT_CITY
from pizza_worker.etl.pricing import PriceEstimator
from pizza_worker.etl.transform import PIZZA_TERM, feature_name, is_pizza_vendor, to_vendor_record
from pizza_worker.models import CollectorResult, VendorRecord
from pizza_worker.vendors import yandex_maps

logger = logging.getLogger(__name__)

SEARCH_TERM = "пицца"
RESULT_CAP = 20


class PlaceCollector:
    def __init__(
        self,
        api_key: str,
        *,
        session: requests.Session,
        city: str = DEFAULT_CITY,
        estimator: Optional[PriceEstimator] = None,
    ) -> None:
        self.api_key = api_key
        self.city = city
        self.estimator = estimator or PriceEstimator()
        self.session = session

    @property
    def query(self) -> str:
        return f"{SEARCH_TERM} {self.city}"

    def collect(self) -> CollectorResult:
        """Search once and return vendor-filtered records in provider order.

        Provider failures never propagate: they are logged and reported as a
        diagnostic alongside an empty record list.
        """
        logger.info("Running Yandex Maps search for query=%s", self.query)
        try:
            payload = yandex_maps.search_places(
                self.session,
                self.query,
                self.api_key,
                results=RESULT_CAP,
            )
        except (requests.RequestException, yandex_maps.YandexMapsError) as exc:
            logger.warning("Yandex Maps search failed: %s", exc)
            return CollectorResult.failed(f"places: {exc}")

        features = payload["features"]
        records: List[VendorRecord] = []
        diagnostics: List[str] = []
        for feature in features:
            name = feature_name(feature)
            if name is None:
                logger.debug("Skipping feature without a name: %s", str(feature)[:200])
                continue
            if not is_pizza_vendor(name):
                continue

            try:
                price = self.estimator.estimate_price(name)
                records.append(to_vendor_record(feature, city=self.city, price=price))
            except (TypeError, ValueError, AttributeError, KeyError) as exc:
                logger.warning("Skipping malformed feature %s: %s", name, exc)
                diagnostics.append(f"places[{name}]: {exc}")
                continue

        logger.info(
            "Fetched %d features, kept %d vendors matching %r or a known brand",
            len(features),
            len(records),
            PIZZA_TERM,
        )
        return CollectorResult(records=records, diagnostics=diagnostics)

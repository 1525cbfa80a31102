"""Estimated pizza prices by brand, with a random fallback."""

import random
from typing import Optional, Tuple

# Order matters: the first brand contained in the name wins.
BRAND_PRICES: Tuple[Tuple[str, int], ...] = (
    ("Додо", 349),
    ("Папа Джонс", 399),
    ("Пицца Суши", 299),
    ("Теремок", 250),
)
FALLBACK_PRICE_RANGE = (300, 499)


class PriceEstimator:
    """Map a vendor name to a whole-unit price.

    Unknown vendors get a price drawn from ``FALLBACK_PRICE_RANGE`` (inclusive)
    using the injected random source.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def estimate_price(self, name: str) -> int:
        for brand, price in BRAND_PRICES:
            if brand in name:
                return price
        low, high = FALLBACK_PRICE_RANGE
        return self._rng.randint(low, high)

"""Utilities for transforming Yandex Maps features into vendor records."""

from typing import Any, Dict, Optional
from urllib.parse import quote

from pizza_worker.models import VendorRecord

PIZZA_TERM = "пицц"
BRAND_TOKENS = ("Pizza", "Додо", "Папа Джонс", "Пицца Суши")
DELIVERY_PLACEHOLDER = "30-60 мин"
_MAP_URL = "https://yandex.ru/maps/?text="


def is_pizza_vendor(raw_name: Optional[str]) -> bool:
    """Generic term matches case-insensitively, brand tokens exactly as written."""
    if not raw_name:
        return False
    if PIZZA_TERM in raw_name.lower():
        return True
    return any(token in raw_name for token in BRAND_TOKENS)


def build_map_link(name: str, city: str) -> str:
    return _MAP_URL + quote(f"{name} {city}", safe="")


def to_vendor_record(feature: Dict[str, Any], *, city: str, price: int) -> VendorRecord:
    properties = feature.get("properties") or {}
    name = properties["name"]
    meta = properties.get("CompanyMetaData")
    if not isinstance(meta, dict):
        meta = {}

    return VendorRecord(
        name=name,
        estimated_price=price,
        map_link=build_map_link(name, city),
        address=_strip_or_none(properties.get("description") or properties.get("text")),
        rating=_safe_float(properties.get("rating")),
        review_count=_safe_int(properties.get("reviews")),
        delivery_estimate=DELIVERY_PLACEHOLDER,
        website_link=_strip_or_none(meta.get("url")),
        raw_snapshot=feature,
    )


def feature_name(feature: Any) -> Optional[str]:
    if not isinstance(feature, dict):
        return None
    properties = feature.get("properties")
    if not isinstance(properties, dict):
        return None
    name = properties.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    return name


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return max(int(value), 0)

    if isinstance(value, str):
        digits = "".join(ch for ch in value if ch.isdigit())
        if digits:
            return int(digits)
    return None

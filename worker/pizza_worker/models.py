"""Core data models shared by the pizza catalog refresh pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class VendorRecord:
    """Normalized snapshot of one pizza vendor returned by Yandex Maps."""

    name: str
    estimated_price: int
    map_link: str
    address: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    delivery_estimate: Optional[str] = None
    website_link: Optional[str] = None
    raw_snapshot: Optional[Dict[str, Any]] = field(default=None, repr=False)


@dataclass(slots=True)
class PromoRecord:
    code: str
    description: str


@dataclass
class CollectorResult:
    """Records produced by a collector plus any recovered failures."""

    records: List[Any] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @classmethod
    def failed(cls, diagnostic: str) -> "CollectorResult":
        return cls(records=[], diagnostics=[diagnostic])


@dataclass
class ReconcileReport:
    inserted: int = 0
    updated: int = 0
    failed: int = 0
    diagnostics: List[str] = field(default_factory=list)


@dataclass
class RunSummary:
    """Outcome of one refresh run.

    ``updated_count`` is the number of vendor records collected, not the number
    of rows that actually changed in storage.
    """

    success: bool
    updated_count: int
    promo_count: int = 0
    reconcile: ReconcileReport = field(default_factory=ReconcileReport)
    diagnostics: List[str] = field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": "Данные обновлены!",
            "updated": self.updated_count,
        }

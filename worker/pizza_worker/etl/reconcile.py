"""Merge freshly collected vendor records into the vendor store."""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from pizza_worker.models import ReconcileReport, VendorRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def reconcile(
    store,
    records: Iterable[VendorRecord],
    *,
    now: Optional[Callable[[], datetime]] = None,
) -> ReconcileReport:
    """Upsert each record by exact name, one lookup and one write at a time.

    ``store`` needs ``find_by_name``, ``update_by_name`` and ``insert``. A failure
    on one record is logged and counted; the rest of the batch still runs.
    """
    clock = now or _utcnow
    report = ReconcileReport()

    for record in records:
        try:
            existing = store.find_by_name(record.name)
            if existing is not None:
                store.update_by_name(record, last_updated=clock())
                report.updated += 1
            else:
                store.insert(record, last_updated=clock())
                report.inserted += 1
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to upsert %s: %s", record.name, exc)
            report.failed += 1
            report.diagnostics.append(f"reconcile[{record.name}]: {exc}")

    logger.info(
        "Reconciled vendors: inserted=%d updated=%d failed=%d",
        report.inserted,
        report.updated,
        report.failed,
    )
    return report

"""Database helpers for the pizza_places table."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import psycopg2

from pizza_worker.core.config import Settings
from pizza_worker.models import VendorRecord

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when a single read or write against the store fails."""


_SELECT_BY_NAME = """
SELECT id FROM pizza_places WHERE name = %(name)s LIMIT 1;
"""

_UPDATE_BY_NAME = """
UPDATE pizza_places SET
    price = %(price)s,
    rating = %(rating)s,
    reviews = %(reviews)s,
    address = %(address)s,
    last_updated = %(last_updated)s
WHERE name = %(name)s;
"""

_INSERT = """
INSERT INTO pizza_places (
    name,
    address,
    rating,
    reviews,
    yandex_link,
    price,
    delivery_time,
    website,
    last_updated
) VALUES (
    %(name)s,
    %(address)s,
    %(rating)s,
    %(reviews)s,
    %(yandex_link)s,
    %(price)s,
    %(delivery_time)s,
    %(website)s,
    %(last_updated)s
);
"""


def _prepare_params(record: VendorRecord, last_updated: datetime) -> Dict[str, Any]:
    return {
        "name": record.name,
        "address": record.address,
        "rating": record.rating,
        "reviews": record.review_count,
        "yandex_link": record.map_link,
        "price": record.estimated_price,
        "delivery_time": record.delivery_estimate,
        "website": record.website_link,
        "last_updated": last_updated,
    }


class VendorStore:
    """Point lookups and single-row writes against ``pizza_places``.

    One store is built per run. The connection is opened on first use so that a
    run with nothing to reconcile never connects, and every write is committed
    on its own.
    """

    def __init__(self, dsn: str, access_key: str, *, connect_timeout: int = 10) -> None:
        self._dsn = dsn
        self._access_key = access_key
        self._connect_timeout = connect_timeout
        self._conn = None
        self._connect_error: Optional[PersistenceError] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "VendorStore":
        return cls(settings.database_url, settings.database_key)

    def _connection(self):
        if self._connect_error is not None:
            raise self._connect_error
        if self._conn is None:
            try:
                self._conn = psycopg2.connect(
                    dsn=self._dsn,
                    password=self._access_key,
                    connect_timeout=self._connect_timeout,
                )
            except psycopg2.Error as exc:
                # Connect once per run; later records fail fast with the same error.
                self._connect_error = PersistenceError(f"Unable to connect to the vendor store: {exc}")
                raise self._connect_error from exc
            logger.info("Vendor store connection opened")
        return self._conn

    def _execute(self, sql: str, params: Dict[str, Any], *, fetch: bool = False):
        conn = self._connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                row = cur.fetchone() if fetch else None
            conn.commit()
            return row
        except psycopg2.Error as exc:
            # An aborted transaction would poison every later statement.
            try:
                conn.rollback()
            except psycopg2.Error:
                logger.warning("Rollback failed; discarding vendor store connection")
                self._conn = None
            raise PersistenceError(str(exc)) from exc

    def find_by_name(self, name: str) -> Optional[Any]:
        """Return the id of the row named exactly ``name``, or None."""
        row = self._execute(_SELECT_BY_NAME, {"name": name}, fetch=True)
        return row[0] if row else None

    def update_by_name(self, record: VendorRecord, *, last_updated: datetime) -> None:
        params = _prepare_params(record, last_updated)
        self._execute(_UPDATE_BY_NAME, params)
        logger.debug("Updated vendor %s", record.name)

    def insert(self, record: VendorRecord, *, last_updated: datetime) -> None:
        if not record.name:
            raise ValueError("name is required for insert")
        self._execute(_INSERT, _prepare_params(record, last_updated))
        logger.debug("Inserted vendor %s", record.name)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "VendorStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: D401
        self.close()

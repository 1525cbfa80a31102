import sys
from pathlib import Path

import pytest

# Ensure `pizza_worker` is importable when running pytest from the worker directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class InMemoryVendorStore:
    """Stand-in for ``VendorStore`` keyed by exact vendor name."""

    def __init__(self, fail_lookup_for=(), fail_update_for=(), fail_insert_for=()):
        self.rows = {}
        self.fail_lookup_for = set(fail_lookup_for)
        self.fail_update_for = set(fail_update_for)
        self.fail_insert_for = set(fail_insert_for)
        self.calls = []
        self._next_id = 1

    def find_by_name(self, name):
        self.calls.append(("find", name))
        if name in self.fail_lookup_for:
            raise RuntimeError(f"lookup failed for {name}")
        row = self.rows.get(name)
        return row["id"] if row else None

    def update_by_name(self, record, *, last_updated):
        self.calls.append(("update", record.name))
        if record.name in self.fail_update_for:
            raise RuntimeError(f"update failed for {record.name}")
        self.rows[record.name].update(
            price=record.estimated_price,
            rating=record.rating,
            reviews=record.review_count,
            address=record.address,
            last_updated=last_updated,
        )

    def insert(self, record, *, last_updated):
        self.calls.append(("insert", record.name))
        if record.name in self.fail_insert_for:
            raise RuntimeError(f"insert failed for {record.name}")
        self.rows[record.name] = {
            "id": self._next_id,
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
        self._next_id += 1

    def close(self):
        self.calls.append(("close", None))


@pytest.fixture
def memory_store():
    return InMemoryVendorStore()


@pytest.fixture
def make_memory_store():
    return InMemoryVendorStore

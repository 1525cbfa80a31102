"""Refresh job: collect pizza vendors and promos, then reconcile vendors into the store."""

import argparse
import dataclasses
import logging
import random
from typing import Any, Dict, Mapping, Optional, Tuple

import requests

from pizza_worker.core.config import PROMO_SOURCES, ConfigError, Settings, load_settings
from pizza_worker.core.db import VendorStore
from pizza_worker.etl.places import PlaceCollector
from pizza_worker.etl.pricing import PriceEstimator
from pizza_worker.etl.promos import build_promo_collector
from pizza_worker.etl.reconcile import reconcile
from pizza_worker.models import ReconcileReport, RunSummary

logger = logging.getLogger(__name__)


def run_pipeline(
    settings: Settings,
    *,
    session: Optional[requests.Session] = None,
    store=None,
    promo_collector=None,
    rng: Optional[random.Random] = None,
    dry_run: bool = False,
) -> RunSummary:
    settings.validate()

    owns_session = session is None
    http = session if session is not None else requests.Session()
    try:
        places = PlaceCollector(
            settings.yandex_api_key,
            session=http,
            city=settings.city,
            estimator=PriceEstimator(rng),
        ).collect()
        promos = (promo_collector or build_promo_collector(settings, session=http)).collect()
    finally:
        if owns_session:
            http.close()

    vendors = places.records
    logger.info("Collected %d vendors and %d promo codes", len(vendors), len(promos.records))

    if dry_run:
        for vendor in vendors:
            logger.info("[dry-run] %s price=%s rating=%s", vendor.name, vendor.estimated_price, vendor.rating)
        report = ReconcileReport()
    else:
        owns_store = store is None
        vendor_store = store if store is not None else VendorStore.from_settings(settings)
        try:
            report = reconcile(vendor_store, vendors)
        finally:
            if owns_store:
                vendor_store.close()

    diagnostics = places.diagnostics + promos.diagnostics + report.diagnostics
    if diagnostics:
        logger.warning("Run finished with %d recovered issue(s)", len(diagnostics))

    return RunSummary(
        success=True,
        updated_count=len(vendors),
        promo_count=len(promos.records),
        reconcile=report,
        diagnostics=diagnostics,
    )


def refresh_catalog(environ: Optional[Mapping[str, str]] = None, **kwargs: Any) -> Tuple[Dict[str, Any], int]:
    """Run one refresh and shape the result as a ``(json_body, status)`` pair."""
    try:
        settings = load_settings(environ)
        summary = run_pipeline(settings, **kwargs)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return {"error": str(exc)}, 500
    except Exception as exc:  # noqa: BLE001
        logger.exception("Refresh failed: %s", exc)
        return {"error": str(exc)}, 500
    return summary.to_response(), 200


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Refresh the pizza vendor catalog")
    parser.add_argument("--city", dest="city", help="Override CATALOG_CITY")
    parser.add_argument(
        "--promo-source",
        dest="promo_source",
        choices=PROMO_SOURCES,
        help="Override PROMO_SOURCE",
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Collect and log records without touching the store",
    )
    return parser


def main(argv=None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        overrides = {key: value for key, value in (("city", args.city), ("promo_source", args.promo_source)) if value}
        if overrides:
            settings = dataclasses.replace(settings, **overrides)
        summary = run_pipeline(settings, dry_run=args.dry_run)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except Exception as exc:  # pragma: no cover - CLI fallback
        logger.error("Refresh failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc

    logger.info(
        "Completed run: vendors=%d promos=%d inserted=%d updated=%d failed=%d",
        summary.updated_count,
        summary.promo_count,
        summary.reconcile.inserted,
        summary.reconcile.updated,
        summary.reconcile.failed,
    )


if __name__ == "__main__":
    main()

"""HTTP entrypoint that triggers a catalog refresh (scheduler / webhook friendly)."""

from __future__ import annotations

import logging
import os
from typing import Any

from flask import Flask, jsonify

from pizza_worker.jobs.refresh_catalog import refresh_catalog

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.json.ensure_ascii = False

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; never touches the store or the providers."""
    return (
        jsonify(
            {
                "status": "ok",
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.route("/api/scrape", methods=["GET", "POST"])
def scrape() -> Any:
    """Run one refresh synchronously and report the vendor count."""
    logger.info("Starting catalog refresh")
    body, status = refresh_catalog()
    return jsonify(body), status


def main() -> None:
    port = int(os.getenv("PORT") or 8080)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()

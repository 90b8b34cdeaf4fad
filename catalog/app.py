# catalog/app.py
import argparse
import asyncio
import logging

import uvicorn
from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram

from catalog import SERVICE_NAME
from catalog.models import CatalogFailure, DelayedIdentity, ServiceIdentity
from shared import health
from shared.config import CatalogSettings, log_level
from shared.errors import install_input_error_handler
from shared.identity import utc_timestamp
from shared.logging import setup_logging
from shared.metrics import instrument, metrics_response

logger = logging.getLogger(__name__)

MAX_DELAY_MS = 30_000
SIMULATED_FAILURE = "simulated failure"

REQUESTS = Counter("catalog_requests_total", "Total requests", ["endpoint", "status"])
LATENCY = Histogram("catalog_request_latency_ms", "Request latency in milliseconds", ["endpoint"],
                    buckets=(5, 25, 100, 250, 500, 1000, 2500, 5000, 10000, 30000))
DELAY_APPLIED = Histogram("catalog_delay_applied_ms", "Artificial delay applied by /api/slow",
                          buckets=(0, 100, 500, 1000, 3000, 5000, 10000, 30000))


def clamp_delay(ms: int) -> int:
    return max(0, min(ms, MAX_DELAY_MS))


async def pause(ms: int) -> None:
    await asyncio.sleep(ms / 1000.0)


def create_app(settings: CatalogSettings) -> FastAPI:
    app = FastAPI(title="catalog")
    app.state.settings = settings
    install_input_error_handler(app, SERVICE_NAME)
    instrument(app, REQUESTS, LATENCY)
    app.include_router(health.router)

    def identity() -> ServiceIdentity:
        return ServiceIdentity(
            service=SERVICE_NAME,
            version=settings.version,
            pod=settings.pod,
            timestamp=utc_timestamp(),
        )

    @app.get("/api/hello", response_model=ServiceIdentity)
    async def hello():
        return identity()

    @app.get("/api/slow", response_model=DelayedIdentity)
    async def slow(ms: int = Query(...)):
        clamped = clamp_delay(ms)
        logger.debug("Delaying response by %d ms (requested %d)", clamped, ms)
        await pause(clamped)
        DELAY_APPLIED.observe(clamped)
        # timestamp is taken after the wait
        return DelayedIdentity(**identity().model_dump(), delayed=clamped)

    @app.get("/api/fail", response_model=CatalogFailure)
    async def fail():
        logger.warning("Returning simulated failure from pod %s", settings.pod)
        body = CatalogFailure(
            service=SERVICE_NAME,
            error=SIMULATED_FAILURE,
            pod=settings.pod,
            timestamp=utc_timestamp(),
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return metrics_response()

    return app


def main(argv=None):
    p = argparse.ArgumentParser(description="catalog service")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=8080)
    args = p.parse_args(argv)
    setup_logging(log_level())
    settings = CatalogSettings.from_env()
    logger.info("Starting catalog version=%s pod=%s", settings.version, settings.pod)
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()

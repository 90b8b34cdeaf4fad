# gateway/app.py
import argparse
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram

from gateway import CATALOG_UNAVAILABLE, SERVICE_NAME
from gateway.client import CatalogClient, CatalogOk, CatalogResult
from gateway.models import AggregateResponse, ErrorDetail
from shared import health
from shared.config import GatewaySettings, log_level
from shared.errors import install_input_error_handler
from shared.identity import utc_timestamp
from shared.logging import setup_logging
from shared.metrics import instrument, metrics_response

logger = logging.getLogger(__name__)

REQUESTS = Counter("gateway_requests_total", "Total requests", ["endpoint", "status"])
LATENCY = Histogram("gateway_request_latency_ms", "Request latency in milliseconds", ["endpoint"],
                    buckets=(5, 25, 100, 250, 500, 1000, 2500, 5000, 10000, 30000))
CATALOG_CALLS = Counter("gateway_catalog_calls_total", "Outbound catalog calls", ["operation", "outcome"])


def render(result: CatalogResult, pod: str) -> JSONResponse:
    """Map a catalog call outcome onto the gateway's HTTP response."""
    if isinstance(result, CatalogOk):
        body = AggregateResponse(service=SERVICE_NAME, pod=pod, timestamp=utc_timestamp(),
                                 catalog=result.body)
        return JSONResponse(status_code=200, content=body.model_dump())
    body = ErrorDetail(service=SERVICE_NAME, pod=pod, timestamp=utc_timestamp(),
                       error=CATALOG_UNAVAILABLE, detail=result.detail)
    return JSONResponse(status_code=502, content=body.model_dump())


def outcome(result: CatalogResult) -> str:
    return "ok" if isinstance(result, CatalogOk) else "unavailable"


def create_app(settings: GatewaySettings, transport=None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.catalog = CatalogClient(settings.catalog_url, timeout=settings.timeout,
                                          transport=transport)
        yield
        await app.state.catalog.close()

    app = FastAPI(title="gateway", lifespan=lifespan)
    app.state.settings = settings
    install_input_error_handler(app, SERVICE_NAME)
    instrument(app, REQUESTS, LATENCY)
    app.include_router(health.router)

    @app.get("/api/aggregate", responses={200: {"model": AggregateResponse},
                                          502: {"model": ErrorDetail}})
    async def aggregate(request: Request):
        result = await app.state.catalog.hello(request.headers)
        CATALOG_CALLS.labels(operation="hello", outcome=outcome(result)).inc()
        return render(result, settings.pod)

    @app.get("/api/aggregate/slow", responses={200: {"model": AggregateResponse},
                                               502: {"model": ErrorDetail}})
    async def aggregate_slow(request: Request, ms: int = Query(...)):
        result = await app.state.catalog.slow(ms, request.headers)
        CATALOG_CALLS.labels(operation="slow", outcome=outcome(result)).inc()
        return render(result, settings.pod)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return metrics_response()

    return app


def main(argv=None):
    p = argparse.ArgumentParser(description="gateway service")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=8080)
    args = p.parse_args(argv)
    setup_logging(log_level())
    settings = GatewaySettings.from_env()
    logger.info("Starting gateway pod=%s catalog_url=%s timeout=%.1fs",
                settings.pod, settings.catalog_url, settings.timeout)
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()

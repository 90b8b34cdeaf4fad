# shared/metrics.py
import time

from fastapi import FastAPI, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response


def metrics_response() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


def instrument(app: FastAPI, requests: Counter, latency: Histogram) -> None:
    """Count every request by route template and status, and time it in ms."""

    @app.middleware("http")
    async def observe(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        endpoint = route_label(request)
        latency.labels(endpoint=endpoint).observe((time.perf_counter() - start) * 1000.0)
        requests.labels(endpoint=endpoint, status=str(response.status_code)).inc()
        return response

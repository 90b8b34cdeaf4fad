# shared/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_REQUEST = "invalid request"


def describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "query")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts) or "invalid request"


def install_input_error_handler(app: FastAPI, service: str) -> None:
    """Report malformed query parameters as 400 instead of FastAPI's 422."""

    @app.exception_handler(RequestValidationError)
    async def input_error(request: Request, exc: RequestValidationError):
        detail = describe(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, detail)
        return JSONResponse(
            status_code=400,
            content={"service": service, "error": INVALID_REQUEST, "detail": detail},
        )

# shared/health.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

# Probes answer while the process accepts connections; they never call downstream.
router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse)
async def healthz():
    return "OK"


@router.get("/readyz", response_class=PlainTextResponse)
async def readyz():
    return "OK"

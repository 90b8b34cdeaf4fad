# gateway/models.py
from typing import Any, Dict

from pydantic import BaseModel


class AggregateResponse(BaseModel):
    service: str
    pod: str
    timestamp: str
    catalog: Dict[str, Any]


class ErrorDetail(BaseModel):
    service: str
    pod: str
    timestamp: str
    error: str
    detail: str

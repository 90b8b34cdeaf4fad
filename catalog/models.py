# catalog/models.py
from pydantic import BaseModel


class ServiceIdentity(BaseModel):
    service: str
    version: str
    pod: str
    timestamp: str


class DelayedIdentity(ServiceIdentity):
    delayed: int


class CatalogFailure(BaseModel):
    service: str
    error: str
    pod: str
    timestamp: str

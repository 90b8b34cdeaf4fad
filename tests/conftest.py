"""
Shared fixtures: catalog and gateway apps built from injected settings, and a
recording stand-in for the catalog behind the gateway's outbound client.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from catalog.app import create_app as create_catalog_app
from gateway.app import create_app as create_gateway_app
from shared.config import CatalogSettings, GatewaySettings

CATALOG_POD = "catalog-v2-7f9c-abcde"
GATEWAY_POD = "gateway-5d8b-xyz12"


def identity_body(version="v2"):
    return {
        "service": "catalog",
        "version": version,
        "pod": CATALOG_POD,
        "timestamp": "2024-05-01T12:00:00.000000Z",
    }


class RecordingCatalog:
    """Answers like the catalog and keeps every request the gateway sent."""

    def __init__(self, handler=None):
        self.requests = []
        self.handler = handler or (lambda request: httpx.Response(200, json=identity_body()))

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)

    def transport(self):
        return httpx.MockTransport(self)


@pytest.fixture
def catalog_settings():
    return CatalogSettings(version="v2", pod=CATALOG_POD)


@pytest.fixture
def catalog_app(catalog_settings):
    return create_catalog_app(catalog_settings)


@pytest.fixture
def catalog_client(catalog_app):
    with TestClient(catalog_app) as client:
        yield client


@pytest.fixture
def gateway_settings():
    return GatewaySettings(catalog_url="http://catalog", pod=GATEWAY_POD)


@pytest.fixture
def recording_catalog():
    return RecordingCatalog()


@pytest.fixture
def gateway_client(gateway_settings, recording_catalog):
    app = create_gateway_app(gateway_settings, transport=recording_catalog.transport())
    with TestClient(app) as client:
        yield client

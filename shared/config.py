# shared/config.py
import os
import socket
from dataclasses import dataclass

DEFAULT_CATALOG_VERSION = "v1"
DEFAULT_CATALOG_URL = "http://catalog"
CATALOG_TIMEOUT_SECONDS = 10.0


def pod_name() -> str:
    # Kubernetes sets the container hostname to the pod name
    return socket.gethostname()


@dataclass(frozen=True)
class CatalogSettings:
    version: str = DEFAULT_CATALOG_VERSION
    pod: str = ""

    @classmethod
    def from_env(cls, environ=None) -> "CatalogSettings":
        env = os.environ if environ is None else environ
        return cls(
            version=env.get("CATALOG_VERSION", DEFAULT_CATALOG_VERSION),
            pod=pod_name(),
        )


@dataclass(frozen=True)
class GatewaySettings:
    catalog_url: str = DEFAULT_CATALOG_URL
    pod: str = ""
    timeout: float = CATALOG_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ=None) -> "GatewaySettings":
        env = os.environ if environ is None else environ
        return cls(
            catalog_url=env.get("CATALOG_URL", DEFAULT_CATALOG_URL).rstrip("/"),
            pod=pod_name(),
        )


def log_level(environ=None) -> str:
    env = os.environ if environ is None else environ
    return env.get("LOG_LEVEL", "INFO").upper()

"""
Outbound calls from the gateway to the catalog service.

Every call returns a ``CatalogResult`` instead of raising: either the decoded
catalog body or a ``CatalogUnavailable`` carrying a readable cause. Timeouts,
refused connections, non-2xx statuses and undecodable bodies all end up as
``CatalogUnavailable``. There are no retries here; the mesh owns those.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from shared.propagation import outbound_headers, request_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogOk:
    body: Dict[str, Any]


@dataclass(frozen=True)
class CatalogUnavailable:
    detail: str


CatalogResult = Union[CatalogOk, CatalogUnavailable]


def failure_detail(exc: Exception) -> str:
    # some httpx timeouts carry an empty message
    text = str(exc).strip()
    return text or exc.__class__.__name__


class CatalogClient:
    def __init__(self, base_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def hello(self, inbound_headers: Mapping[str, str]) -> CatalogResult:
        return await self._get("/api/hello", inbound_headers)

    async def slow(self, ms: int, inbound_headers: Mapping[str, str]) -> CatalogResult:
        # ms is passed through untouched; the catalog clamps it
        return await self._get("/api/slow", inbound_headers, params={"ms": ms})

    async def _get(self, path: str, inbound_headers: Mapping[str, str],
                   params: Optional[Dict[str, Any]] = None) -> CatalogResult:
        client = await self._get_client()
        try:
            # httpx timeouts are per phase and a trickled body resets the read
            # timeout, so the whole exchange gets one deadline on top
            body = await asyncio.wait_for(
                self._fetch(client, path, params, outbound_headers(inbound_headers)),
                self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Catalog call %s exceeded %.1fs (request_id=%s)",
                           path, self.timeout, request_id(inbound_headers))
            return CatalogUnavailable(detail=f"catalog did not answer within {self.timeout:g}s")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Catalog call %s failed (request_id=%s): %s: %s",
                           path, request_id(inbound_headers), e.__class__.__name__, e)
            return CatalogUnavailable(detail=failure_detail(e))
        if not isinstance(body, dict):
            logger.warning("Catalog call %s returned %s instead of an object",
                           path, type(body).__name__)
            return CatalogUnavailable(detail=f"unexpected catalog response: {type(body).__name__}")
        return CatalogOk(body=body)

    @staticmethod
    async def _fetch(client: httpx.AsyncClient, path: str, params: Optional[Dict[str, Any]],
                     headers: Dict[str, str]) -> Any:
        r = await client.get(path, params=params, headers=headers)
        r.raise_for_status()
        return r.json()

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

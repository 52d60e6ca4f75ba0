"""
httpx-backed transport.

Opens a short-lived AsyncClient per call unless a shared client is injected.
Every httpx failure, a malformed URL included, is re-raised as
TransportError; nothing is retried.
"""

import logging
from typing import Optional

import httpx

from wxpay.errors import TransportError
from wxpay.transport.base import Transport

logger = logging.getLogger("wxpay.transport")

XML_HEADERS = {"Content-Type": "text/xml; charset=utf-8"}


class HttpxTransport(Transport):
    def __init__(
        self,
        timeout_seconds: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def post(self, url: str, body: bytes) -> bytes:
        try:
            if self._client is not None:
                response = await self._client.post(url, content=body, headers=XML_HEADERS)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(url, content=body, headers=XML_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("POST %s failed: %s", url, e)
            raise TransportError(f"POST {url} failed: {e}", url=url) from e

        logger.debug(
            "POST %s -> %d (%d bytes)", url, response.status_code, len(response.content)
        )
        return response.content

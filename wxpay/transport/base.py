"""
Abstract transport interface.

The orchestrator only needs "send these bytes to this URL, give me the
response bytes back". The HTTP status is not inspected: a non-2xx answer
with a parseable body is handled like any other response.
"""

from abc import ABC, abstractmethod


class Transport(ABC):
    """Abstract base class for the HTTP collaborator."""

    @abstractmethod
    async def post(self, url: str, body: bytes) -> bytes:
        """
        POST `body` as the entire request payload and return the entire
        response payload.

        Raises:
            TransportError: The round trip could not be completed.
        """
        ...

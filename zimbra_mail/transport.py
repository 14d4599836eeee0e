"""HTTP transport: the one place that talks to the network."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol

import httpx

from zimbra_mail.config import HTTP_TIMEOUT_SECONDS
from zimbra_mail.errors import TransportError
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.transport")


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP answer; status is not interpreted here."""

    status_code: int
    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Send bytes, get bytes back. Used for SOAP calls, uploads and content fetches alike."""

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        content: bytes | None = None,
    ) -> TransportResponse:
        """Perform one request. Raises TransportError only when no response was obtained."""
        ...


class HttpxTransport:
    """Synchronous transport backed by an ``httpx.Client``."""

    def __init__(self, client: httpx.Client | None = None, timeout: float = HTTP_TIMEOUT_SECONDS):
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        content: bytes | None = None,
    ) -> TransportResponse:
        try:
            response = self._client.request(method, url, headers=dict(headers), content=content)
        except httpx.HTTPError as e:
            logger.warning("transport.error", method=method, url=url, error_type=type(e).__name__)
            raise TransportError(f"{method} {url} failed: {e}") from e
        logger.debug("transport.response", method=method, url=url, status_code=response.status_code)
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

"""HTTP client for the TFS REST API."""

import base64
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import structlog

from tfsgit.core.exceptions import TransportError

logger = structlog.get_logger(__name__)

USER_AGENT = "curl/7.79.1"

# Error statuses whose body carries a readable message.
ACCEPTED_STATUSES = frozenset({200, 400, 401, 404})


class TFSClient:
    """Issues authenticated GET requests against a TFS server.

    Network failures and unexpected statuses raise ``TransportError``.
    Bad request, unauthorized and not found responses are returned so the
    caller can read the error message out of the body.
    """

    def __init__(
        self,
        cred: str,
        timeout: float = 5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        token = base64.b64encode(cred.encode("utf-8")).decode("ascii")
        self._client = httpx.Client(
            headers={
                "User-Agent": USER_AGENT,
                "Authorization": f"Basic {token}",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "TFSClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(self, url: str) -> httpx.Response:
        """GET ``url`` and return the fully read response."""
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__, details={"url": url}) from e
        self._check_status(response, url)
        return response

    @contextmanager
    def stream(self, url: str) -> Iterator[httpx.Response]:
        """GET ``url`` without reading the body up front."""
        try:
            with self._client.stream("GET", url) as response:
                self._check_status(response, url)
                yield response
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__, details={"url": url}) from e

    @staticmethod
    def _check_status(response: httpx.Response, url: str) -> None:
        if response.status_code not in ACCEPTED_STATUSES:
            raise TransportError(
                f"failed to fetch data: {response.status_code} {response.reason_phrase}",
                details={"url": url, "status": response.status_code},
            )
        if response.status_code != 200:
            logger.debug("Remote returned error status", status=response.status_code, url=url)

"""LNURL client — fetches the manifest behind a payment destination.

One GET per call against the destination URL; the body is parsed into one of
the LUD documents and only a pay request is accepted. There is no caching and
no retry; callers that need either must call again.
"""

from __future__ import annotations

import logging

import httpx
from lnurl import LnurlPayResponse

from lnaddrd.errors.lnurl_errors import TransportError, WrongManifestKindError
from lnaddrd.lnurl.models import ManifestFormatError, manifest_kind, parse_manifest

logger = logging.getLogger(__name__)


class LnurlClient:
    """Async HTTP client for outgoing LNURL requests.

    Usage::

        client = LnurlClient(timeout=10.0)
        await client.connect()
        try:
            manifest = await client.fetch_manifest(destination.url())
        finally:
            await client.close()
    """

    def __init__(self, *, timeout: float = 10.0, user_agent: str = "lnaddrd/0.1") -> None:
        """Initialize the LNURL client.

        Args:
            timeout: Per-request timeout in seconds; bounds connect, read and write.
            user_agent: ``User-Agent`` header sent with every request.
        """
        self._client: httpx.AsyncClient | None = None
        self._timeout = timeout
        self._user_agent = user_agent

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            headers={"User-Agent": self._user_agent, "Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    async def fetch_manifest(self, url: str) -> LnurlPayResponse:
        """Fetch and validate the pay manifest served at *url*.

        Args:
            url: The destination's resolved endpoint.

        Returns:
            The parsed pay manifest.

        Raises:
            TransportError: If the request fails, times out, returns a non-2xx
                status, or the body is not a recognisable LNURL document.
            WrongManifestKindError: If the body is a withdraw or channel request.
        """
        client = self._ensure_connected()

        try:
            response = await client.get(url)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("LNURL request to %s failed: %s", url, exc)
            msg = f"LNURL request failed: {exc}"
            raise TransportError(msg, url=url) from exc
        except ValueError as exc:
            logger.warning("LNURL response from %s is not JSON", url)
            msg = "LNURL response is not valid JSON"
            raise TransportError(msg, url=url) from exc

        try:
            manifest = parse_manifest(body)
        except ManifestFormatError as exc:
            logger.warning("LNURL response from %s rejected: %s", url, exc)
            raise TransportError(str(exc), url=url) from exc

        if not isinstance(manifest, LnurlPayResponse):
            kind = manifest_kind(manifest) or type(manifest).__name__
            logger.info("LNURL endpoint %s returned %s, expected payRequest", url, kind)
            raise WrongManifestKindError(kind, url=url)

        return manifest

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Return the HTTP client, raising if not connected."""
        if self._client is None:
            msg = "LnurlClient is not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

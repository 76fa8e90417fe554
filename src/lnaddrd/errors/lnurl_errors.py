"""LNURL protocol errors.

``TransportError`` means the remote could not be reached or answered with
something unusable; ``WrongManifestKindError`` means it answered with a valid
LNURL document that is not a pay request.
"""

from __future__ import annotations

from lnaddrd.errors.lnaddr_errors import LnaddrError


class LnurlError(LnaddrError):
    """Base class for errors from the outbound LNURL request."""


class TransportError(LnurlError):
    """Connection error, timeout, bad status or malformed body."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message, status_code=502, code="lnurl-transport")
        self.url = url


class WrongManifestKindError(LnurlError):
    """Remote returned a withdraw or channel document instead of a pay request."""

    def __init__(self, kind: str, *, url: str = "") -> None:
        super().__init__(
            f"invalid LNURL type: {kind}", status_code=502, code="lnurl-wrong-kind"
        )
        self.kind = kind
        self.url = url

"""Payment destinations — where a lightning address forwards to.

A destination is one of two variants:

- ``RawDestination`` — a bech32 LNURL (``LNURL1...``) that embeds the
  endpoint URL directly.
- ``AliasDestination`` — another lightning address (``user@domain``),
  resolved by convention to ``https://{domain}/.well-known/lnurlp/{user}``.

Both variants round-trip through their text form:
``parse_destination(d.to_text()) == d``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

import lnurl
from lnurl.exceptions import InvalidLnurl, InvalidUrl

from lnaddrd.errors.definitions import InvalidDestinationError

LNURL_HRP = "lnurl"

# Local part of a user@domain alias (LUD-16 characters, either case)
_ALIAS_USER = re.compile(r"[A-Za-z0-9._+-]+")

# Domain part: DNS hostname with an optional port
_HOST_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_ALIAS_DOMAIN = re.compile(rf"{_HOST_LABEL}(?:\.{_HOST_LABEL})*(?::[0-9]{{1,5}})?")
_MAX_HOSTNAME = 253


# ---------------------------------------------------------------------------
# Bech32 LNURL codec
# ---------------------------------------------------------------------------


def decode_lnurl(text: str) -> str:
    """Decode a bech32 LNURL into the URL it embeds.

    Args:
        text: The encoded LNURL, upper or lower case.

    Returns:
        The embedded ``https`` (or ``http`` onion) URL.

    Raises:
        InvalidDestinationError: If the string is not a valid LNURL.
    """
    if text.lower() != text and text.upper() != text:
        raise InvalidDestinationError("mixed-case bech32 string")
    if not text.lower().startswith(LNURL_HRP + "1"):
        raise InvalidDestinationError("not a bech32 LNURL")
    try:
        url = str(lnurl.decode(text))
    except (InvalidLnurl, InvalidUrl, ValueError) as exc:
        raise InvalidDestinationError(f"invalid LNURL: {exc}") from exc
    _validate_endpoint(url)
    return url


def encode_lnurl(url: str) -> str:
    """Encode a URL as an upper-case bech32 LNURL.

    Raises:
        InvalidDestinationError: If the URL is not an acceptable LNURL endpoint.
    """
    _validate_endpoint(url)
    try:
        encoded = lnurl.encode(url)
    except (InvalidUrl, InvalidLnurl, ValueError) as exc:
        raise InvalidDestinationError(f"cannot encode LNURL endpoint: {url}") from exc
    return str(encoded.bech32).upper()


def _validate_endpoint(url: str) -> None:
    """LNURL endpoints must be https, except for Tor hidden services."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if not host:
        raise InvalidDestinationError("LNURL endpoint has no host")
    if parts.scheme == "https":
        return
    if parts.scheme == "http" and host.endswith(".onion"):
        return
    raise InvalidDestinationError(f"LNURL endpoint must use https: {url}")


# ---------------------------------------------------------------------------
# Destination variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawDestination:
    """A bech32 LNURL stored exactly as it was supplied.

    Attributes:
        encoded: The LNURL string.
    """

    encoded: str

    @classmethod
    def from_string(cls, raw: str) -> RawDestination:
        """Validate and wrap an LNURL string.

        Raises:
            InvalidDestinationError: If *raw* does not decode.
        """
        decode_lnurl(raw)
        return cls(encoded=raw)

    def url(self) -> str:
        """Return the endpoint embedded in the LNURL."""
        return decode_lnurl(self.encoded)

    def to_text(self) -> str:
        return self.encoded

    def __str__(self) -> str:
        return self.encoded


@dataclass(frozen=True, slots=True)
class AliasDestination:
    """Another lightning address the record forwards to.

    Attributes:
        user: The local part (before ``@``).
        domain: The domain part (after ``@``).
    """

    user: str
    domain: str

    @classmethod
    def from_string(cls, raw: str) -> AliasDestination:
        """Split a ``user@domain`` string.

        Raises:
            InvalidDestinationError: If *raw* does not contain exactly one ``@``
                separating a LUD-16 user name from a DNS host name.
        """
        parts = raw.split("@")
        if len(parts) != 2:
            raise InvalidDestinationError(
                "invalid destination payment address, neither lnurl nor lnaddress"
            )
        user, domain = parts
        if (
            not _ALIAS_USER.fullmatch(user)
            or len(domain) > _MAX_HOSTNAME
            or not _ALIAS_DOMAIN.fullmatch(domain)
        ):
            raise InvalidDestinationError(f"invalid lightning address: {raw}")
        return cls(user=user, domain=domain)

    def url(self) -> str:
        """Return the LUD-16 well-known endpoint for this address."""
        return f"https://{self.domain}/.well-known/lnurlp/{self.user}"

    def to_text(self) -> str:
        return f"{self.user}@{self.domain}"

    def __str__(self) -> str:
        return self.to_text()


Destination = RawDestination | AliasDestination


def parse_destination(text: str) -> Destination:
    """Parse a destination from its text form.

    An LNURL is tried first; anything that does not decode must be a
    ``user@domain`` alias.

    Raises:
        InvalidDestinationError: If *text* is neither.
    """
    try:
        return RawDestination.from_string(text)
    except InvalidDestinationError:
        return AliasDestination.from_string(text)

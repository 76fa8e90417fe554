"""LNURL response documents.

The remote endpoint behind a destination answers with one of three LUD
documents, told apart by their ``tag`` field:

- ``payRequest`` — LUD-06 pay manifest (the only kind this service forwards)
- ``withdrawRequest`` — LUD-03 withdraw request
- ``channelRequest`` — LUD-02 channel request

Validation is done by the ``lnurl`` library's response models
(``LnurlPayResponse`` checks the callback URL, the sendable range and the
metadata JSON). ``parse_manifest`` adds the tag and type checks the models
leave lenient.
"""

from __future__ import annotations

import enum
from typing import Any

from lnurl import (
    LnurlChannelResponse,
    LnurlErrorResponse,
    LnurlPayResponse,
    LnurlResponse,
    LnurlWithdrawResponse,
)
from lnurl.exceptions import LnurlResponseException


class ManifestKind(enum.StrEnum):
    """LUD ``tag`` values."""

    PAY = "payRequest"
    WITHDRAW = "withdrawRequest"
    CHANNEL = "channelRequest"


_KNOWN_TAGS = frozenset(kind.value for kind in ManifestKind)

Manifest = LnurlPayResponse | LnurlWithdrawResponse | LnurlChannelResponse


class ManifestFormatError(ValueError):
    """The body is not a recognisable LNURL document."""


# Optional pay fields pydantic would otherwise coerce ("yes" -> True, True -> 1)
_OPTIONAL_FIELD_TYPES: dict[str, type] = {
    "commentAllowed": int,
    "allowsNostr": bool,
    "nostrPubkey": str,
}


def _check_optional_fields(data: dict[str, Any]) -> None:
    for key, expected in _OPTIONAL_FIELD_TYPES.items():
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
            msg = f"field {key} must be of type {expected.__name__}"
            raise ManifestFormatError(msg)


def manifest_kind(manifest: Any) -> str | None:
    """Return the ``tag`` of a parsed document as a plain string."""
    tag = getattr(manifest, "tag", None)
    return getattr(tag, "value", tag)


def parse_manifest(data: Any) -> Manifest:
    """Turn a decoded JSON body into a validated ``lnurl`` response model.

    Returns:
        One of the three LUD documents, as a ``lnurl`` model.

    Raises:
        ManifestFormatError: If the body is an LNURL error response, carries an
            unknown tag, or fails validation for its tag.
    """
    if not isinstance(data, dict):
        msg = "LNURL response is not a JSON object"
        raise ManifestFormatError(msg)
    tag = data.get("tag")
    if tag is not None and (not isinstance(tag, str) or tag not in _KNOWN_TAGS):
        msg = f"unknown LNURL tag: {tag!r}"
        raise ManifestFormatError(msg)
    _check_optional_fields(data)

    try:
        # from_dict pops and rewrites keys, so hand it a copy
        response = LnurlResponse.from_dict(dict(data))
    except (LnurlResponseException, ValueError, KeyError) as exc:
        msg = f"invalid LNURL response: {exc}"
        raise ManifestFormatError(msg) from exc

    if isinstance(response, LnurlErrorResponse):
        msg = f"LNURL error response: {response.reason}"
        raise ManifestFormatError(msg)
    if manifest_kind(response) is None:
        msg = "LNURL response carries no tag"
        raise ManifestFormatError(msg)
    return response


def pay_manifest_to_dict(manifest: LnurlPayResponse) -> dict[str, Any]:
    """Serialize a pay manifest back to the LUD-06 wire format."""
    body: dict[str, Any] = {
        "tag": ManifestKind.PAY.value,
        "callback": str(manifest.callback),
        "minSendable": int(manifest.min_sendable),
        "maxSendable": int(manifest.max_sendable),
        "metadata": str(manifest.metadata),
    }
    for key, attr in (
        ("commentAllowed", "comment_allowed"),
        ("allowsNostr", "allows_nostr"),
        ("nostrPubkey", "nostr_pubkey"),
    ):
        value = getattr(manifest, attr, None)
        if value is not None:
            body[key] = value
    return body

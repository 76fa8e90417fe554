"""LNURL — payment destinations and the outbound manifest client."""

from lnaddrd.lnurl.client import LnurlClient
from lnaddrd.lnurl.destination import (
    AliasDestination,
    Destination,
    RawDestination,
    decode_lnurl,
    encode_lnurl,
    parse_destination,
)
from lnaddrd.lnurl.models import (
    Manifest,
    ManifestFormatError,
    ManifestKind,
    manifest_kind,
    parse_manifest,
    pay_manifest_to_dict,
)

__all__ = [
    "AliasDestination",
    "Destination",
    "LnurlClient",
    "Manifest",
    "ManifestFormatError",
    "ManifestKind",
    "RawDestination",
    "decode_lnurl",
    "encode_lnurl",
    "manifest_kind",
    "parse_destination",
    "parse_manifest",
    "pay_manifest_to_dict",
]

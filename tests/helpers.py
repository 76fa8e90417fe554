"""Test helpers shared across the suite — canned LNURL documents and clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from lnaddrd.lnurl.client import LnurlClient
from lnaddrd.lnurl.destination import encode_lnurl

if TYPE_CHECKING:
    from collections.abc import Callable

DOMAINS = ["example.com", "example.org"]

PAY_URL = "https://pay.example.net/lnurlp/bob"
PAY_LNURL = encode_lnurl(PAY_URL)

PAY_RESPONSE = {
    "tag": "payRequest",
    "callback": "https://pay.example.net/lnurlp/bob/callback",
    "minSendable": 1000,
    "maxSendable": 100_000_000,
    "metadata": '[["text/plain", "Pay to bob"]]',
    "commentAllowed": 140,
}

WITHDRAW_RESPONSE = {
    "tag": "withdrawRequest",
    "callback": "https://pay.example.net/withdraw/callback",
    "k1": "k1-secret",
    "minWithdrawable": 1000,
    "maxWithdrawable": 5000,
    "defaultDescription": "withdraw",
}

CHANNEL_RESPONSE = {
    "tag": "channelRequest",
    "uri": "03" + "a1" * 32 + "@203.0.113.7:9735",
    "callback": "https://pay.example.net/channel/callback",
    "k1": "k1-secret",
}


def json_handler(body: object, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Mock transport handler that always answers with *body*."""

    def _handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return _handler


def make_lnurl_client(
    handler: Callable[[httpx.Request], httpx.Response] | None = None,
) -> LnurlClient:
    """Create an LnurlClient with a mock transport injected."""
    client = LnurlClient()
    client._client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler or json_handler(PAY_RESPONSE)),
        follow_redirects=True,
    )
    return client

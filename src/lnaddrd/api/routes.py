"""Lightning address HTTP routes.

- GET    /domains                          — served domains
- GET    /lnaddress/{domain}/{username}    — stored destination
- POST   /lnaddress/register               — register an address
- DELETE /lnaddress/remove                 — remove an address with its token
- GET    /.well-known/lnurlp/{username}    — LUD-16 pay manifest (domain from Host)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from lnaddrd.api.dependencies import get_service
from lnaddrd.api.schemas import (
    DestinationResponse,
    RegisterRequest,
    RegisterResponse,
    RemoveRequest,
)
from lnaddrd.errors.definitions import NotFoundError
from lnaddrd.lnurl.models import pay_manifest_to_dict
from lnaddrd.service.lnaddr_service import LnaddrService  # noqa: TC001

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lnaddress"])


@router.get("/domains")
async def list_domains(
    service: Annotated[LnaddrService, Depends(get_service)],
) -> list[str]:
    """Domains addresses can be registered under."""
    return service.list_domains()


@router.get("/lnaddress/{domain}/{username}")
async def get_lnaddress(
    domain: str,
    username: str,
    service: Annotated[LnaddrService, Depends(get_service)],
) -> DestinationResponse:
    """Return where ``username@domain`` forwards to."""
    destination = await service.get_destination(domain, username)
    if destination is None:
        raise NotFoundError(f"{username}@{domain}")
    return DestinationResponse(destination=destination.to_text(), url=destination.url())


@router.post("/lnaddress/register", status_code=201)
async def register_lnaddress(
    body: RegisterRequest,
    service: Annotated[LnaddrService, Depends(get_service)],
) -> RegisterResponse:
    """Register an address and return its authentication token (shown once)."""
    result = await service.register(body.domain, body.username, body.lnurl)
    return RegisterResponse(lnaddr=result.address, authentication_token=result.authentication_token)


@router.delete("/lnaddress/remove", status_code=204)
async def remove_lnaddress(
    body: RemoveRequest,
    service: Annotated[LnaddrService, Depends(get_service)],
) -> None:
    """Remove an address. Removing an unknown address succeeds."""
    removed = await service.remove(body.domain, body.username, body.authentication_token)
    if not removed:
        logger.debug("Removal of unknown address %s@%s", body.username, body.domain)


@router.get("/.well-known/lnurlp/{username}")
async def lnurlp_manifest(
    username: str,
    request: Request,
    service: Annotated[LnaddrService, Depends(get_service)],
) -> dict[str, Any]:
    """Proxy the pay manifest of the registered destination.

    The domain is the host the wallet connected to, without port.
    """
    domain = request.url.hostname or ""
    manifest = await service.get_manifest(domain, username)
    if manifest is None:
        raise NotFoundError(f"{username}@{domain}")
    return pay_manifest_to_dict(manifest)

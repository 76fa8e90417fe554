"""Lightning address service — registration, lookup and manifest resolution.

- Register ``username@domain`` for a served domain, issuing a one-time
  authentication token
- Remove an address with its token
- Look up the stored destination
- Resolve the destination into the remote pay manifest
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lnaddrd.errors.definitions import InvalidDestinationError, UnsupportedDomainError
from lnaddrd.lnurl.destination import parse_destination
from lnaddrd.utils.crypto import generate_token

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lnurl import LnurlPayResponse

    from lnaddrd.lnurl.client import LnurlClient
    from lnaddrd.lnurl.destination import Destination
    from lnaddrd.repository.base import PaymentAddressRepository

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LENGTH = 20

_USERNAME = re.compile(r"[^\s@/?#\\\x00-\x1f\x7f]+")


@dataclass(frozen=True, slots=True)
class RegisterResult:
    """Returned once by :meth:`LnaddrService.register`.

    Attributes:
        address: The registered ``username@domain``.
        authentication_token: Bearer token required to remove the address.
            It is not stored and cannot be retrieved again.
    """

    address: str
    authentication_token: str

    def __repr__(self) -> str:
        return f"RegisterResult(address={self.address!r}, authentication_token='***')"


class LnaddrService:
    """Business logic for lightning address management.

    Holds no mutable state of its own: the domain list is fixed at
    construction and all persistence goes through the repository.
    """

    def __init__(
        self,
        repository: PaymentAddressRepository,
        lnurl_client: LnurlClient,
        domains: Iterable[str],
        *,
        token_length: int = DEFAULT_TOKEN_LENGTH,
    ) -> None:
        self._repo = repository
        self._client = lnurl_client
        self._domains = tuple(domains)
        self._token_length = token_length

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def list_domains(self) -> list[str]:
        """Return the domains this instance serves, in configured order."""
        return list(self._domains)

    async def get_destination(self, domain: str, username: str) -> Destination | None:
        """Return the stored destination, or ``None`` if not registered."""
        record = await self._repo.get(domain, username)
        if record is None:
            return None
        return record.destination

    async def get_manifest(self, domain: str, username: str) -> LnurlPayResponse | None:
        """Fetch the pay manifest behind ``username@domain``.

        Returns:
            The manifest, or ``None`` if the address is not registered.

        Raises:
            TransportError: If the remote endpoint cannot be used.
            WrongManifestKindError: If the remote is not a pay endpoint.
        """
        destination = await self.get_destination(domain, username)
        if destination is None:
            return None
        return await self._client.fetch_manifest(destination.url())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register(self, domain: str, username: str, destination_text: str) -> RegisterResult:
        """Register ``username@domain`` forwarding to *destination_text*.

        Args:
            domain: One of the served domains.
            username: The local part to claim.
            destination_text: An LNURL or a ``user@domain`` lightning address.

        Returns:
            The address and its freshly issued authentication token.

        Raises:
            UnsupportedDomainError: If *domain* is not served here.
            InvalidDestinationError: If *username* or *destination_text* is malformed.
            AlreadyRegisteredError: If the address is taken.
        """
        if domain not in self._domains:
            raise UnsupportedDomainError(domain)
        if not _USERNAME.fullmatch(username):
            raise InvalidDestinationError(f"invalid username: {username!r}")

        destination = parse_destination(destination_text)
        token = generate_token(self._token_length)
        await self._repo.add(domain, username, destination, token)

        address = f"{username}@{domain}"
        logger.info("Registered %s -> %s", address, destination)
        return RegisterResult(address=address, authentication_token=token)

    async def remove(self, domain: str, username: str, authentication_token: str) -> bool:
        """Remove ``username@domain`` if the token matches.

        Returns:
            ``True`` if removed, ``False`` if the address did not exist.

        Raises:
            UnauthorizedError: If the token does not match.
        """
        return await self._repo.remove(domain, username, authentication_token)

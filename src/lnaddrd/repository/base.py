"""Repository contract for payment address storage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from lnaddrd.lnurl.destination import Destination


@dataclass(frozen=True, slots=True)
class PaymentAddressRecord:
    """A stored lightning address.

    Attributes:
        domain: The served domain.
        username: The local part.
        destination: Where the address forwards to.
        token_hash: Salted hash of the authentication token, never the token.
        created_at: Set by the store on insert.
        updated_at: Set by the store on insert and update.
    """

    domain: str
    username: str
    destination: Destination
    token_hash: str
    created_at: datetime
    updated_at: datetime

    @property
    def address(self) -> str:
        return f"{self.username}@{self.domain}"

    def __repr__(self) -> str:
        return f"<PaymentAddressRecord {self.address} -> {self.destination}>"


class PaymentAddressRepository(Protocol):
    """Storage backend for payment addresses keyed by ``(domain, username)``.

    Implementations must reject duplicate keys on :meth:`add` and run the
    token check and delete of :meth:`remove` as one atomic step.
    """

    async def get(self, domain: str, username: str) -> PaymentAddressRecord | None:
        """Return the record, or ``None`` if the key is not registered."""
        ...

    async def add(
        self, domain: str, username: str, destination: Destination, token: str
    ) -> None:
        """Insert a new record storing only a salted hash of *token*.

        Raises:
            AlreadyRegisteredError: If the key exists.
            StorageError: On backend failure.
        """
        ...

    async def remove(self, domain: str, username: str, token: str) -> bool:
        """Delete the record if *token* matches.

        Returns:
            ``True`` if a record was deleted, ``False`` if none existed.

        Raises:
            UnauthorizedError: If the record exists and *token* does not match.
            StorageError: On backend failure.
        """
        ...

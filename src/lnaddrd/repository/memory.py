"""In-memory payment address repository (tests and ephemeral instances)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from lnaddrd.errors.definitions import AlreadyRegisteredError, UnauthorizedError
from lnaddrd.repository.base import PaymentAddressRecord
from lnaddrd.utils.crypto import hash_token, verify_token

if TYPE_CHECKING:
    from lnaddrd.lnurl.destination import Destination


class MemoryPaymentAddressRepository:
    """Dict-backed repository.

    No method awaits between reading and writing the dict, so each call is
    atomic with respect to other tasks on the same event loop.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], PaymentAddressRecord] = {}

    async def get(
        self, domain: str, username: str
    ) -> PaymentAddressRecord | None:
        return self._records.get((domain, username))

    async def add(
        self, domain: str, username: str, destination: Destination, token: str
    ) -> None:
        key = (domain, username)
        if key in self._records:
            raise AlreadyRegisteredError(f"{username}@{domain}")
        now = datetime.now(UTC)
        self._records[key] = PaymentAddressRecord(
            domain=domain,
            username=username,
            destination=destination,
            token_hash=hash_token(token),
            created_at=now,
            updated_at=now,
        )

    async def remove(self, domain: str, username: str, token: str) -> bool:
        key = (domain, username)
        record = self._records.get(key)
        if record is None:
            return False
        if not verify_token(token, record.token_hash):
            raise UnauthorizedError(record.address)
        del self._records[key]
        return True

    def __len__(self) -> int:
        return len(self._records)

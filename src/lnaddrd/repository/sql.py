"""Relational payment address repository (PostgreSQL or SQLite via SQLAlchemy)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from lnaddrd.errors.definitions import (
    AlreadyRegisteredError,
    CorruptRecordError,
    InvalidDestinationError,
    StorageError,
    UnauthorizedError,
)
from lnaddrd.lnurl.destination import parse_destination
from lnaddrd.repository.base import PaymentAddressRecord
from lnaddrd.repository.models import PaymentAddressRow
from lnaddrd.utils.crypto import hash_token, verify_token

if TYPE_CHECKING:
    from lnaddrd.datastore.client import Datastore
    from lnaddrd.lnurl.destination import Destination

logger = logging.getLogger(__name__)


def _to_record(row: PaymentAddressRow) -> PaymentAddressRecord:
    """Convert a row, re-parsing its stored destination.

    Raises:
        CorruptRecordError: If the stored destination no longer parses.
    """
    try:
        destination = parse_destination(row.destination)
    except InvalidDestinationError as exc:
        logger.error("Stored destination for %s does not parse", row.address)
        raise CorruptRecordError(row.address) from exc
    return PaymentAddressRecord(
        domain=row.domain,
        username=row.username,
        destination=destination,
        token_hash=row.token_hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlPaymentAddressRepository:
    """Data access layer for payment addresses."""

    def __init__(self, datastore: Datastore) -> None:
        self._ds = datastore

    async def get(self, domain: str, username: str) -> PaymentAddressRecord | None:
        """Find a payment address by domain + username."""
        stmt = select(PaymentAddressRow).where(
            PaymentAddressRow.domain == domain,
            PaymentAddressRow.username == username,
        )
        try:
            async with self._ds.session() as session:
                row = (await session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Lookup of %s@%s failed: %s", username, domain, exc)
            raise StorageError from exc
        if row is None:
            return None
        return _to_record(row)

    async def add(
        self, domain: str, username: str, destination: Destination, token: str
    ) -> None:
        """Insert a new payment address.

        The unique ``(domain, username)`` constraint rejects duplicates, so two
        concurrent registrations of the same key cannot both succeed.
        """
        row = PaymentAddressRow(
            domain=domain,
            username=username,
            destination=destination.to_text(),
            token_hash=hash_token(token),
        )
        try:
            async with self._ds.transaction() as session:
                session.add(row)
        except IntegrityError as exc:
            raise AlreadyRegisteredError(f"{username}@{domain}") from exc
        except SQLAlchemyError as exc:
            logger.error("Insert of %s@%s failed: %s", username, domain, exc)
            raise StorageError from exc

    async def remove(self, domain: str, username: str, token: str) -> bool:
        """Delete a payment address if *token* matches, in one transaction.

        The row is locked for update while the token is checked, and the
        delete is conditional on the exact hash that was verified.
        """
        address = f"{username}@{domain}"
        key = (PaymentAddressRow.domain == domain, PaymentAddressRow.username == username)
        try:
            async with self._ds.transaction() as session:
                stored = (
                    await session.execute(
                        select(PaymentAddressRow.token_hash).where(*key).with_for_update()
                    )
                ).scalar_one_or_none()
                if stored is None:
                    return False
                if not verify_token(token, stored):
                    raise UnauthorizedError(address)

                result = await session.execute(
                    delete(PaymentAddressRow).where(*key, PaymentAddressRow.token_hash == stored)
                )
                if result.rowcount == 0:  # type: ignore[union-attr]
                    # Row changed under us on a backend without row locks.
                    current = (
                        await session.execute(select(PaymentAddressRow.id).where(*key))
                    ).scalar_one_or_none()
                    if current is not None:
                        raise UnauthorizedError(address)
                    return False
        except SQLAlchemyError as exc:
            logger.error("Removal of %s failed: %s", address, exc)
            raise StorageError from exc

        logger.info("Removed payment address %s", address)
        return True

"""Repository — durable storage of payment addresses."""

from lnaddrd.repository.base import PaymentAddressRecord, PaymentAddressRepository
from lnaddrd.repository.memory import MemoryPaymentAddressRepository
from lnaddrd.repository.sql import SqlPaymentAddressRepository

__all__ = [
    "MemoryPaymentAddressRepository",
    "PaymentAddressRecord",
    "PaymentAddressRepository",
    "SqlPaymentAddressRepository",
]

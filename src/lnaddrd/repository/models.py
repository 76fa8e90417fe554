"""SQLAlchemy ORM models for the payment address table."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - SQLAlchemy needs this at runtime for Mapped[datetime]

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""


class TimestampMixin:
    """Created / updated timestamps, always set by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class PaymentAddressRow(Base, TimestampMixin):
    """A ``username@domain`` lightning address and where it forwards to."""

    __tablename__ = "payment_addresses"
    __table_args__ = (UniqueConstraint("domain", "username", name="uq_payment_addresses_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain: Mapped[str] = mapped_column(String(255), nullable=False, comment="Served domain")
    username: Mapped[str] = mapped_column(String(255), nullable=False, comment="Local part")
    destination: Mapped[str] = mapped_column(
        Text, nullable=False, comment="Destination in canonical text form"
    )
    token_hash: Mapped[str] = mapped_column(
        String(128), nullable=False, comment="Salted SHA-256 of the authentication token"
    )

    @property
    def address(self) -> str:
        """Return the full lightning address (username@domain)."""
        return f"{self.username}@{self.domain}"

    def __repr__(self) -> str:
        return f"<PaymentAddressRow {self.username}@{self.domain}>"

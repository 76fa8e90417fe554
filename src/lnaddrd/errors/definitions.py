"""Error kinds raised by the directory core.

Each kind carries a fixed ``code`` and suggested HTTP status; the boundary
layer maps them to responses without inspecting messages.
"""

from __future__ import annotations

from lnaddrd.errors.lnaddr_errors import LnaddrError

# -- Validation ------------------------------------------------------------


class InvalidDestinationError(LnaddrError):
    """Destination text is neither an LNURL nor a ``user@domain`` alias."""

    def __init__(self, message: str = "invalid destination") -> None:
        super().__init__(message, status_code=400, code="invalid-destination")


class UnsupportedDomainError(LnaddrError):
    """Domain is not served by this instance."""

    def __init__(self, domain: str) -> None:
        super().__init__(
            f"unsupported domain: {domain}", status_code=400, code="unsupported-domain"
        )
        self.domain = domain


# -- Registration / authorization -----------------------------------------


class AlreadyRegisteredError(LnaddrError):
    """The ``username@domain`` key is already taken."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"payment address already registered: {address}",
            status_code=409,
            code="already-registered",
        )
        self.address = address


class UnauthorizedError(LnaddrError):
    """Authentication token does not match the stored record."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"invalid authentication token for payment address {address}",
            status_code=401,
            code="unauthorized",
        )
        self.address = address


class NotFoundError(LnaddrError):
    """Raised by the HTTP layer when a lookup comes back empty."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"payment address not found: {address}", status_code=404, code="not-found"
        )
        self.address = address


# -- Storage ---------------------------------------------------------------


class StorageError(LnaddrError):
    """Backend failure (connectivity, unexpected constraint violation)."""

    def __init__(self, message: str = "storage backend failure") -> None:
        super().__init__(message, status_code=500, code="storage-error")


class CorruptRecordError(LnaddrError):
    """A stored destination can no longer be parsed."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"stored destination for {address} is corrupt",
            status_code=500,
            code="corrupt-record",
        )
        self.address = address

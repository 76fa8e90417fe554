"""LnaddrdEngine — owns the datastore, LNURL client and service for the process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lnaddrd.datastore.client import Datastore
from lnaddrd.datastore.migrations import run_auto_migrate
from lnaddrd.lnurl.client import LnurlClient
from lnaddrd.repository.sql import SqlPaymentAddressRepository
from lnaddrd.service.lnaddr_service import LnaddrService

if TYPE_CHECKING:
    from lnaddrd.config.settings import AppConfig

logger = logging.getLogger(__name__)

# Error messages
_ERR_NOT_INITIALIZED = "Engine not initialized. Call initialize() first."


class LnaddrdEngine:
    """Builds and tears down the long-lived components.

    Everything is constructed in :meth:`initialize` and handed to the
    service explicitly; nothing is stored in module globals.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize engine with configuration.

        Args:
            config: Application configuration with database and LNURL settings.
        """
        self._config = config
        self._initialized = False

        self._datastore: Datastore | None = None
        self._lnurl_client: LnurlClient | None = None
        self._service: LnaddrService | None = None

    async def initialize(self) -> None:
        """Open the datastore, create tables if configured, and start services.

        Raises:
            RuntimeError: If already initialized.
        """
        if self._initialized:
            msg = "Engine already initialized"
            raise RuntimeError(msg)

        self._datastore = Datastore(self._config.db)
        await self._datastore.open()
        logger.debug("Database connection opened (dialect=%s)", self._datastore.dialect)
        if self._config.db.auto_migrate:
            await run_auto_migrate(self._datastore.engine)

        self._lnurl_client = LnurlClient(
            timeout=self._config.lnurl.timeout,
            user_agent=self._config.lnurl.user_agent,
        )
        await self._lnurl_client.connect()

        logger.debug("Starting lightning address service for %s", self._config.lnurl.domains)
        self._service = LnaddrService(
            SqlPaymentAddressRepository(self._datastore),
            self._lnurl_client,
            self._config.lnurl.domains,
            token_length=self._config.lnurl.token_length,
        )
        self._initialized = True

    async def close(self) -> None:
        """Gracefully shut down all services and connections.

        Can be called multiple times (idempotent).
        """
        if not self._initialized:
            return

        self._service = None

        if self._lnurl_client is not None:
            await self._lnurl_client.close()
            self._lnurl_client = None

        if self._datastore is not None:
            await self._datastore.close()
            self._datastore = None

        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if the engine is initialized."""
        return self._initialized

    @property
    def config(self) -> AppConfig:
        """Get the application configuration."""
        return self._config

    @property
    def datastore(self) -> Datastore:
        """Get the datastore instance.

        Raises:
            RuntimeError: If engine not initialized.
        """
        if self._datastore is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._datastore

    @property
    def service(self) -> LnaddrService:
        """Get the lightning address service.

        Raises:
            RuntimeError: If engine not initialized.
        """
        if self._service is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._service

"""Shared test fixtures for the lnaddrd test suite."""

from __future__ import annotations

import pytest

from lnaddrd.config.settings import DatabaseEngine
from tests.helpers import DOMAINS


@pytest.fixture
def app_config(tmp_path):
    """Provide a test AppConfig backed by a temporary SQLite file."""
    from lnaddrd.config.settings import AppConfig, DatabaseConfig, LnurlConfig, MetricsConfig

    return AppConfig(
        debug=True,
        db=DatabaseConfig(
            engine=DatabaseEngine.SQLITE,
            dsn=f"sqlite+aiosqlite:///{tmp_path / 'lnaddrd.db'}",
        ),
        lnurl=LnurlConfig(domains=DOMAINS, timeout=2.0),
        metrics=MetricsConfig(enabled=True),
    )


@pytest.fixture
async def datastore(app_config):
    """Open a datastore on a fresh SQLite file with the schema created."""
    from lnaddrd.datastore.client import Datastore
    from lnaddrd.datastore.migrations import run_auto_migrate

    ds = Datastore(app_config.db)
    await ds.open()
    await run_auto_migrate(ds.engine)
    yield ds
    await ds.close()

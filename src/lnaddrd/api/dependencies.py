"""FastAPI dependency injection helpers.

Usage in a route::

    @router.get("/domains")
    async def list_domains(
        service: Annotated[LnaddrService, Depends(get_service)],
    ) -> list[str]:
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from lnaddrd.engine import LnaddrdEngine  # noqa: TC001
from lnaddrd.service.lnaddr_service import LnaddrService  # noqa: TC001


def get_engine(request: Request) -> LnaddrdEngine:
    """Retrieve the engine from ``app.state``.

    The engine is stored on ``app.state.engine`` during lifespan startup.

    Raises:
        RuntimeError: If the engine is not initialized (should never happen
        after startup).
    """
    engine: LnaddrdEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        msg = "Engine not attached to application state"
        raise RuntimeError(msg)
    return engine


def get_service(engine: Annotated[LnaddrdEngine, Depends(get_engine)]) -> LnaddrService:
    """Return the lightning address service owned by the engine."""
    return engine.service

"""Service — lightning address business logic."""

from lnaddrd.service.lnaddr_service import LnaddrService, RegisterResult

__all__ = ["LnaddrService", "RegisterResult"]

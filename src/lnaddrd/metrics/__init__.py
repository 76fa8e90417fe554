"""Metrics — Prometheus request metrics."""

from __future__ import annotations

from lnaddrd.metrics.middleware import PrometheusMiddleware

__all__ = ["PrometheusMiddleware"]

from __future__ import annotations

"""Client factory.

Centralizes client construction (logging, limiter, transport) so callers get
one fully wired ``DocumentClient`` per process.
"""

import logging

import httpx

from crpt_client.adapters.http import create_document_transport
from crpt_client.adapters.http.base import AbstractDocumentTransport
from crpt_client.adapters.rate_limit import FixedWindowRateLimiter
from crpt_client.core.config import Settings, settings as default_settings
from crpt_client.core.logging import configure_logging
from crpt_client.services.document_client import DocumentClient

logger = logging.getLogger(__name__)


def create_document_client(
    settings: Settings | None = None,
    *,
    transport: AbstractDocumentTransport | None = None,
    http_transport: httpx.BaseTransport | None = None,
) -> DocumentClient:
    """Create and wire a document client.

    Args:
        settings: Settings to build from; defaults to the global instance.
        transport: Ready-made document transport; skips building the httpx one.
        http_transport: Low-level httpx transport for the default document transport.

    Returns:
        DocumentClient with a running limiter. Close it (or use it as a
        context manager) to stop the limiter's background thread.
    """
    cfg = settings or default_settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    limiter = FixedWindowRateLimiter(
        capacity=cfg.rate_limit.requests,
        period_seconds=cfg.rate_limit.period_seconds,
        shutdown_timeout_seconds=cfg.rate_limit.shutdown_timeout_seconds,
    )
    try:
        document_transport = transport or create_document_transport(
            cfg.api, transport=http_transport
        )
    except Exception:
        # The limiter thread is already running; do not leak it
        limiter.shutdown()
        raise

    logger.info(
        "document_client.created",
        extra={
            "endpoint": f"{cfg.api.base_url}{cfg.api.document_path}",
            "limit": cfg.rate_limit.requests,
            "window_s": cfg.rate_limit.period_seconds,
            "app_env": cfg.app_env,
        },
    )
    return DocumentClient(limiter=limiter, transport=document_transport)

"""Factory for creating document transport instances."""

import ssl

import httpx

from crpt_client.adapters.http.base import AbstractDocumentTransport
from crpt_client.adapters.http.httpx_transport import HttpxDocumentTransport
from crpt_client.core.config import ApiSettings, settings
from crpt_client.core.errors import InvalidConfigurationError


def create_document_transport(
    api_settings: ApiSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> AbstractDocumentTransport:
    """Build the document transport from endpoint settings.

    Args:
        api_settings: Endpoint configuration; defaults to global settings.
        transport: Optional low-level httpx transport (tests, proxies).

    Returns:
        AbstractDocumentTransport: Configured transport instance.

    Raises:
        InvalidConfigurationError: If the endpoint URL is not absolute http(s)
            or the CA bundle cannot be loaded.
    """
    cfg = api_settings or settings.api

    base_url = httpx.URL(cfg.base_url)
    if base_url.scheme not in ("http", "https") or not base_url.host:
        raise InvalidConfigurationError(
            code="invalid_configuration",
            message="CRPT_API_BASE_URL must be an absolute http(s) URL",
            details={"field": "base_url", "actual_value": cfg.base_url},
        )

    # A custom CA bundle replaces the default trust store
    verify: bool | ssl.SSLContext = cfg.verify_tls
    if cfg.ca_bundle_path:
        try:
            verify = ssl.create_default_context(cafile=cfg.ca_bundle_path)
        except (OSError, ssl.SSLError) as exc:
            raise InvalidConfigurationError(
                code="invalid_configuration",
                message=f"CRPT_API_CA_BUNDLE_PATH could not be loaded: {exc}",
                details={"field": "ca_bundle_path", "actual_value": cfg.ca_bundle_path},
            ) from exc

    return HttpxDocumentTransport(
        base_url=cfg.base_url,
        document_path=cfg.document_path,
        timeout_seconds=cfg.timeout_seconds,
        verify=verify,
        transport=transport,
    )

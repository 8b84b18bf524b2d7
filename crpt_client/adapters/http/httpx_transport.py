"""httpx-based document transport."""

import logging
import ssl
import time

import httpx

from crpt_client.adapters.http.base import AbstractDocumentTransport
from crpt_client.core.errors import NetworkAppError, ServerAppError

logger = logging.getLogger(__name__)

# Server error bodies can be large HTML pages; keep log/exception context short
_BODY_PREVIEW_CHARS = 500


class HttpxDocumentTransport(AbstractDocumentTransport):
    """POST a JSON document to a fixed endpoint with a bearer credential.

    Uses a synchronous ``httpx.Client`` so it can be shared by caller threads.
    """

    def __init__(
        self,
        base_url: str,
        document_path: str,
        timeout_seconds: float = 1.0,
        verify: bool | ssl.SSLContext = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the underlying HTTP client.

        Args:
            base_url: Scheme and host of the API (e.g., "https://dev.edo.crpt.tech").
            document_path: Path of the submission endpoint.
            timeout_seconds: Connect, read and write timeout in seconds.
            verify: TLS verification flag or an SSL context with custom trust.
            transport: Optional httpx transport (used to stub the network in tests).
        """
        self.document_path = document_path
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            verify=verify,
            headers={"User-Agent": "crpt-client/0.1", "Accept": "application/json"},
            transport=transport,
        )

    def post_document(self, payload: bytes, credential: str) -> str:
        """Send the document and return the response text.

        Args:
            payload: UTF-8 encoded JSON document.
            credential: Bearer token for the Authorization header.

        Returns:
            str: Body of the 2xx response.

        Raises:
            NetworkAppError: On connection, timeout or protocol failures.
            ServerAppError: On non-2xx responses.
        """
        started_at = time.perf_counter()
        try:
            response = self.client.post(
                self.document_path,
                content=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {credential}",
                },
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "document.transport.failed",
                extra={
                    "error_type": type(exc).__name__,
                    "path": self.document_path,
                },
            )
            raise NetworkAppError(
                code="network_error",
                message=f"Request to document endpoint failed: {exc}",
                details={"url": str(self.client.base_url.join(self.document_path))},
            ) from exc

        duration_ms = (time.perf_counter() - started_at) * 1000

        if not response.is_success:
            preview = response.text[:_BODY_PREVIEW_CHARS]
            logger.warning(
                "document.transport.rejected",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                    "path": self.document_path,
                },
            )
            raise ServerAppError(
                code="server_error",
                message=f"Document endpoint answered {response.status_code}",
                details={
                    "http_status": response.status_code,
                    "url": str(response.request.url),
                    "context": {"body": preview},
                },
            )

        logger.debug(
            "document.transport.succeeded",
            extra={
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response.text

    def close(self) -> None:
        self.client.close()

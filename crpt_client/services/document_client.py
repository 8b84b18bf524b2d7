"""Document submission service guarded by the request-rate limiter.

This service is the only entry point callers use to submit documents. It:
- Rejects a submission immediately when the limiter denies admission
- Serializes the document and hands it to the transport on admission
- Lets transport/server failures propagate unchanged

A permit is never handed back: an admitted submission that fails still counts
against the current window.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Mapping

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from crpt_client.adapters.http.base import AbstractDocumentTransport
from crpt_client.adapters.rate_limit.base import AbstractRateLimiter
from crpt_client.core.errors import (
    RateLimitExceededError,
    TransportAppError,
    ValidationAppError,
)
from crpt_client.core.logging import clear_submission_id, set_submission_id
from crpt_client.schemas.document import serialize_document

logger = logging.getLogger(__name__)


class DocumentClient:
    """Submit documents to the remote API without exceeding the rate limit.

    Safe to share between threads: all mutable state lives in the limiter.
    """

    def __init__(
        self,
        limiter: AbstractRateLimiter,
        transport: AbstractDocumentTransport,
    ) -> None:
        self.limiter = limiter
        self.transport = transport

    def __enter__(self) -> DocumentClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Stop the limiter's replenishment and release HTTP connections."""
        try:
            self.limiter.shutdown()
        finally:
            self.transport.close()

    def submit(self, document: BaseModel | Mapping[str, Any], credential: str) -> str:
        """Submit one document.

        Args:
            document: Introduction document (model or JSON-compatible mapping).
            credential: Bearer token sent in the Authorization header.

        Returns:
            str: Raw response body from the endpoint.

        Raises:
            ValidationAppError: If the credential is empty or the document
                cannot be serialized.
            RateLimitExceededError: If the current window's budget is exhausted.
                No network call is made.
            NetworkAppError: If the request could not be completed.
            ServerAppError: If the endpoint answered with a non-2xx status.
        """
        if not credential or not credential.strip():
            raise ValidationAppError(
                code="missing_credential",
                message="A non-empty credential is required to submit a document",
            )

        submission_id = str(uuid.uuid4())
        set_submission_id(submission_id)
        try:
            if not self.limiter.try_acquire():
                retry_after = self.limiter.seconds_until_reset()
                logger.warning(
                    "document.submit.rate_limited",
                    extra={"retry_after_s": retry_after},
                )
                details: dict[str, Any] = {"submission_id": submission_id}
                if retry_after is not None:
                    details["retry_after"] = round(retry_after, 3)
                limit = getattr(self.limiter, "capacity", None)
                if limit is not None:
                    details["limit"] = limit
                raise RateLimitExceededError(
                    code="rate_limit_exceeded",
                    message="Request limit exceeded. Try again later.",
                    details=details,  # type: ignore[arg-type]
                )

            try:
                payload = serialize_document(document)
            except (TypeError, PydanticSerializationError) as exc:
                raise ValidationAppError(
                    code="document_not_serializable",
                    message=f"Document could not be encoded as JSON: {exc}",
                    details={"submission_id": submission_id},
                ) from exc

            started_at = time.perf_counter()
            try:
                body = self.transport.post_document(payload, credential)
            except TransportAppError as exc:
                logger.warning(
                    "document.submit.failed",
                    extra={"error_code": exc.code, "payload_bytes": len(payload)},
                )
                raise

            logger.info(
                "document.submit.succeeded",
                extra={
                    "payload_bytes": len(payload),
                    "duration_ms": round((time.perf_counter() - started_at) * 1000, 2),
                },
            )
            return body
        finally:
            clear_submission_id()

    def create_document(self, document: BaseModel | Mapping[str, Any], signature: str) -> str:
        """Create a goods introduction document; same contract as ``submit``."""
        return self.submit(document, signature)

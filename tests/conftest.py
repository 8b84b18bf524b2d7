"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins APP_ENV so no developer .env file leaks into the test run.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"

os.environ.setdefault("CRPT_API_BASE_URL", "https://crpt.test")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "5")
os.environ.setdefault("RATE_LIMIT_PERIOD_SECONDS", "1.0")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from collections.abc import Iterator  # noqa: E402
from datetime import date  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from crpt_client.adapters.http.base import AbstractDocumentTransport  # noqa: E402
from crpt_client.adapters.rate_limit.in_memory import FixedWindowRateLimiter  # noqa: E402
from crpt_client.schemas.document import Description, IntroductionDocument, Product  # noqa: E402


@pytest.fixture
def make_limiter() -> Iterator:
    """Build limiters that are always shut down after the test."""
    created: list[FixedWindowRateLimiter] = []

    def _make(**kwargs) -> FixedWindowRateLimiter:
        limiter = FixedWindowRateLimiter(**kwargs)
        created.append(limiter)
        return limiter

    yield _make

    for limiter in created:
        limiter.shutdown()


@pytest.fixture
def fake_transport() -> Mock:
    """Transport double that records calls and answers with a fixed body."""
    transport = Mock(spec=AbstractDocumentTransport)
    transport.post_document.return_value = '{"value":"ok"}'
    return transport


@pytest.fixture
def sample_document() -> IntroductionDocument:
    return IntroductionDocument(
        description=Description(participant_inn="7700000000"),
        doc_id="doc-1",
        doc_status="DRAFT",
        import_request=True,
        owner_inn="7700000000",
        participant_inn="7700000000",
        producer_inn="7800000000",
        production_date=date(2024, 1, 15),
        production_type="OWN_PRODUCTION",
        products=[
            Product(
                certificate_document="CONFORMITY_CERTIFICATE",
                certificate_document_date=date(2023, 12, 1),
                certificate_document_number="RU-123",
                owner_inn="7700000000",
                producer_inn="7800000000",
                production_date=date(2024, 1, 15),
                tnved_code="6401100000",
                uit_code="010460043993125621JgXJ5.T",
            )
        ],
        reg_date=date(2024, 1, 20),
        reg_number="REG-42",
    )

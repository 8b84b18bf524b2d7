"""Pydantic schemas for the goods introduction document."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_json

DOC_TYPE_INTRODUCE_GOODS = "LP_INTRODUCE_GOODS"


class Description(BaseModel):
    """Free-form description block of the document."""

    model_config = ConfigDict(populate_by_name=True)

    participant_inn: str | None = Field(
        default=None,
        alias="participantInn",
        description="Taxpayer number (INN) of the participant.",
    )


class Product(BaseModel):
    """One product line being introduced into circulation."""

    certificate_document: str | None = Field(
        default=None, description="Type of the conformity document."
    )
    certificate_document_date: date | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: date | None = None
    tnved_code: str | None = Field(
        default=None, description="Commodity nomenclature (TN VED) code."
    )
    uit_code: str | None = Field(default=None, description="Unique item identifier.")
    uitu_code: str | None = Field(
        default=None, description="Unique transport package identifier."
    )


class IntroductionDocument(BaseModel):
    """Document introducing goods produced in the Russian Federation into circulation."""

    model_config = ConfigDict(populate_by_name=True)

    description: Description | None = None
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str = Field(
        default=DOC_TYPE_INTRODUCE_GOODS, description="Document type code."
    )
    import_request: bool | None = Field(default=None, alias="importRequest")
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: date | None = None
    production_type: str | None = None
    products: list[Product] | None = None
    reg_date: date | None = None
    reg_number: str | None = None


def serialize_document(document: BaseModel | Mapping[str, Any]) -> bytes:
    """Encode a document as UTF-8 JSON for the request body.

    Pydantic models are dumped with their wire aliases and without unset
    (``None``) fields; dates become ``YYYY-MM-DD`` strings.

    Args:
        document: A pydantic model or a JSON-compatible mapping.

    Returns:
        bytes: The JSON payload.

    Raises:
        TypeError: If the document is neither a model nor a mapping.
    """
    if isinstance(document, BaseModel):
        return document.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    if isinstance(document, Mapping):
        return to_json(dict(document))
    raise TypeError(
        f"document must be a pydantic model or a mapping, got {type(document).__name__}"
    )

"""HTTP adapter layer - sends serialized documents to the remote API."""

from crpt_client.adapters.http.base import AbstractDocumentTransport
from crpt_client.adapters.http.factory import create_document_transport
from crpt_client.adapters.http.httpx_transport import HttpxDocumentTransport

__all__ = [
    "AbstractDocumentTransport",
    "HttpxDocumentTransport",
    "create_document_transport",
]

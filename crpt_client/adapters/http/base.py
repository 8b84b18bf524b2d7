from abc import ABC, abstractmethod


class AbstractDocumentTransport(ABC):
	"""Interface for sending a serialized document to the remote endpoint."""

	@abstractmethod
	def post_document(self, payload: bytes, credential: str) -> str:
		"""Send one document and return the raw response body.

		Args:
			payload: UTF-8 encoded JSON document.
			credential: Bearer token attached as the Authorization header.

		Returns:
			str: Response body of a 2xx answer (empty string if there is none).

		Raises:
			NetworkAppError: If the request could not be completed.
			ServerAppError: If the endpoint answered with a non-2xx status.
		"""
		...

	def close(self) -> None:
		"""Release connections held by the transport."""

	def __enter__(self) -> "AbstractDocumentTransport":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

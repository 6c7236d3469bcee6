from abc import ABC, abstractmethod
from typing import Any

LookupRecord = dict[str, Any]


class BaseLookupClient(ABC):
    """Contract for identifier -> record resolution adapters."""

    @abstractmethod
    def resolve(self, identifier: str) -> LookupRecord:
        """Resolve one identifier against the lookup service.

        Args:
            identifier: CNPJ in bare-digit or punctuated form.

        Returns:
            The service's record, keyed by field name.

        Raises:
            InvalidIdentifierError: if the identifier is not 14 digits (no request is made).
            LookupFailedError: on a non-success HTTP status.
            TransportError: on network-level failures.
            DecodeError: if the body is not a JSON object.
        """

    def close(self) -> None:
        """Release underlying connections. No-op by default."""

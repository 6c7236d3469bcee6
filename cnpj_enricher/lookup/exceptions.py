class LookupClientError(Exception):
    """Base exception for identifier lookups."""


class InvalidIdentifierError(LookupClientError):
    """Raised when an identifier does not normalize to 14 digits."""


class LookupFailedError(LookupClientError):
    """Raised when the lookup service answers with a non-success status."""

    def __init__(self, status: int, identifier: str) -> None:
        self.status = status
        self.identifier = identifier
        super().__init__(f"Lookup for {identifier} failed with HTTP {status}")


class TransportError(LookupClientError):
    """Raised when the request never got a response (timeout, DNS, reset)."""


class DecodeError(LookupClientError):
    """Raised when a success response body is not a JSON object."""

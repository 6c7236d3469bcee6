import json

import httpx

from cnpj_enricher.logging.logger import Log
from cnpj_enricher.lookup.base import BaseLookupClient, LookupRecord
from cnpj_enricher.lookup.exceptions import (
    DecodeError,
    InvalidIdentifierError,
    LookupFailedError,
    TransportError,
)
from cnpj_enricher.lookup.identifier import is_valid_identifier, normalize_identifier


class HttpLookupClient(BaseLookupClient):
    """Resolves identifiers with `GET {base_url}/{digits}` (minhareceita.org compatible)."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def resolve(self, identifier: str) -> LookupRecord:
        digits = normalize_identifier(identifier)
        if not is_valid_identifier(digits):
            raise InvalidIdentifierError(
                f"Identifier {identifier!r} has {len(digits)} digits, expected 14"
            )

        try:
            response = self._client.get(f"/{digits}")
        except httpx.DecodingError as exc:
            raise DecodeError(f"Lookup for {digits} returned an undecodable body: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Lookup for {digits} failed: {exc}") from exc

        if not response.is_success:
            raise LookupFailedError(response.status_code, digits)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(f"Lookup for {digits} returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise DecodeError(f"Lookup for {digits} returned {type(payload).__name__}, expected object")

        Log.debug(f"Resolved {digits}: {len(payload)} fields")
        return payload

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpLookupClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

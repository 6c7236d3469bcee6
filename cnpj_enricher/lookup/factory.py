from typing import ClassVar

from cnpj_enricher.config.settings import Settings
from cnpj_enricher.lookup.base import BaseLookupClient
from cnpj_enricher.lookup.example_client import ExampleLookupClient
from cnpj_enricher.lookup.http_client import HttpLookupClient


class LookupClientFactory:
    """Creates the configured lookup adapter."""

    HTTP_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"minhareceita", "http"})

    @classmethod
    def create(cls, settings: Settings) -> BaseLookupClient:
        provider = settings.lookup_provider.lower()
        if provider == "example":
            return ExampleLookupClient()
        if provider in cls.HTTP_PROVIDERS:
            return HttpLookupClient(
                base_url=settings.lookup_base_url,
                timeout_seconds=settings.lookup_timeout_seconds,
            )
        supported = ["example", *sorted(cls.HTTP_PROVIDERS)]
        raise ValueError(
            f"Unknown lookup provider '{provider}'. Choose from: {supported}"
        )

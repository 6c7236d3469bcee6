from cnpj_enricher.lookup.base import BaseLookupClient, LookupRecord
from cnpj_enricher.lookup.factory import LookupClientFactory
from cnpj_enricher.lookup.http_client import HttpLookupClient

__all__ = ["BaseLookupClient", "HttpLookupClient", "LookupClientFactory", "LookupRecord"]

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from cnpj_enricher.catalog.formatters import (
    decimal_comma,
    iso_to_brazilian_date,
    stringify,
    yes_no,
)
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.lookup.base import BaseLookupClient
from cnpj_enricher.lookup.exceptions import LookupClientError

Formatter = Callable[[Any], str]


@dataclass(frozen=True)
class FieldDescriptor:
    """An enrichable field: output column key, human label, optional formatter."""

    key: str
    label: str
    formatter: Formatter | None = None

    def format(self, value: Any) -> str:
        if self.formatter is None:
            return stringify(value)
        return self.formatter(value)


KNOWN_FIELDS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor("razao_social", "Razão social"),
    FieldDescriptor("nome_fantasia", "Nome fantasia"),
    FieldDescriptor("municipio", "Município"),
    FieldDescriptor("uf", "UF"),
    FieldDescriptor("cnae_fiscal", "CNAE fiscal"),
    FieldDescriptor("cnae_fiscal_descricao", "Descrição CNAE"),
    FieldDescriptor("descricao_situacao_cadastral", "Situação cadastral"),
    FieldDescriptor("data_inicio_atividade", "Data início atividade", iso_to_brazilian_date),
    FieldDescriptor("opcao_pelo_simples", "Simples Nacional", yes_no),
    FieldDescriptor("opcao_pelo_mei", "MEI", yes_no),
    FieldDescriptor("capital_social", "Capital social", decimal_comma),
)


class FieldCatalog:
    """Offerable enrichment fields and how each one is rendered.

    Keys come from a sample lookup at runtime. A key in KNOWN_FIELDS uses that
    descriptor's label and formatter; any other key is stringified as-is.
    """

    def __init__(
        self,
        client: BaseLookupClient,
        sample_identifier: str,
        known_fields: Iterable[FieldDescriptor] = KNOWN_FIELDS,
    ) -> None:
        self._client = client
        self._sample_identifier = sample_identifier
        self._known = {descriptor.key: descriptor for descriptor in known_fields}

    def discover(self) -> tuple[str, ...]:
        """Enumerate available keys from one sample lookup.

        A failed lookup yields no keys instead of raising.
        """
        try:
            record = self._client.resolve(self._sample_identifier)
        except LookupClientError as exc:
            Log.warning(f"Field discovery failed, no fields offered: {exc}")
            return ()
        keys = tuple(sorted(record))
        Log.info(f"Discovered {len(keys)} enrichable fields")
        return keys

    def descriptor(self, key: str) -> FieldDescriptor:
        known = self._known.get(key)
        if known is not None:
            return known
        return FieldDescriptor(key, key)

    def label(self, key: str) -> str:
        return self.descriptor(key).label

    def format(self, key: str, value: Any) -> str:
        return self.descriptor(key).format(value)

    @staticmethod
    def filter(keys: Iterable[str], substring: str) -> list[str]:
        """Case-insensitive containment filter; an empty substring keeps every key."""
        needle = substring.lower()
        return [key for key in keys if needle in key.lower()]

"""Offline lookup adapter.

Returns the same canned record for every valid identifier. Useful for local
runs without network access, tests, and as a template for new adapters:
implement BaseLookupClient and register the provider in LookupClientFactory.
"""

import copy
from typing import ClassVar

from cnpj_enricher.lookup.base import BaseLookupClient, LookupRecord
from cnpj_enricher.lookup.exceptions import InvalidIdentifierError
from cnpj_enricher.lookup.identifier import is_valid_identifier, normalize_identifier


class ExampleLookupClient(BaseLookupClient):
    """Adapter that answers every valid identifier with DEFAULT_RECORD."""

    DEFAULT_RECORD: ClassVar[LookupRecord] = {
        "cnpj": "49752997000125",
        "razao_social": "EMPRESA EXEMPLO LTDA",
        "nome_fantasia": "EXEMPLO",
        "municipio": "SAO PAULO",
        "uf": "SP",
        "cnae_fiscal": 6201501,
        "cnae_fiscal_descricao": "Desenvolvimento de programas de computador sob encomenda",
        "descricao_situacao_cadastral": "ATIVA",
        "data_inicio_atividade": "2023-02-24",
        "opcao_pelo_simples": True,
        "opcao_pelo_mei": False,
        "capital_social": 10000.5,
        "email": None,
        "cnaes_secundarios": [],
    }

    def __init__(self, record: LookupRecord | None = None) -> None:
        self._record = record if record is not None else self.DEFAULT_RECORD

    def resolve(self, identifier: str) -> LookupRecord:
        digits = normalize_identifier(identifier)
        if not is_valid_identifier(digits):
            raise InvalidIdentifierError(
                f"Identifier {identifier!r} has {len(digits)} digits, expected 14"
            )
        record = copy.deepcopy(self._record)
        if "cnpj" in record:
            record["cnpj"] = digits
        return record

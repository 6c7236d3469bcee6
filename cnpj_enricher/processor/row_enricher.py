from collections.abc import Sequence

from cnpj_enricher.catalog.fields import FieldCatalog
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.lookup.base import BaseLookupClient
from cnpj_enricher.lookup.exceptions import InvalidIdentifierError, LookupClientError
from cnpj_enricher.lookup.identifier import is_valid_identifier, normalize_identifier
from cnpj_enricher.processor.models import RowOutcome
from cnpj_enricher.tabular.codec import IDENTIFIER_COLUMN, RawRow


class RowEnricher:
    """Looks up one row's identifier and appends the selected fields to it."""

    def __init__(
        self,
        client: BaseLookupClient,
        catalog: FieldCatalog,
        identifier_column: str = IDENTIFIER_COLUMN,
    ) -> None:
        self._client = client
        self._catalog = catalog
        self._identifier_column = identifier_column

    def enrich(self, row: RawRow, selection: Sequence[str]) -> tuple[RawRow, RowOutcome]:
        """Return a copy of `row` extended with formatted lookup fields.

        Rows with a malformed identifier or a failed lookup come back unchanged.
        Selected keys that are already input columns are left untouched.
        """
        enriched = dict(row)
        digits = normalize_identifier(row.get(self._identifier_column))
        if not is_valid_identifier(digits):
            Log.debug(f"Skipping lookup for identifier {row.get(self._identifier_column)!r}")
            return enriched, RowOutcome.INVALID_IDENTIFIER

        try:
            record = self._client.resolve(digits)
        except InvalidIdentifierError:
            return enriched, RowOutcome.INVALID_IDENTIFIER
        except LookupClientError as exc:
            Log.warning(f"Lookup failed for {digits}, row left unenriched: {exc}")
            return enriched, RowOutcome.LOOKUP_FAILED

        for key in selection:
            if key in record and key not in row:
                enriched[key] = self._catalog.format(key, record[key])
        return enriched, RowOutcome.ENRICHED

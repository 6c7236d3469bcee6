"""Comma-separated text <-> ordered row records."""

import io
from collections.abc import Mapping, Sequence

import pandas as pd

from cnpj_enricher.tabular.exceptions import (
    EmptyInputError,
    MalformedInputError,
    MissingColumnError,
)

IDENTIFIER_COLUMN = "cnpj"

MALFORMED_MESSAGE = "Erro ao ler o CSV. Verifique se o arquivo está bem formatado."
EMPTY_MESSAGE = "O arquivo CSV está vazio."
MISSING_COLUMN_MESSAGE = (
    f"Não encontrei a coluna '{IDENTIFIER_COLUMN}' no cabeçalho do CSV. "
    f"Certifique-se de que existe uma coluna com o nome exato '{IDENTIFIER_COLUMN}'."
)

Header = tuple[str, ...]
RawRow = dict[str, str]


class TabularCodec:
    """Parses and serializes RFC-4180 style CSV, keeping every cell as text."""

    def __init__(self, identifier_column: str = IDENTIFIER_COLUMN) -> None:
        self._identifier_column = identifier_column

    def parse(self, text: str) -> tuple[Header, list[RawRow]]:
        """Split CSV text into its header and data rows.

        Header names are kept exactly as written.

        Raises:
            EmptyInputError: if the text has no data rows.
            MalformedInputError: if the text cannot be tokenized consistently
                or the header repeats a column name.
            MissingColumnError: if the header lacks the identifier column.
        """
        if not text.strip():
            raise EmptyInputError(EMPTY_MESSAGE)
        frame = self._read_frame(text)
        if len(frame) < 2:
            raise EmptyInputError(EMPTY_MESSAGE)

        header: Header = tuple(str(name) for name in frame.iloc[0])
        if len(set(header)) != len(header):
            raise MalformedInputError(MALFORMED_MESSAGE)
        if self._identifier_column not in header:
            raise MissingColumnError(MISSING_COLUMN_MESSAGE)

        rows = [
            dict(zip(header, (str(value) for value in values)))
            for values in frame.iloc[1:].itertuples(index=False, name=None)
        ]
        return header, rows

    def serialize(self, header: Sequence[str], rows: Sequence[Mapping[str, str]]) -> str:
        """Emit CSV text: header columns first, then extra row keys in first-seen order."""
        columns = list(header)
        seen = set(columns)
        for row in rows:
            for key in row:
                if key not in seen:
                    seen.add(key)
                    columns.append(key)

        frame = pd.DataFrame.from_records(
            [dict(row) for row in rows], columns=columns
        ).fillna("")
        return frame.to_csv(index=False, lineterminator="\n")

    @staticmethod
    def _read_frame(text: str) -> pd.DataFrame:
        # header=None keeps the first row as data so pandas never renames columns
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                header=None,
                dtype=str,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError as exc:
            raise EmptyInputError(EMPTY_MESSAGE) from exc
        except pd.errors.ParserError as exc:
            raise MalformedInputError(MALFORMED_MESSAGE) from exc

        # pandas turns a surplus leading field into an implicit index
        if not isinstance(frame.index, pd.RangeIndex):
            raise MalformedInputError(MALFORMED_MESSAGE)
        return frame.fillna("")

class TabularError(Exception):
    """Base exception for input files that cannot be turned into rows."""


class MalformedInputError(TabularError):
    """Raised when the delimited text cannot be tokenized consistently."""


class EmptyInputError(TabularError):
    """Raised when the file yields no data rows."""


class MissingColumnError(TabularError):
    """Raised when the header lacks the identifier column."""

import re

IDENTIFIER_LENGTH = 14

_NON_DIGITS = re.compile(r"\D", re.ASCII)


def normalize_identifier(value: str | None) -> str:
    """Strip every non-digit character: '49.752.997/0001-25' -> '49752997000125'."""
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


def is_valid_identifier(digits: str) -> bool:
    return len(digits) == IDENTIFIER_LENGTH and digits.isdigit()

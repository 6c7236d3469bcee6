"""Value -> cell text conversions for enrichment columns."""

import json
import re
from typing import Any

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def stringify(value: Any) -> str:
    """Render any lookup value as cell text; null becomes an empty cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def decimal_comma(value: Any) -> str:
    """1500.75 -> '1500,75'; non-numbers fall back to stringify."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return stringify(value)
    return stringify(value).replace(".", ",")


def yes_no(value: Any) -> str:
    if not isinstance(value, bool):
        return stringify(value)
    return "Sim" if value else "Não"


def iso_to_brazilian_date(value: Any) -> str:
    """'2023-02-24' -> '24/02/2023'; anything not starting with an ISO date is kept."""
    if not isinstance(value, str):
        return stringify(value)
    match = _ISO_DATE.match(value)
    if match is None:
        return value
    year, month, day = match.groups()
    return f"{day}/{month}/{year}"

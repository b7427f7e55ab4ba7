"""
Utility functions for boleto data manipulation and formatting.

Provides helpers for:
- Due date parsing into plain calendar dates (UTC policy, see parse_date)
- Locale-independent DD/MM/YYYY formatting
- Portuguese month labels for YYYY-MM keys
- Search query matching against CNPJ and nota fiscal
"""

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from boleto_api.models.boleto import Boleto

MESES_PT = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)

NO_DATE_LABEL = "sem data"


def parse_date(value: Any) -> date | None:
    """
    Convert a stored due date into a calendar date.

    Stored values are treated as calendar dates, never shifted into the
    host timezone. Aware datetimes are normalised to UTC before the date
    is taken; naive datetimes are truncated as is.

    Accepted inputs:
    - ``date`` / ``datetime`` objects (as returned by database drivers)
    - ISO strings such as ``2025-09-10`` or ``2025-09-10T03:00:00Z``
    - Brazilian ``DD/MM/YYYY`` strings

    Args:
        value: Raw due date value from the store.

    Returns:
        The calendar date, or None when the value is empty or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_utc(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        iso = text[:-1] + "+00:00" if text.endswith("Z") else text
        return _to_utc(datetime.fromisoformat(iso)).date()
    except ValueError:
        pass

    try:
        return datetime.strptime(text, "%d/%m/%Y").date()
    except ValueError:
        pass

    return None


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def format_date(value: date | None) -> str:
    """
    Format a date as DD/MM/YYYY without touching the locale.

    Args:
        value: Date to format.

    Returns:
        Zero padded day and month with the full year, or the no-date
        label when value is None.
    """
    if value is None:
        return NO_DATE_LABEL
    return f"{value.day:02d}/{value.month:02d}/{value.year}"


def month_key(value: date) -> str:
    """Return the ``YYYY-MM`` grouping key for a date."""
    return f"{value.year:04d}-{value.month:02d}"


def month_label(key: str) -> str:
    """
    Turn a ``YYYY-MM`` key into a label like ``Setembro / 2025``.

    Keys that do not split into year and month, or whose month falls
    outside 1..12, are returned unchanged.
    """
    parts = key.split("-")
    if len(parts) != 2:
        return key
    ano, mes = parts
    try:
        index = int(mes) - 1
    except ValueError:
        return key
    if 0 <= index < len(MESES_PT):
        return f"{MESES_PT[index]} / {ano}"
    return key


def matches_query(boleto: "Boleto", query: str) -> bool:
    """
    Check if a boleto matches the search query.

    Performs case-insensitive substring matching against the CNPJ and the
    nota fiscal number.

    Args:
        boleto: Boleto to check.
        query: Search query string.

    Returns:
        True if the query occurs in either field. An empty query matches
        nothing.
    """
    normalized = query.strip().lower()
    if not normalized:
        return False
    return any(normalized in value for value in boleto.searchable_terms())

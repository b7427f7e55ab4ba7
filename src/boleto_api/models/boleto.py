"""
Boleto domain models and the row parser used at the store boundary.

The hierarchy is flat:

    Pasta (one year-month of due dates)
    └── Boleto[] (one row of the ``boletos`` table)

Rows coming from either backend are validated by parse_boleto() so a
malformed row fails fast with a BoletoSchemaError instead of producing a
broken message further down.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from benedict import benedict

from boleto_api.errors import BoletoSchemaError
from boleto_api.lib import logs
from boleto_api.utils import format_date, month_label, parse_date

LOG = logs.logger(__file__)

REQUIRED_FIELDS = ("cliente", "url_boleto")


@dataclass(frozen=True, slots=True)
class Boleto:
    """A payable document with its due date and download link."""

    cnpj: str
    nota_fiscal: str
    cliente: str
    data_vencimento: date | None
    url_boleto: str
    id: Any = None

    @property
    def formatted_due_date(self) -> str:
        """Return the due date as DD/MM/YYYY."""
        return format_date(self.data_vencimento)

    def searchable_terms(self) -> list[str]:
        """Return the lowercase values a search query is matched against."""
        return [value.lower() for value in (self.cnpj, self.nota_fiscal) if value]


@dataclass(frozen=True, slots=True)
class Pasta:
    """
    A folder of boletos sharing the same due-date year and month.

    Attributes:
        nome: Grouping key in ``YYYY-MM`` form (or the unknown-month key).
        boletos: Boletos in the order the store returned them.
    """

    nome: str
    boletos: tuple[Boleto, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        """Human readable month, e.g. ``Setembro / 2025``."""
        return month_label(self.nome)

    @property
    def total(self) -> int:
        return len(self.boletos)


def _text(row: benedict, key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def parse_boleto(row: Mapping[str, Any]) -> Boleto:
    """
    Build a Boleto from a raw store row.

    Args:
        row: Column name to value mapping as returned by the driver.

    Returns:
        Validated Boleto.

    Raises:
        BoletoSchemaError: If the row is not a mapping or lacks the client
            name or the download URL.
    """
    if not isinstance(row, Mapping):
        raise BoletoSchemaError(
            f"linha inválida retornada pelo banco ({type(row).__name__})"
        )

    b = benedict(dict(row), keypath_separator=None)
    missing = [key for key in REQUIRED_FIELDS if not _text(b, key)]
    if missing:
        raise BoletoSchemaError(
            f"boleto {b.get('id', '?')} sem campo obrigatório: {', '.join(missing)}"
        )

    raw_due = b.get("data_vencimento")
    due = parse_date(raw_due)
    if due is None:
        LOG.warning(
            "Boleto %s has no usable data_vencimento: %r", b.get("id", "?"), raw_due
        )

    return Boleto(
        cnpj=_text(b, "cnpj"),
        nota_fiscal=_text(b, "nota_fiscal"),
        cliente=_text(b, "cliente"),
        data_vencimento=due,
        url_boleto=_text(b, "url_boleto"),
        id=b.get("id"),
    )


def serialize_boleto(boleto: Boleto) -> dict:
    """Convert a Boleto into a JSON serializable dictionary."""
    return {
        "cliente": boleto.cliente,
        "data_vencimento": (
            boleto.data_vencimento.isoformat() if boleto.data_vencimento else None
        ),
        "url_boleto": boleto.url_boleto,
    }

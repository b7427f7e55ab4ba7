"""Bucket boletos into month folders (pastas) by due date."""

from typing import Iterable

from boleto_api.lib import logs
from boleto_api.models.boleto import Boleto, Pasta
from boleto_api.utils import month_key

LOG = logs.logger(__file__)

# Bucket for boletos whose due date is missing or unparseable; sorted last.
UNKNOWN_MONTH = "sem-data"


def group_by_month(boletos: Iterable[Boleto]) -> list[Pasta]:
    """
    Group boletos by the year and month of their due date.

    Args:
        boletos: Boletos in store order.

    Returns:
        Pastas sorted by ``YYYY-MM`` ascending, each keeping the store
        order of its boletos. Undated boletos end up in a final
        UNKNOWN_MONTH pasta.
    """
    buckets: dict[str, list[Boleto]] = {}
    undated: list[Boleto] = []
    for boleto in boletos:
        if boleto.data_vencimento is None:
            undated.append(boleto)
            continue
        buckets.setdefault(month_key(boleto.data_vencimento), []).append(boleto)

    pastas = [Pasta(nome=key, boletos=tuple(buckets[key])) for key in sorted(buckets)]
    if undated:
        LOG.warning(
            "%d boleto(s) without due date grouped as %s", len(undated), UNKNOWN_MONTH
        )
        pastas.append(Pasta(nome=UNKNOWN_MONTH, boletos=tuple(undated)))
    return pastas

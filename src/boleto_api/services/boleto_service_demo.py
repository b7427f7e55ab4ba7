"""
Demo implementation of BoletoService using static in-memory data.

This service is useful for:
- Local development without database access
- Testing the endpoints with realistic data
"""

from typing import Sequence

from boleto_api.data.demo_boletos import DEMO_BOLETOS
from boleto_api.models.boleto import Boleto
from boleto_api.services.boleto_service import BoletoService
from boleto_api.utils import matches_query


class DemoBoletoService(BoletoService):
    """In-memory boleto store backed by static demo data."""

    kind = "demo"

    def __init__(self, boletos: Sequence[Boleto] | None = None) -> None:
        """
        Initialize with boleto data.

        Args:
            boletos: Custom boleto list, or None to use DEMO_BOLETOS.
        """
        self._boletos: Sequence[Boleto] = (
            DEMO_BOLETOS if boletos is None else list(boletos)
        )

    def find_boletos(self, query: str) -> Sequence[Boleto]:
        """Return boletos where the CNPJ or nota fiscal contains the query."""
        return [boleto for boleto in self._boletos if matches_query(boleto, query)]

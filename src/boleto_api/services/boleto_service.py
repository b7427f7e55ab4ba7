"""
Abstract base class defining the boleto data access contract.

All store implementations extend BoletoService and provide find_boletos().
The rest of the application only talks to this contract, so the backend
can be swapped through configuration.

Implementations:
- DemoBoletoService: static in-memory data for development and tests
- MySqlBoletoService: MySQL/MariaDB server through PyMySQL
- SupabaseBoletoService: hosted Postgres through its REST endpoint
"""

import re
from abc import ABC, abstractmethod
from typing import Sequence

from boleto_api.models.boleto import Boleto

_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class BoletoService(ABC):
    """
    Abstract base class for boleto lookups.

    Attributes:
        kind: Registry name of the implementation.
    """

    kind = "abstract"

    @abstractmethod
    def find_boletos(self, query: str) -> Sequence[Boleto]:
        """
        Return boletos whose CNPJ or nota fiscal contains ``query``.

        Matching is a case-insensitive substring match. Rows come back in
        the order the store returns them.

        Args:
            query: Non-empty search text.

        Raises:
            StoreError: If the store cannot be reached or the query fails.
        """


def validate_table_name(name: str) -> str:
    """
    Ensure a configured table name is a plain SQL identifier.

    Raises:
        ValueError: If the name contains anything but letters, digits and
            underscores.
    """
    if not _TABLE_NAME.match(name or ""):
        raise ValueError(f"Invalid table name: {name!r}")
    return name

"""
Hosted Postgres (Supabase) implementation of BoletoService.

Queries the table through the PostgREST endpoint exposed by the service:

    GET {SUPABASE_URL}/rest/v1/{table}?select=*&or=(cnpj.ilike."*q*",nota_fiscal.ilike."*q*")

Values are always double quoted so commas, dots and parentheses in the
query cannot break the filter syntax, and LIKE wildcards are escaped so
the query matches literally.

Required Environment Variables:
    SUPABASE_URL: Project URL (https://<project>.supabase.co)
    SUPABASE_KEY: API key sent as ``apikey`` and bearer token
"""

from typing import Any, Sequence

import requests

from boleto_api.config import Settings
from boleto_api.errors import StoreError
from boleto_api.lib import clients, logs
from boleto_api.models.boleto import Boleto, parse_boleto
from boleto_api.services.boleto_service import BoletoService, validate_table_name

LOG = logs.logger(__file__)


def ilike_value(query: str) -> str:
    """
    Build a quoted PostgREST ``ilike`` operand for a substring match.

    Args:
        query: Raw search text.

    Returns:
        Operand such as ``"*12345*"``.
    """
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    quoted = escaped.replace("\\", "\\\\").replace('"', '\\"')
    return f'"*{quoted}*"'


class SupabaseBoletoService(BoletoService):
    """
    Boleto store backed by the hosted Postgres REST endpoint.

    Attributes:
        table: Table holding the boletos.
        endpoint: Full REST URL of the table.
    """

    kind = "supabase"

    def __init__(
        self, settings: Settings, session: requests.Session | None = None
    ) -> None:
        """
        Initialize the service.

        Args:
            settings: Application settings.
            session: Preconfigured session, replaceable in tests.

        Raises:
            ValueError: If SUPABASE_URL or SUPABASE_KEY is missing or the
                table name is not a plain identifier.
        """
        self.table = validate_table_name(settings.table)
        self._session = session or clients.rest_session(settings.supabase)
        self._timeout = settings.supabase.timeout
        base_url = (settings.supabase.url or "").rstrip("/")
        self.endpoint = f"{base_url}/rest/v1/{self.table}"

    def find_boletos(self, query: str) -> Sequence[Boleto]:
        value = ilike_value(query)
        params = {
            "select": "*",
            "or": f"(cnpj.ilike.{value},nota_fiscal.ilike.{value})",
        }
        LOG.info("Querying %s", self.endpoint)

        try:
            response = self._session.get(
                self.endpoint, params=params, timeout=self._timeout
            )
        except requests.RequestException as exc:
            LOG.error("Request to %s failed: %s", self.endpoint, exc)
            raise StoreError(str(exc)) from exc

        rows = self._rows(response)
        LOG.info("Query returned %d row(s)", len(rows))
        return [parse_boleto(row) for row in rows]

    def _rows(self, response: requests.Response) -> list[Any]:
        """Decode the JSON array body, turning API errors into StoreError."""
        try:
            payload = response.json()
        except ValueError as exc:
            raise StoreError(
                f"resposta inválida do banco (HTTP {response.status_code})"
            ) from exc

        if not response.ok:
            detail = payload.get("message") if isinstance(payload, dict) else None
            LOG.error(
                "REST query failed with HTTP %s: %s", response.status_code, payload
            )
            raise StoreError(detail or f"HTTP {response.status_code}")

        if not isinstance(payload, list):
            raise StoreError("resposta inválida do banco (esperado uma lista)")
        return payload

"""
Service factory for the Boleto API.

This module provides the get_boleto_service() factory function that returns
the BoletoService implementation selected by configuration.

Available Implementations:
- mysql: MySQL/MariaDB server (default)
- supabase: hosted Postgres through its REST endpoint
- demo: in-memory service with static boleto data (no database required)

Configure via the BOLETO_API_SERVICE environment variable.
"""

from typing import Callable, Dict

from boleto_api.config import Settings
from boleto_api.lib import logs
from boleto_api.services.boleto_service import BoletoService
from boleto_api.services.boleto_service_demo import DemoBoletoService
from boleto_api.services.boleto_service_mysql import MySqlBoletoService
from boleto_api.services.boleto_service_supabase import SupabaseBoletoService

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[Settings], BoletoService]] = {
    "demo": lambda settings: DemoBoletoService(),
    "mysql": MySqlBoletoService,
    "supabase": SupabaseBoletoService,
}


def get_boleto_service(
    settings: Settings, kind: str | None = None
) -> BoletoService:
    """Return the configured boleto service implementation."""
    resolved_kind = (kind or settings.service).lower()
    LOG.info("get_boleto_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown boleto service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory(settings)


__all__ = [
    "BoletoService",
    "DemoBoletoService",
    "MySqlBoletoService",
    "SupabaseBoletoService",
    "get_boleto_service",
]

"""
Infrastructure helpers shared by the Boleto API.

Modules:
    logs: Logging utilities
    clients: Database client factories (PyMySQL, REST session)
"""

from boleto_api.lib import clients, logs

__all__ = ["clients", "logs"]

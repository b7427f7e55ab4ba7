"""
MySQL/MariaDB implementation of BoletoService.

Each lookup opens a fresh connection, runs a single parameterised LIKE
query against the configured table and closes the connection again. Both
sides of the LIKE are lowercased, so matching ignores the column collation.

Required Environment Variables:
    DB_USER, DB_NAME (DB_HOST, DB_PORT and DB_PASSWORD are optional)
"""

from typing import Callable, Sequence

import pymysql

from boleto_api.config import DatabaseSettings, Settings
from boleto_api.errors import StoreError
from boleto_api.lib import clients, logs
from boleto_api.models.boleto import Boleto, parse_boleto
from boleto_api.services.boleto_service import BoletoService, validate_table_name

LOG = logs.logger(__file__)

Connect = Callable[[DatabaseSettings], pymysql.connections.Connection]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MySqlBoletoService(BoletoService):
    """
    Boleto store backed by a MySQL/MariaDB server.

    Attributes:
        table: Table holding the boletos.
    """

    kind = "mysql"

    def __init__(
        self, settings: Settings, connect: Connect = clients.mysql_connection
    ) -> None:
        """
        Initialize the service with connection settings.

        Args:
            settings: Application settings.
            connect: Connection factory, replaceable in tests.

        Raises:
            ValueError: If DB_USER or DB_NAME is missing or the table name
                is not a plain identifier.
        """
        if not settings.database.user or not settings.database.name:
            raise ValueError("DB_USER and DB_NAME must be set for the mysql service")
        self.table = validate_table_name(settings.table)
        self._database = settings.database
        self._connect = connect

    def find_boletos(self, query: str) -> Sequence[Boleto]:
        pattern = f"%{escape_like(query)}%"
        sql = (
            f"SELECT * FROM `{self.table}` "
            "WHERE LOWER(cnpj) LIKE LOWER(%s) OR LOWER(nota_fiscal) LIKE LOWER(%s)"
        )
        LOG.info(
            "Querying %s on %s:%s", self.table, self._database.host, self._database.port
        )

        try:
            connection = self._connect(self._database)
        except pymysql.MySQLError as exc:
            LOG.error("Connection to %s failed: %s", self._database.host, exc)
            raise StoreError(str(exc)) from exc

        try:
            with connection.cursor() as cursor:
                cursor.execute(sql, (pattern, pattern))
                rows = cursor.fetchall()
        except pymysql.MySQLError as exc:
            LOG.error("Query on %s failed: %s", self.table, exc)
            raise StoreError(str(exc)) from exc
        finally:
            connection.close()

        LOG.info("Query returned %d row(s)", len(rows))
        return [parse_boleto(row) for row in rows]

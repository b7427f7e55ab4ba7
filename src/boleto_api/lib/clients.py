"""
Client factories for the two database backends.

Provides:
- mysql_connection(): a fresh PyMySQL connection returning rows as dicts
- rest_session(): a requests Session preconfigured for the hosted
  Postgres REST endpoint (apikey and bearer headers)

rest_session() validates that the URL and key are present; the MySQL
credentials are checked once, by MySqlBoletoService.
"""

import pymysql
import pymysql.cursors
import requests

from boleto_api.config import DatabaseSettings, SupabaseSettings


def mysql_connection(settings: DatabaseSettings) -> pymysql.connections.Connection:
    """
    Open a new connection to the MySQL/MariaDB server.

    Rows are returned as dictionaries keyed by column name. The caller
    owns the connection and must close it.

    Args:
        settings: Connection parameters.

    Returns:
        Open PyMySQL connection.

    Raises:
        pymysql.MySQLError: If the server cannot be reached.
    """
    return pymysql.connect(
        host=settings.host,
        port=settings.port,
        user=settings.user,
        password=settings.password or "",
        database=settings.name,
        charset="utf8mb4",
        connect_timeout=settings.connect_timeout,
        cursorclass=pymysql.cursors.DictCursor,
    )


def rest_session(settings: SupabaseSettings) -> requests.Session:
    """
    Return a requests Session authenticated against the REST endpoint.

    Args:
        settings: Endpoint URL and API key.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY is not configured.
    """
    missing = [
        key
        for key, value in (
            ("SUPABASE_URL", settings.url),
            ("SUPABASE_KEY", settings.key),
        )
        if not value
    ]
    if missing:
        raise ValueError(f"Missing Supabase settings: {', '.join(missing)}")

    session = requests.Session()
    session.headers.update(
        {
            "apikey": settings.key,
            "Authorization": f"Bearer {settings.key}",
            "Accept": "application/json",
        }
    )
    return session

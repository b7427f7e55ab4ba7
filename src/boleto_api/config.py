"""
Runtime configuration for the Boleto API.

All settings come from environment variables. A ``.env`` file in the
working directory is loaded first (without overriding variables that are
already set), so deployments can keep credentials out of the shell.

Backends:
- mysql: MySQL/MariaDB server (DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME)
- supabase: hosted Postgres REST endpoint (SUPABASE_URL, SUPABASE_KEY)
- demo: in-memory fixtures, no credentials required
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv

SESSION_MODES = ("token", "shared")


def _get(env: Mapping[str, str], key: str, default: str | None = None) -> str | None:
    value = env.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Connection parameters for the MySQL/MariaDB backend."""

    host: str = "localhost"
    port: int = 3306
    user: str | None = None
    password: str | None = None
    name: str | None = None
    connect_timeout: int = 10


@dataclass(frozen=True, slots=True)
class SupabaseSettings:
    """Endpoint and key for the hosted Postgres REST backend."""

    url: str | None = None
    key: str | None = None
    timeout: int = 10


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Top level application settings.

    Attributes:
        service: Store backend kind (mysql, supabase or demo).
        table: Name of the table holding the boletos.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        session_mode: ``token`` for per-caller sessions, ``shared`` for a
            single process-wide session.
        session_ttl: Seconds an idle session is kept; 0 keeps it forever.
    """

    service: str = "mysql"
    table: str = "boletos"
    host: str = "0.0.0.0"
    port: int = 5000
    session_mode: str = "token"
    session_ttl: int = 3600
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    supabase: SupabaseSettings = field(default_factory=SupabaseSettings)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from a mapping of environment variables.

        Args:
            env: Variables to read; defaults to ``os.environ`` after loading
                any ``.env`` file.

        Raises:
            ValueError: If a numeric variable is not an integer or the
                session mode is unknown.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        session_mode = (_get(env, "BOLETO_API_SESSION_MODE", "token") or "").lower()
        if session_mode not in SESSION_MODES:
            raise ValueError(
                f"BOLETO_API_SESSION_MODE must be one of {SESSION_MODES}, "
                f"got {session_mode!r}"
            )

        return cls(
            service=(_get(env, "BOLETO_API_SERVICE", "mysql") or "").lower(),
            table=_get(env, "BOLETO_TABLE", "boletos"),
            host=_get(env, "HOST", "0.0.0.0"),
            port=_get_int(env, "PORT", 5000),
            session_mode=session_mode,
            session_ttl=max(_get_int(env, "BOLETO_API_SESSION_TTL", 3600), 0),
            database=DatabaseSettings(
                host=_get(env, "DB_HOST", "localhost"),
                port=_get_int(env, "DB_PORT", 3306),
                user=_get(env, "DB_USER"),
                password=env.get("DB_PASSWORD"),
                name=_get(env, "DB_NAME"),
                connect_timeout=_get_int(env, "DB_CONNECT_TIMEOUT", 10),
            ),
            supabase=SupabaseSettings(
                url=_get(env, "SUPABASE_URL"),
                key=_get(env, "SUPABASE_KEY"),
                timeout=_get_int(env, "SUPABASE_TIMEOUT", 10),
            ),
        )

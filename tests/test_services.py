"""Tests for the store backends and the service factory."""

from datetime import date

import pymysql
import pytest
import requests

from boleto_api.config import DatabaseSettings, Settings, SupabaseSettings
from boleto_api.errors import BoletoSchemaError, StoreError
from boleto_api.services import (
    DemoBoletoService,
    MySqlBoletoService,
    SupabaseBoletoService,
    get_boleto_service,
)
from boleto_api.services.boleto_service import validate_table_name
from boleto_api.services.boleto_service_mysql import escape_like
from boleto_api.services.boleto_service_supabase import ilike_value

ROW = {
    "id": 1,
    "cnpj": "12345",
    "nota_fiscal": "NF-1",
    "cliente": "Empresa Setembro",
    "data_vencimento": date(2025, 9, 10),
    "url_boleto": "https://files.example.com/1.pdf",
}


# ---------- fakes ----------


class FakeCursor:
    def __init__(self, rows, error=None):
        self.rows = rows
        self.error = error
        self.executed = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params):
        self.executed.append((sql, params))
        if self.error:
            raise self.error

    def fetchall(self):
        return self.rows


class FakeConnection:
    def __init__(self, rows=(), error=None):
        self.cursor_obj = FakeCursor(list(rows), error)
        self.closed = False

    def cursor(self):
        return self.cursor_obj

    def close(self):
        self.closed = True


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def _mysql_settings(**overrides):
    database = DatabaseSettings(user="app", password="secret", name="financeiro")
    return Settings(service="mysql", database=database, **overrides)


def _rest_settings():
    return Settings(
        service="supabase",
        supabase=SupabaseSettings(url="https://proj.supabase.co/", key="anon-key", timeout=5),
    )


# ---------- factory ----------


def test_factory_builds_demo_service():
    service = get_boleto_service(Settings(service="demo"))
    assert isinstance(service, DemoBoletoService)
    assert service.find_boletos("12.345.678")


def test_factory_kind_overrides_settings():
    service = get_boleto_service(_mysql_settings(), kind="DEMO")
    assert service.kind == "demo"


def test_factory_builds_mysql_service():
    assert isinstance(get_boleto_service(_mysql_settings()), MySqlBoletoService)


def test_factory_builds_supabase_service():
    assert isinstance(get_boleto_service(_rest_settings()), SupabaseBoletoService)


def test_factory_rejects_unknown_kind():
    with pytest.raises(ValueError, match="Unknown boleto service kind"):
        get_boleto_service(Settings(service="oracle"))


def test_mysql_requires_credentials():
    with pytest.raises(ValueError):
        get_boleto_service(Settings(service="mysql"))


def test_mysql_requires_database_name():
    settings = Settings(service="mysql", database=DatabaseSettings(user="app"))
    with pytest.raises(ValueError, match="DB_USER and DB_NAME"):
        MySqlBoletoService(settings, connect=lambda db: FakeConnection([]))


def test_supabase_requires_credentials():
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        get_boleto_service(Settings(service="supabase"))


@pytest.mark.parametrize("name", ["boletos", "_t1", "Boletos_2025"])
def test_validate_table_name_accepts_identifiers(name):
    assert validate_table_name(name) == name


@pytest.mark.parametrize("name", ["", "boletos; drop table x", "a.b", "1abc", "b`c"])
def test_validate_table_name_rejects_everything_else(name):
    with pytest.raises(ValueError):
        validate_table_name(name)


# ---------- demo ----------


def test_demo_service_with_empty_list_finds_nothing():
    assert DemoBoletoService([]).find_boletos("1") == []


# ---------- mysql ----------


def test_escape_like():
    assert escape_like("10%_a\\b") == "10\\%\\_a\\\\b"


def test_mysql_runs_parameterised_like_query():
    connection = FakeConnection([ROW])
    service = MySqlBoletoService(_mysql_settings(), connect=lambda db: connection)

    boletos = service.find_boletos("123")

    assert [b.cliente for b in boletos] == ["Empresa Setembro"]
    sql, params = connection.cursor_obj.executed[0]
    assert sql == (
        "SELECT * FROM `boletos` "
        "WHERE LOWER(cnpj) LIKE LOWER(%s) OR LOWER(nota_fiscal) LIKE LOWER(%s)"
    )
    assert params == ("%123%", "%123%")
    assert connection.closed


def test_mysql_lowercases_both_sides_of_like():
    connection = FakeConnection([ROW])
    service = MySqlBoletoService(_mysql_settings(), connect=lambda db: connection)

    service.find_boletos("NF-ABC")

    sql, params = connection.cursor_obj.executed[0]
    assert "LOWER(cnpj) LIKE LOWER(%s)" in sql
    assert "LOWER(nota_fiscal) LIKE LOWER(%s)" in sql
    assert params == ("%NF-ABC%", "%NF-ABC%")


def test_mysql_passes_database_settings_to_connect():
    seen = []

    def connect(db):
        seen.append(db)
        return FakeConnection()

    MySqlBoletoService(_mysql_settings(), connect=connect).find_boletos("1")
    assert seen[0].name == "financeiro"


def test_mysql_uses_configured_table():
    connection = FakeConnection()
    service = MySqlBoletoService(
        _mysql_settings(table="boletos_2025"), connect=lambda db: connection
    )
    service.find_boletos("1")
    assert "FROM `boletos_2025`" in connection.cursor_obj.executed[0][0]


def test_mysql_connection_failure_becomes_store_error():
    def connect(db):
        raise pymysql.err.OperationalError(2003, "Can't connect to MySQL server")

    service = MySqlBoletoService(_mysql_settings(), connect=connect)
    with pytest.raises(StoreError, match="2003"):
        service.find_boletos("123")


def test_mysql_query_failure_closes_connection():
    connection = FakeConnection(error=pymysql.err.ProgrammingError(1146, "Table doesn't exist"))
    service = MySqlBoletoService(_mysql_settings(), connect=lambda db: connection)
    with pytest.raises(StoreError, match="1146"):
        service.find_boletos("123")
    assert connection.closed


def test_mysql_malformed_row_raises_schema_error():
    connection = FakeConnection([{"id": 9, "cnpj": "123"}])
    service = MySqlBoletoService(_mysql_settings(), connect=lambda db: connection)
    with pytest.raises(BoletoSchemaError):
        service.find_boletos("123")


# ---------- supabase ----------


def test_ilike_value_quotes_and_escapes():
    assert ilike_value("12345") == '"*12345*"'
    assert ilike_value("a,b(c)") == '"*a,b(c)*"'
    assert ilike_value('x"y') == '"*x\\"y*"'
    assert ilike_value("10%") == '"*10\\\\%*"'


def test_supabase_queries_rest_endpoint():
    rest_row = dict(ROW, data_vencimento="2025-09-10")
    session = FakeSession(FakeResponse([rest_row]))
    service = SupabaseBoletoService(_rest_settings(), session=session)

    boletos = service.find_boletos("123")

    assert boletos[0].data_vencimento == date(2025, 9, 10)
    call = session.calls[0]
    assert call["url"] == "https://proj.supabase.co/rest/v1/boletos"
    assert call["params"] == {
        "select": "*",
        "or": '(cnpj.ilike."*123*",nota_fiscal.ilike."*123*")',
    }
    assert call["timeout"] == 5


def test_supabase_network_failure_becomes_store_error():
    session = FakeSession(error=requests.ConnectionError("name resolution failed"))
    service = SupabaseBoletoService(_rest_settings(), session=session)
    with pytest.raises(StoreError, match="name resolution failed"):
        service.find_boletos("123")


def test_supabase_api_error_uses_server_message():
    response = FakeResponse({"message": "permission denied for table boletos"}, 401)
    service = SupabaseBoletoService(_rest_settings(), session=FakeSession(response))
    with pytest.raises(StoreError, match="permission denied"):
        service.find_boletos("123")


def test_supabase_non_json_body():
    response = FakeResponse(ValueError("no json"), 502)
    service = SupabaseBoletoService(_rest_settings(), session=FakeSession(response))
    with pytest.raises(StoreError, match="HTTP 502"):
        service.find_boletos("123")


def test_supabase_unexpected_payload_shape():
    response = FakeResponse({"rows": []})
    service = SupabaseBoletoService(_rest_settings(), session=FakeSession(response))
    with pytest.raises(StoreError):
        service.find_boletos("123")


def test_rest_session_sends_api_key_headers():
    from boleto_api.lib.clients import rest_session

    session = rest_session(SupabaseSettings(url="https://proj.supabase.co", key="k"))
    assert session.headers["apikey"] == "k"
    assert session.headers["Authorization"] == "Bearer k"

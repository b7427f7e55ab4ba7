"""Shared test fixtures for boleto_api."""

from datetime import date

import pytest

from boleto_api.app import create_app
from boleto_api.config import Settings
from boleto_api.models.boleto import Boleto
from boleto_api.services.boleto_service_demo import DemoBoletoService


def make_boleto(
    cliente: str,
    due: date | None,
    cnpj: str = "12345",
    nota_fiscal: str = "NF-1",
    url: str | None = None,
    id: int | None = None,
) -> Boleto:
    return Boleto(
        id=id,
        cnpj=cnpj,
        nota_fiscal=nota_fiscal,
        cliente=cliente,
        data_vencimento=due,
        url_boleto=url or f"https://files.example.com/{cliente.lower().replace(' ', '-')}.pdf",
    )


@pytest.fixture
def boletos():
    """Two boletos for CNPJ 12345 in different months plus an unrelated one."""
    return [
        make_boleto("Empresa Outubro", date(2025, 10, 2), nota_fiscal="NF-200", id=2),
        make_boleto("Empresa Setembro", date(2025, 9, 10), nota_fiscal="NF-100", id=1),
        make_boleto(
            "Outra Empresa",
            date(2024, 1, 31),
            cnpj="99999",
            nota_fiscal="NF-777",
            id=3,
        ),
    ]


@pytest.fixture
def service(boletos):
    return DemoBoletoService(boletos)


@pytest.fixture
def settings():
    return Settings(service="demo")


@pytest.fixture
def shared_settings():
    return Settings(service="demo", session_mode="shared")


@pytest.fixture
def app(settings, service):
    app = create_app(settings, service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def shared_client(shared_settings, service):
    app = create_app(shared_settings, service)
    app.config["TESTING"] = True
    return app.test_client()

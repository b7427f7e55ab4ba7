"""Demo boletos used by DemoBoletoService."""

from datetime import date

from boleto_api.models.boleto import Boleto

_BASE_URL = "https://storage.example.com/boletos"

DEMO_BOLETOS: list[Boleto] = [
    Boleto(
        id=1,
        cnpj="12.345.678/0001-90",
        nota_fiscal="NF-1001",
        cliente="Comercial Aurora Ltda",
        data_vencimento=date(2025, 9, 10),
        url_boleto=f"{_BASE_URL}/nf-1001.pdf",
    ),
    Boleto(
        id=2,
        cnpj="12.345.678/0001-90",
        nota_fiscal="NF-1002",
        cliente="Comercial Aurora Ltda",
        data_vencimento=date(2025, 9, 25),
        url_boleto=f"{_BASE_URL}/nf-1002.pdf",
    ),
    Boleto(
        id=3,
        cnpj="12.345.678/0001-90",
        nota_fiscal="NF-1040",
        cliente="Comercial Aurora Ltda",
        data_vencimento=date(2025, 10, 2),
        url_boleto=f"{_BASE_URL}/nf-1040.pdf",
    ),
    Boleto(
        id=4,
        cnpj="98.765.432/0001-10",
        nota_fiscal="NF-2001",
        cliente="Distribuidora Serra Azul S.A.",
        data_vencimento=date(2025, 8, 15),
        url_boleto=f"{_BASE_URL}/nf-2001.pdf",
    ),
    Boleto(
        id=5,
        cnpj="98.765.432/0001-10",
        nota_fiscal="NF-2002",
        cliente="Distribuidora Serra Azul S.A.",
        data_vencimento=date(2026, 1, 5),
        url_boleto=f"{_BASE_URL}/nf-2002.pdf",
    ),
]

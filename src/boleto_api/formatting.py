"""
Chat message builders.

Pure functions that render pastas and boletos as WhatsApp/Telegram style
text: ``*bold*`` emphasis, emoji headers and numbered lines the user
answers with a number.
"""

from typing import Sequence

from boleto_api.models.boleto import Boleto, Pasta


def format_pasta_list(pastas: Sequence[Pasta]) -> str:
    """List the months found by a search, numbered from 1."""
    lines = [f"✅ *Foram encontrados boletos em {len(pastas)} meses:*", ""]
    lines.extend(f"*{i}* - {pasta.label}" for i, pasta in enumerate(pastas, start=1))
    lines.extend(["", "📋 *Digite o número do mês para acessar:*"])
    return "\n".join(lines)


def format_boleto_list(pasta: Pasta) -> str:
    """List the boletos of the chosen month with client name and due date."""
    lines = [
        f"📁 *Mês escolhido: {pasta.label}*",
        f"✅ *Encontrados {pasta.total} boleto(s):*",
        "",
    ]
    lines.extend(
        f"*{i}* - {boleto.cliente} ({boleto.formatted_due_date})"
        for i, boleto in enumerate(pasta.boletos, start=1)
    )
    lines.extend(["", "💾 *Escolha qual boleto deseja fazer o download:*"])
    return "\n".join(lines)


def format_download_message(boleto: Boleto) -> str:
    """Render the download link of a single boleto."""
    return (
        "📄 *Boleto encontrado!*\n\n"
        f"*Nome:* {boleto.cliente} ({boleto.formatted_due_date})\n"
        f"*Link:* {boleto.url_boleto}\n\n"
        "🔗 *Clique no link para baixar*"
    )

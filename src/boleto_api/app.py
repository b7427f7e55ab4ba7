"""
Flask application entry point for the Boleto API.

Endpoints (all POST, JSON in, JSON out, always HTTP 200):
- /buscar_documentos: search boletos by CNPJ or nota fiscal
- /listar_documentos: list the boletos of one month of the last search
- /baixar_documento: return the download link of one boleto

Errors are reported in-band: ``ok`` is false, ``error`` names the kind and
``message`` carries the text the chat user sees.
"""

from typing import Any

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from boleto_api.config import Settings
from boleto_api.errors import BoletoApiError, StoreError
from boleto_api.formatting import (
    format_boleto_list,
    format_download_message,
    format_pasta_list,
)
from boleto_api.lib import logs
from boleto_api.models.boleto import serialize_boleto
from boleto_api.models.common import ApiResult
from boleto_api.services import BoletoService, get_boleto_service
from boleto_api.state import BoletoNavigator, SessionRegistry

LOG = logs.logger(__file__)

SESSION_HEADER = "X-Session-Id"
_EXTENSION_KEY = "boleto_api"


def create_app(
    settings: Settings | None = None, service: BoletoService | None = None
) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Application settings; read from the environment if omitted.
        service: Store implementation; built from settings if omitted.

    Returns:
        Configured Flask app.
    """
    settings = settings or Settings.from_env()
    service = service or get_boleto_service(settings)
    registry = SessionRegistry(mode=settings.session_mode, ttl=settings.session_ttl)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.extensions[_EXTENSION_KEY] = BoletoNavigator(service, registry)
    CORS(app, origins="*", send_wildcard=True)

    app.add_url_rule(
        "/buscar_documentos", view_func=buscar_documentos, methods=["POST"]
    )
    app.add_url_rule(
        "/listar_documentos", view_func=listar_documentos, methods=["POST"]
    )
    app.add_url_rule("/baixar_documento", view_func=baixar_documento, methods=["POST"])
    app.add_url_rule("/health", view_func=health, methods=["GET"])
    app.register_error_handler(Exception, _handle_unexpected)

    LOG.info(
        "App created - service:%s session_mode:%s session_ttl:%s",
        service.kind,
        settings.session_mode,
        settings.session_ttl,
    )
    return app


def _navigator() -> BoletoNavigator:
    return current_app.extensions[_EXTENSION_KEY]


def _body() -> dict[str, Any]:
    """Return the JSON body, or an empty dict when it is missing or not an object."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _session_id(body: dict[str, Any]) -> Any:
    return body.get("session_id") or request.headers.get(SESSION_HEADER)


def _search_query(body: dict[str, Any]) -> str:
    """Pick the CNPJ if given, otherwise the nota fiscal."""
    for key in ("cnpj", "nota_fiscal"):
        value = body.get(key)
        if value is None or isinstance(value, (dict, list, bool)):
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def _reply(result: ApiResult):
    return jsonify(result.to_dict())


def _failure(endpoint: str, error: BoletoApiError, session_id: Any = None):
    if isinstance(error, StoreError):
        LOG.warning("%s - store error: %s", endpoint, error.message)
    else:
        LOG.info("%s - %s: %s", endpoint, error.kind, error.message)
    sid = session_id if isinstance(session_id, str) else None
    return _reply(ApiResult.failure(error, session_id=sid))


def buscar_documentos():
    body = _body()
    session_id = _session_id(body)
    query = _search_query(body)
    try:
        sid, pastas = _navigator().search(query, session_id)
    except BoletoApiError as exc:
        return _failure("buscar_documentos", exc, session_id)

    data = {
        "pastas": [
            {"numero": i, "nome": pasta.nome, "total": pasta.total}
            for i, pasta in enumerate(pastas, start=1)
        ]
    }
    return _reply(ApiResult.success(format_pasta_list(pastas), data, sid))


def listar_documentos():
    body = _body()
    session_id = _session_id(body)
    try:
        sid, pasta = _navigator().select_pasta(body.get("numero_pasta"), session_id)
    except BoletoApiError as exc:
        return _failure("listar_documentos", exc, session_id)

    data = {
        "pasta": pasta.nome,
        "boletos": [
            {
                "numero": i,
                "cliente": boleto.cliente,
                "data_vencimento": serialize_boleto(boleto)["data_vencimento"],
            }
            for i, boleto in enumerate(pasta.boletos, start=1)
        ],
    }
    return _reply(ApiResult.success(format_boleto_list(pasta), data, sid))


def baixar_documento():
    body = _body()
    session_id = _session_id(body)
    try:
        sid, boleto = _navigator().select_boleto(
            body.get("numero_documento"), session_id
        )
    except BoletoApiError as exc:
        return _failure("baixar_documento", exc, session_id)

    data = {"boleto": serialize_boleto(boleto)}
    return _reply(ApiResult.success(format_download_message(boleto), data, sid))


def health():
    return jsonify({"ok": True, "service": _navigator().service.kind})


def _handle_unexpected(exc: Exception):
    """Keep unexpected failures in-band; routing errors stay as HTTP errors."""
    if isinstance(exc, HTTPException):
        return exc
    LOG.error("Unhandled error on %s", request.path, exc_info=exc)
    return _reply(ApiResult.failure(StoreError(str(exc) or type(exc).__name__)))


def main() -> None:
    """Entrypoint used by ``boleto-api``."""
    settings = Settings.from_env()
    app = create_app(settings)
    LOG.info("🚀 API rodando em http://localhost:%s", settings.port)
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()

"""
Response models shared by every endpoint.

Each endpoint answers with an ApiResult. The chat front-end only reads
``message``; programmatic callers can branch on ``ok`` and ``error``
instead of parsing the text.
"""

from dataclasses import dataclass, field
from typing import Any

from boleto_api.errors import BoletoApiError


@dataclass
class ApiResult:
    """
    Tagged result of a request.

    Attributes:
        ok: True on success.
        message: Text rendered for the chat user (always present).
        error: Error kind on failure (validation, not_found, selection, store).
        data: Structured payload on success.
        session_id: Session the request ran against, when one applies.
    """

    ok: bool
    message: str
    error: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    session_id: str | None = None

    @classmethod
    def success(
        cls, message: str, data: dict[str, Any], session_id: str | None = None
    ) -> "ApiResult":
        return cls(ok=True, message=message, data=data, session_id=session_id)

    @classmethod
    def failure(
        cls, error: BoletoApiError, session_id: str | None = None
    ) -> "ApiResult":
        return cls(
            ok=False,
            message=error.user_message,
            error=error.kind,
            session_id=session_id,
        )

    def to_dict(self) -> dict:
        """Serialize to the JSON body sent back to the caller."""
        body: dict[str, Any] = {"ok": self.ok, "message": self.message}
        if self.session_id:
            body["session_id"] = self.session_id
        if self.ok:
            body["data"] = self.data
        else:
            body["error"] = self.error
        return body

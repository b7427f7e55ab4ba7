"""
Error taxonomy for the Boleto API.

Every error carries a ``kind`` that ends up in the structured response
and a user-facing message in Portuguese. Handlers catch BoletoApiError at
the HTTP boundary and render it in-band; none of these ever produce a
non-200 response.
"""


class BoletoApiError(Exception):
    """Base class for errors that are reported back to the chat user."""

    kind = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        """Return the emoji-prefixed text shown to the user."""
        return f"❌ {self.message}"


class ValidationError(BoletoApiError):
    """No identifying field (CNPJ or nota fiscal) was supplied."""

    kind = "validation"


class NotFoundError(BoletoApiError):
    """The search ran but matched no boletos."""

    kind = "not_found"


class SelectionError(BoletoApiError):
    """An index is out of range or its prerequisite step never happened."""

    kind = "selection"


class StoreError(BoletoApiError):
    """The underlying database could not be queried."""

    kind = "store"

    @property
    def user_message(self) -> str:
        return f"❌ Erro interno: {self.message}"


class BoletoSchemaError(StoreError):
    """A row returned by the store does not have the expected shape."""

"""
Data models for the Boleto API.

This package provides:
- Boleto and Pasta domain models plus the store row parser
- ApiResult, the tagged response returned by every endpoint

All models use Python dataclasses.
"""

from boleto_api.models.boleto import Boleto, Pasta, parse_boleto, serialize_boleto
from boleto_api.models.common import ApiResult

__all__ = [
    "ApiResult",
    "Boleto",
    "Pasta",
    "parse_boleto",
    "serialize_boleto",
]

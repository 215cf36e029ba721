"""
Error taxonomy for the AI services and the state store.

Every error carries two messages:
- ``str(exc)``: internal diagnostic, logged, never shown to end users
- ``exc.user_message``: localized text that the presentation layer may display

The category is logged alongside the diagnostic; users only ever see the
message of the operation that failed.
"""

from __future__ import annotations

from typing import ClassVar

# User-facing messages (Spanish, matching the UI language)
GENERIC_ERROR_MESSAGE = "Ocurrió un error inesperado. Por favor, intente de nuevo."
PARSE_ERROR_MESSAGE = (
    "La respuesta de la IA no tenía el formato JSON esperado. Por favor, intente de nuevo."
)
VALIDATION_ERROR_MESSAGE = "La IA devolvió datos en un formato incorrecto."
DATA_GENERATION_FAILED = (
    "No se pudieron generar los datos del gráfico desde la IA. "
    "Verifique su clave de API y la consulta."
)
INSIGHT_GENERATION_FAILED = "No se pudieron generar las ideas desde la IA."
INVALID_ITEM_MESSAGE = (
    "Por favor, ingrese un nombre válido y un valor numérico para el elemento."
)


class ChartcraftError(Exception):
    """Base error. ``category`` names the failure class for logs and counters."""

    category: ClassVar[str] = "internal"
    default_user_message: ClassVar[str] = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or self.default_user_message

    def for_operation(self, user_message: str) -> ChartcraftError:
        """Copy of this error (same class, same diagnostic) with another user message."""
        return type(self)(str(self), user_message=user_message)


class TransportError(ChartcraftError):
    """The inference API could not be reached or returned a failure."""

    category = "transport"


class EmptyResponseError(TransportError):
    """The inference API answered without any usable text."""

    category = "empty_response"


class ParseError(ChartcraftError):
    """Model output could not be decoded as JSON, even after fence stripping."""

    category = "parse"
    default_user_message = PARSE_ERROR_MESSAGE


class ValidationError(ChartcraftError):
    """Decoded model output (or manual input) violates the chart data schema."""

    category = "validation"
    default_user_message = VALIDATION_ERROR_MESSAGE


class PersistenceError(ChartcraftError):
    """Durable storage read/write failure. Never propagates past the store."""

    category = "persistence"


__all__ = [
    "DATA_GENERATION_FAILED",
    "INSIGHT_GENERATION_FAILED",
    "INVALID_ITEM_MESSAGE",
    "ChartcraftError",
    "EmptyResponseError",
    "ParseError",
    "PersistenceError",
    "TransportError",
    "ValidationError",
]

"""Custom exceptions for the audit engine.

Every error raised by the engine derives from AuditError so callers can
catch a single type at the boundary. Analyzers catch their own failures
and turn them into error sections; the aggregator never raises.
"""

from typing import Any


class AuditError(Exception):
    """Base exception for audit errors."""

    def __init__(
        self,
        message: str,
        code: str = "audit_error",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class InvalidInputError(AuditError):
    """Input HTML, URL or collected signals could not be used."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="invalid_input",
            details={"field": field} if field else {},
        )


class WeightConfigurationError(AuditError):
    """Category weights are negative or do not sum to 100."""

    def __init__(self, message: str, weights: dict[str, int] | None = None):
        super().__init__(
            message=message,
            code="weight_configuration_error",
            details={"weights": weights} if weights else {},
        )


class AnalyzerError(AuditError):
    """A category analyzer failed or timed out."""

    def __init__(self, category: str, message: str):
        super().__init__(
            message=f"{category}: {message}",
            code="analyzer_error",
            details={"category": category},
        )
        self.category = category

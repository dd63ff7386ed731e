"""
Exceptions raised by the request pipeline.

Each carries the HTTP status and the client-facing message it maps to;
the application renders them in one exception handler.
"""

from fastapi import status


class ContractAnalyzerError(Exception):
    """Base class for errors that translate into an HTTP error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ContractAnalyzerError):
    """Raised when a request field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class PaymentRequiredError(ContractAnalyzerError):
    """Raised when a query is made without a confirmed paid session."""

    status_code = status.HTTP_402_PAYMENT_REQUIRED


class ConfigurationError(ContractAnalyzerError):
    """Raised when a provider credential is not configured."""

    pass


class ExtractionError(ContractAnalyzerError):
    """Raised when text cannot be extracted from an upload."""

    pass


class ProviderError(ContractAnalyzerError):
    """Raised when the payment or completion provider call fails."""

    pass

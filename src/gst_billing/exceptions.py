"""Exception hierarchy for GST Billing.

The calculation engine itself never raises on numeric input: bad values are
coerced. These exceptions belong to the boundary around it (payload parsing,
configuration, the CLI) and all inherit from GSTBillingError so callers can
catch application errors with a single base class.
"""

from typing import Any


class GSTBillingError(Exception):
    """Base exception for all GST Billing errors.

    Includes an error_code for machine-readable responses and extra context.
    """

    error_code: str = "GSTB_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Document Errors
# =============================================================================


class DocumentError(GSTBillingError):
    """Base exception for document-related errors."""

    error_code = "DOCUMENT_ERROR"


class InvalidDocumentPayloadError(DocumentError):
    """Raised when a persisted document cannot be read as a document."""

    error_code = "INVALID_DOCUMENT_PAYLOAD"

    def __init__(self, reason: str, source: str | None = None) -> None:
        context: dict[str, Any] = {"reason": reason}
        if source is not None:
            context["source"] = source
        super().__init__(f"Invalid document payload: {reason}", context=context)


class UnknownDocumentTypeError(DocumentError):
    """Raised when a document type name is not recognised."""

    error_code = "UNKNOWN_DOCUMENT_TYPE"

    def __init__(self, document_type: str) -> None:
        super().__init__(
            f"Unknown document type: {document_type}",
            context={"document_type": document_type},
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(GSTBillingError):
    """Base exception for validation errors."""

    error_code = "VALIDATION_ERROR"


class InvalidTaxRegimeError(ValidationError):
    """Raised when an explicit tax regime flag is not recognised."""

    error_code = "INVALID_TAX_REGIME"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid tax regime: {value}",
            context={"tax_regime": value},
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GSTBillingError):
    """Raised when settings cannot be loaded."""

    error_code = "CONFIGURATION_ERROR"

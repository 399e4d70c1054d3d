"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the extraction
engine and the layers around it. The engine itself never lets an
exception escape; these types describe failures at the seams (text
acquisition, configuration, evaluation input).

Exception Hierarchy:
    InvoiceFieldsError (base)
    ├── ConfigurationError
    ├── TextAcquisitionError
    │   └── NoTextAvailableError
    ├── ExtractionError
    └── EvaluationError
        └── GroundTruthFormatError
"""


class InvoiceFieldsError(Exception):
    """
    Base exception for all extraction engine errors.

    All custom exceptions in this package inherit from this class,
    allowing for easy catching of all package-specific errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(InvoiceFieldsError):
    """Raised when a configuration value is missing or unusable."""

    def __init__(self, key: str, reason: str = None):
        message = f"Invalid configuration: {key}"
        details = {"key": key, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# TEXT ACQUISITION ERRORS
# =============================================================================

class TextAcquisitionError(InvoiceFieldsError):
    """Base exception for failures of the upstream text source."""
    pass


class NoTextAvailableError(TextAcquisitionError):
    """
    Raised by a text provider when a document has no usable text.

    The document processor treats this as fatal for the attempt: the
    document is marked failed and the engine is never invoked.

    Example:
        >>> raise NoTextAvailableError("01J2Z8", "OCR returned nothing")
    """

    def __init__(self, document_id: str, reason: str = None):
        message = f"No text available for document: {document_id}"
        details = {"document_id": document_id, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================

class ExtractionError(InvoiceFieldsError):
    """Raised inside a field stage; caught and recorded by the orchestrator."""

    def __init__(self, field: str, reason: str = None):
        message = f"Extraction failed for field '{field}'"
        details = {"field": field, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# EVALUATION ERRORS
# =============================================================================

class EvaluationError(InvoiceFieldsError):
    """Base exception for evaluation harness errors."""
    pass


class GroundTruthFormatError(EvaluationError):
    """Raised when a ground truth file has an unsupported format."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Unsupported ground truth file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceFieldsError',
    'ConfigurationError',
    'TextAcquisitionError',
    'NoTextAvailableError',
    'ExtractionError',
    'EvaluationError',
    'GroundTruthFormatError',
]

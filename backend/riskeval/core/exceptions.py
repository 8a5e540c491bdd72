"""
Custom exceptions for the NTP 330 Risk Evaluator.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from RiskEvalBaseException.

None of them is fatal: validation errors are reported as a list, storage
errors leave the in-memory collection consistent with what is persisted,
and deserialization errors only skip the offending entry.

Example:
    try:
        manager.remove(record_id)
    except StorageFailure as e:
        logger.error(f"Delete failed: {e}")
"""

from typing import Optional, Sequence


class RiskEvalBaseException(Exception):
    """
    Base exception class for all Risk Evaluator errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable description of the error.
            details: Optional additional context for debugging.
        """
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationFailure(RiskEvalBaseException):
    """
    Exception raised when a submission does not pass form validation.

    No mutation is performed when this occurs.

    Attributes:
        errors: Field-level error messages, one per violation.
    """

    def __init__(self, errors: Sequence[str], details: Optional[str] = None) -> None:
        self.errors = list(errors)
        super().__init__(
            f"[Validation] {len(self.errors)} field error(s): {'; '.join(self.errors)}",
            details,
        )


class StorageFailure(RiskEvalBaseException):
    """
    Exception raised when the key-value medium rejects an operation.

    Covers capacity exhaustion and I/O errors on save, delete and
    delete-all.

    Attributes:
        operation: The operation that failed (e.g., 'save', 'delete', 'delete_all').
        key: Storage key involved, when known.
        removed_ids: Ids whose keys were already removed before the failure
                     (only meaningful for 'delete_all').
        original_error: The underlying exception if available.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        key: Optional[str] = None,
        removed_ids: Optional[Sequence[int]] = None,
        original_error: Optional[Exception] = None,
        details: Optional[str] = None,
    ) -> None:
        """
        Initialize storage failure.

        Args:
            message: Human-readable description of the error.
            operation: The operation that failed.
            key: Storage key involved.
            removed_ids: Ids already removed in a partial bulk delete.
            original_error: The underlying exception if available.
            details: Optional additional context for debugging.
        """
        self.operation = operation
        self.key = key
        self.removed_ids = list(removed_ids or [])
        self.original_error = original_error

        enhanced_message = f"[Storage] {message}"
        if operation:
            enhanced_message = f"{enhanced_message} (operation: {operation})"
        if key:
            enhanced_message = f"{enhanced_message} (key: {key})"
        if original_error:
            enhanced_message = (
                f"{enhanced_message} | Caused by: "
                f"{type(original_error).__name__}: {str(original_error)[:200]}"
            )

        super().__init__(enhanced_message, details)


class DeserializationFailure(RiskEvalBaseException):
    """
    Exception raised when a persisted entry cannot be decoded.

    Only encountered during bulk load, where the entry is logged and
    skipped.

    Attributes:
        key: Storage key of the malformed entry.
        original_error: The underlying exception if available.
    """

    def __init__(
        self,
        key: str,
        original_error: Optional[Exception] = None,
        details: Optional[str] = None,
    ) -> None:
        self.key = key
        self.original_error = original_error

        enhanced_message = f"[Deserialization] Could not decode entry '{key}'"
        if original_error:
            enhanced_message = f"{enhanced_message} | Caused by: {type(original_error).__name__}"

        super().__init__(enhanced_message, details)


class RecordNotFoundError(RiskEvalBaseException):
    """
    Exception raised by the API when a record id does not exist.

    Attributes:
        record_id: The id that was requested.
    """

    def __init__(self, record_id: int, details: Optional[str] = None) -> None:
        self.record_id = record_id
        super().__init__(f"[Records] No record with id {record_id}", details)

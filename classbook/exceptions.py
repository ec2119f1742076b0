"""
Exception hierarchy for classbook.

Store writes that violate database constraints surface as DataIntegrityError.
Lookups that the CLI requires to succeed raise NotFoundError. Engine
operations on missing ids are no-ops and raise nothing.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ClassbookException(Exception):
    """Base exception for all classbook errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(ClassbookException):
    """Raised when a required record does not exist."""

    def __init__(self, entity: str, entity_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not found error.

        Args:
            entity: Kind of record that was looked up ("class", "sequence", ...)
            entity_id: ID of the missing record
            details: Additional context
        """
        details = details or {}
        details[f"{entity}_id"] = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}", details)


class DataIntegrityError(ClassbookException):
    """Raised when a store write violates a database constraint."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize data integrity error.

        Args:
            message: Error message
            operation: Store operation that failed (insert_links, create_sequence, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)

"""
Domain exceptions for the AgroLedger application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class AgroLedgerError(Exception):
    """Base exception for all AgroLedger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(AgroLedgerError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Lookup Exceptions
class NotFoundError(AgroLedgerError):
    """Requested resource does not exist or is not visible to the caller."""

    pass


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item not found for this owner."""

    def __init__(self, item_id: int):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class SaleNotFoundError(NotFoundError):
    """Sale not found for this owner."""

    def __init__(self, sale_id: int):
        super().__init__(
            f"Sale not found: {sale_id}",
            code="SALE_NOT_FOUND",
            details={"sale_id": sale_id},
        )


# Validation Exceptions
class ValidationError(AgroLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """A decreasing movement would take the on-hand quantity below zero."""

    def __init__(self, item_id: int, requested: float, available: float):
        super().__init__(
            field="quantity",
            message=f"Insufficient stock: requested {requested}, available {available}",
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "item_id": item_id,
                "requested": requested,
                "available": available,
            }
        )


# Access Exceptions
class AuthenticationError(AgroLedgerError):
    """Caller identity could not be established."""

    def __init__(self, reason: str = "Owner identity is required"):
        super().__init__(
            reason,
            code="AUTHENTICATION_REQUIRED",
            details={"reason": reason},
        )


class ConfigurationError(AgroLedgerError):
    """Configuration error."""

    pass

"""
Domain exceptions for the asset stock engine.

Stock shortfalls and invalid pinned references are NOT exceptions; the
consumption engine reports them as warnings. Everything here is either a
hard storage failure or a request the ledger must refuse outright.
"""

from typing import Any


class AssetStockError(Exception):
    """Base exception for all asset stock errors."""

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
class StorageError(AssetStockError):
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


class PersistenceTimeoutError(StorageError):
    """A persistence call did not finish within the configured timeout."""

    def __init__(self, collection: str, timeout: float):
        super().__init__(
            f"Saving '{collection}' timed out after {timeout} seconds",
            code="PERSISTENCE_TIMEOUT",
            details={"collection": collection, "timeout": timeout},
        )


# Inventory Exceptions
class InventoryError(AssetStockError):
    """Base exception for ledger operations."""

    pass


class UnitNotFoundError(InventoryError):
    """Inventory unit not found in the ledger."""

    def __init__(self, unit_id: str):
        super().__init__(
            f"Inventory unit not found: {unit_id}",
            code="UNIT_NOT_FOUND",
            details={"unit_id": unit_id},
        )


class DuplicateUnitError(InventoryError):
    """A unit with the same id is already registered."""

    def __init__(self, unit_id: str):
        super().__init__(
            f"Inventory unit already exists: {unit_id}",
            code="DUPLICATE_UNIT",
            details={"unit_id": unit_id},
        )


class UnitsUnavailableError(InventoryError):
    """Units requested for assignment are no longer in storage."""

    def __init__(self, unit_ids: list[str], names: list[str] | None = None):
        label = ", ".join(names or unit_ids)
        super().__init__(
            f"The following units are not available: {label}",
            code="UNITS_UNAVAILABLE",
            details={"unit_ids": unit_ids},
        )


class ClassificationChangeError(InventoryError):
    """A patch would turn a measurement unit into a count unit or back."""

    def __init__(self, unit_id: str):
        super().__init__(
            f"Unit {unit_id} cannot switch between measurement and count",
            code="CLASSIFICATION_CHANGE",
            details={"unit_id": unit_id},
        )


class BalanceInvariantError(InventoryError):
    """A balance outside [0, initial_balance] was about to be stored."""

    def __init__(self, unit_id: str, balance: float, initial_balance: float | None):
        super().__init__(
            f"Balance {balance} is out of range for unit {unit_id}"
            f" (initial balance {initial_balance})",
            code="BALANCE_INVARIANT",
            details={
                "unit_id": unit_id,
                "balance": balance,
                "initial_balance": initial_balance,
            },
        )


# Validation Exceptions
class ValidationError(AssetStockError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(AssetStockError):
    """Configuration error."""

    pass

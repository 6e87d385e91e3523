"""Unit tests for domain exceptions."""

from src.core.exceptions import (
    AssetStockError,
    BalanceInvariantError,
    ClassificationChangeError,
    DatabaseError,
    DuplicateUnitError,
    InventoryError,
    PersistenceTimeoutError,
    StorageError,
    UnitNotFoundError,
    UnitsUnavailableError,
    ValidationError,
)


class TestAssetStockError:
    def test_code_defaults_to_class_name(self):
        err = AssetStockError("boom")
        assert err.code == "AssetStockError"
        assert err.details == {}
        assert str(err) == "boom"

    def test_to_dict(self):
        err = AssetStockError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestStorageErrors:
    def test_database_error(self):
        err = DatabaseError("save inventory_units", "disk full")
        assert isinstance(err, StorageError)
        assert err.code == "DATABASE_ERROR"
        assert "disk full" in err.message

    def test_persistence_timeout(self):
        err = PersistenceTimeoutError("stock_movements", 2.5)
        assert isinstance(err, StorageError)
        assert err.code == "PERSISTENCE_TIMEOUT"
        assert err.details == {"collection": "stock_movements", "timeout": 2.5}


class TestInventoryErrors:
    def test_unit_not_found(self):
        err = UnitNotFoundError("AST-1")
        assert isinstance(err, InventoryError)
        assert err.code == "UNIT_NOT_FOUND"
        assert err.details["unit_id"] == "AST-1"

    def test_duplicate_unit(self):
        assert DuplicateUnitError("AST-1").code == "DUPLICATE_UNIT"

    def test_units_unavailable_lists_names(self):
        err = UnitsUnavailableError(["a", "b"], ["Router", "Switch"])
        assert err.code == "UNITS_UNAVAILABLE"
        assert "Router, Switch" in err.message
        assert err.details["unit_ids"] == ["a", "b"]

    def test_units_unavailable_falls_back_to_ids(self):
        assert "a, b" in UnitsUnavailableError(["a", "b"]).message

    def test_classification_change(self):
        assert ClassificationChangeError("AST-1").code == "CLASSIFICATION_CHANGE"

    def test_balance_invariant(self):
        err = BalanceInvariantError("AST-1", -3.0, 100.0)
        assert err.code == "BALANCE_INVARIANT"
        assert err.details["balance"] == -3.0


class TestValidationError:
    def test_truncates_value(self):
        err = ValidationError("patch", "bad", "x" * 500)
        assert err.code == "VALIDATION_ERROR"
        assert len(err.details["value"]) == 100

    def test_empty_value_is_none(self):
        assert ValidationError("patch", "bad").details["value"] is None

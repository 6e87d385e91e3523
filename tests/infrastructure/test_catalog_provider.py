"""Tests for the key-value backed category / type metadata provider."""

from unittest.mock import MagicMock, patch

import pytest

from src.config import InventorySettings
from src.core.entities.catalog import (
    AssetCategory,
    AssetType,
    BulkType,
    StandardItem,
    TrackingMethod,
)
from src.core.entities.inventory import InventoryUnit
from src.infrastructure.catalog import KeyValueCatalogProvider
from src.infrastructure.notifications import LoggingNotifier
from src.infrastructure.storage.memory import InMemoryKeyValueStore


def _make_categories() -> list[AssetCategory]:
    return [
        AssetCategory(
            name="Network Material",
            is_customer_installable=True,
            types=[
                AssetType(
                    name="Drop Cable",
                    classification="material",
                    tracking_method=TrackingMethod.BULK,
                    unit_of_measure="Roll",
                    standard_items=[
                        StandardItem(
                            name="Drop Cable 1 Core",
                            brand="Fiberhome",
                            bulk_type=BulkType.MEASUREMENT,
                            base_unit_of_measure="Meter",
                        )
                    ],
                ),
                AssetType(
                    name="Access Point",
                    standard_items=[
                        StandardItem(name="Unifi AP AC Lite", brand="Ubiquiti", bulk_type=BulkType.COUNT)
                    ],
                ),
            ],
        )
    ]


@pytest.fixture
async def provider() -> KeyValueCatalogProvider:
    provider = KeyValueCatalogProvider(InMemoryKeyValueStore(), InventorySettings())
    await provider.save_categories(_make_categories())
    return provider


class TestKeyValueCatalogProvider:
    async def test_round_trip(self, provider):
        categories = await provider.list_categories()
        assert categories[0].types[0].standard_items[0].brand == "Fiberhome"

    async def test_find_model(self, provider):
        model = await provider.find_model("Drop Cable 1 Core", "Fiberhome")
        assert model is not None
        assert model.is_measurement is True
        assert model.unit == "Meter"
        assert model.tracking_method == TrackingMethod.BULK
        assert model.category.name == "Network Material"

    async def test_find_model_normalized(self, provider):
        model = await provider.find_model("unifi  ap ac lite", "UBIQUITI")
        assert model is not None
        assert model.is_measurement is False

    async def test_find_model_exact_when_normalization_disabled(self):
        provider = KeyValueCatalogProvider(
            InMemoryKeyValueStore(), InventorySettings(normalize_identity=False)
        )
        await provider.save_categories(_make_categories())
        assert await provider.find_model("unifi ap ac lite", "ubiquiti") is None

    async def test_unknown_model(self, provider):
        assert await provider.find_model("Router", "MikroTik") is None

    async def test_get_type(self, provider):
        asset_type = await provider.get_type("Network Material", "Drop Cable")
        assert asset_type.tracking_method == TrackingMethod.BULK
        assert await provider.get_type("Network Material", "Nope") is None
        assert await provider.get_type("Other", "Drop Cable") is None


class TestLoggingNotifier:
    async def test_logs_damage(self):
        unit = InventoryUnit(id="a", item_name="Router", brand="MikroTik", serial_number="SN-1")
        mock_logger = MagicMock()
        with patch("src.infrastructure.notifications.logger", mock_logger):
            await LoggingNotifier().asset_damaged(unit, "tech")

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args == ("asset_damaged",)
        assert mock_logger.warning.call_args.kwargs["reported_by"] == "tech"

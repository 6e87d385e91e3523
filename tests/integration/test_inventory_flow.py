"""Integration test for the full receive -> consume -> return flow on SQLite."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.application.dto.requests import (
    ApproveLoanRequest,
    ConsumeMaterialsRequest,
    RegisterAssetRequest,
    UpdateAssetRequest,
)
from src.application.services import get_inventory_service
from src.application.use_cases import (
    ApproveLoanUseCase,
    ConsumeMaterialsUseCase,
    RegisterAssetUseCase,
    UpdateAssetUseCase,
)
from src.core.entities.catalog import AssetCategory, AssetType, BulkType, StandardItem, TrackingMethod
from src.core.entities.inventory import AssetStatus, MovementType
from src.infrastructure.catalog import KeyValueCatalogProvider
from src.infrastructure.storage.sqlite import SQLiteKeyValueStore, close_pool
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def sqlite_service(tmp_path: Path):
    db_path = tmp_path / "assets.db"
    await initialize_database(db_path, create_backup_before=False)

    mock_settings = MagicMock()
    mock_settings.storage.db_path = db_path
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        store = SQLiteKeyValueStore()
        catalog = KeyValueCatalogProvider(store)
        await catalog.save_categories(
            [
                AssetCategory(
                    name="Network Material",
                    types=[
                        AssetType(
                            name="Drop Cable",
                            tracking_method=TrackingMethod.BULK,
                            standard_items=[
                                StandardItem(
                                    name="Drop Cable 1 Core",
                                    brand="Fiberhome",
                                    bulk_type=BulkType.MEASUREMENT,
                                )
                            ],
                        ),
                        AssetType(
                            name="ONT",
                            standard_items=[
                                StandardItem(name="HG8245H", brand="Huawei", bulk_type=BulkType.COUNT)
                            ],
                        ),
                    ],
                )
            ]
        )
        yield get_inventory_service(store=store, catalog=catalog)
        await close_pool()
    conn_module._pool = None


class TestInventoryFlow:
    """Full flow: register stock, consume for a work order, return a device."""

    async def test_register_consume_return(self, sqlite_service):
        register = RegisterAssetUseCase(sqlite_service)
        await register.execute(
            RegisterAssetRequest(
                id="DRUM-1",
                item_name="Drop Cable 1 Core",
                brand="Fiberhome",
                category="Network Material",
                asset_type="Drop Cable",
                initial_balance=1000,
                serial_number="should-be-cleared",
                po_number="PO-1",
            )
        )
        for n in range(2):
            await register.execute(
                RegisterAssetRequest(
                    id=f"ONT-{n}",
                    item_name="HG8245H",
                    brand="Huawei",
                    category="Network Material",
                    asset_type="ONT",
                    serial_number=f"SN-{n}",
                )
            )

        drum = await sqlite_service.get_unit("DRUM-1")
        assert drum.serial_number is None

        consume = ConsumeMaterialsUseCase(sqlite_service)
        result = await consume.execute(
            ConsumeMaterialsRequest(
                materials=[
                    {"item_name": "drop cable 1 core", "brand": "FIBERHOME", "quantity": 150},
                    {"item_name": "HG8245H", "brand": "Huawei", "quantity": 1},
                ],
                customer_id="CUST-42",
                location="Jl. Melati 3",
                doc_number="WO-77",
                actor="tech1",
            )
        )
        assert result.success is True
        assert (await sqlite_service.get_unit("DRUM-1")).current_balance == 850

        installed = await sqlite_service.list_units(status=AssetStatus.IN_USE)
        assert [u.id for u in installed] == ["ONT-0"]

        update = UpdateAssetUseCase(sqlite_service)
        await update.execute("ONT-0", UpdateAssetRequest(status=AssetStatus.IN_STORAGE, actor="tech1"))

        ont_card = await sqlite_service.get_stock_history("HG8245H", "Huawei")
        assert [m.type for m in ont_card] == [
            MovementType.IN_RETURN,
            MovementType.OUT_INSTALLATION,
            MovementType.IN_PURCHASE,
            MovementType.IN_PURCHASE,
        ]
        assert ont_card[0].balance_after == 2

        drum_card = await sqlite_service.get_stock_history("Drop Cable 1 Core", "Fiberhome")
        assert [m.balance_after for m in drum_card] == [850, 1000]

    async def test_loan_after_consumption_conflicts(self, sqlite_service):
        register = RegisterAssetUseCase(sqlite_service)
        await register.execute(RegisterAssetRequest(id="ONT-9", item_name="HG8245H", brand="Huawei"))

        await ConsumeMaterialsUseCase(sqlite_service).execute(
            ConsumeMaterialsRequest(materials=[{"item_name": "HG8245H", "brand": "Huawei", "quantity": 1}])
        )

        from src.core.exceptions import UnitsUnavailableError

        with pytest.raises(UnitsUnavailableError):
            await ApproveLoanUseCase(sqlite_service).execute(
                ApproveLoanRequest(unit_ids=["ONT-9"], holder="Budi")
            )

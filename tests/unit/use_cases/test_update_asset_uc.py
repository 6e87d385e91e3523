"""Tests for UpdateAssetUseCase."""

from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import UpdateAssetRequest
from src.application.use_cases.update_asset import UpdateAssetUseCase
from src.core.entities.inventory import AssetStatus, InventoryUnit
from src.core.exceptions import ValidationError


@pytest.fixture
def mock_service():
    service = AsyncMock()
    service.update_asset.return_value = InventoryUnit(id="a", item_name="Router", brand="MikroTik")
    return service


class TestUpdateAssetUseCase:
    async def test_only_set_fields_are_patched(self, mock_service):
        use_case = UpdateAssetUseCase(service=mock_service)
        await use_case.execute("a", UpdateAssetRequest(location="Shelf 3", actor="admin"))

        unit_id, patch = mock_service.update_asset.await_args.args
        assert unit_id == "a"
        assert patch == {"location": "Shelf 3"}
        assert mock_service.update_asset.await_args.kwargs["actor"] == "admin"

    async def test_explicit_null_clears_field(self, mock_service):
        use_case = UpdateAssetUseCase(service=mock_service)
        await use_case.execute("a", UpdateAssetRequest(current_user=None))
        assert mock_service.update_asset.await_args.args[1] == {"current_user": None}

    async def test_empty_patch_rejected(self, mock_service):
        use_case = UpdateAssetUseCase(service=mock_service)
        with pytest.raises(ValidationError):
            await use_case.execute("a", UpdateAssetRequest(actor="admin"))
        mock_service.update_asset.assert_not_awaited()

    async def test_null_status_rejected(self, mock_service):
        use_case = UpdateAssetUseCase(service=mock_service)
        with pytest.raises(ValidationError):
            await use_case.execute("a", UpdateAssetRequest(status=None))

    async def test_status_change_with_real_service(self, service):
        await service.register_asset(InventoryUnit(id="a", item_name="Router", brand="MikroTik"))
        use_case = UpdateAssetUseCase(service=service)

        unit = await use_case.execute(
            "a", UpdateAssetRequest(status=AssetStatus.IN_USE, current_user="CUST-1", wo_ro_int_number="WO-5")
        )

        assert use_case.to_response(unit).status == "in_use"
        latest = (await service.get_stock_history("Router", "MikroTik"))[0]
        assert latest.reference_id == "WO-5"

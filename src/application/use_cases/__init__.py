"""Application use cases."""

from src.application.use_cases.approve_loan import ApproveLoanResult, ApproveLoanUseCase
from src.application.use_cases.batch_update_assets import BatchUpdateAssetsUseCase
from src.application.use_cases.consume_materials import ConsumeMaterialsUseCase
from src.application.use_cases.get_stock_alerts import GetStockAlertsUseCase, StockAlertsResult
from src.application.use_cases.register_asset import RegisterAssetUseCase
from src.application.use_cases.update_asset import UpdateAssetUseCase

__all__ = [
    "ConsumeMaterialsUseCase",
    "RegisterAssetUseCase",
    "UpdateAssetUseCase",
    "BatchUpdateAssetsUseCase",
    "ApproveLoanUseCase",
    "ApproveLoanResult",
    "GetStockAlertsUseCase",
    "StockAlertsResult",
]

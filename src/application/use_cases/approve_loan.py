"""Approve Loan Use Case: hand units to a holder if they are still in storage."""

from dataclasses import dataclass

from src.application.dto.requests import ApproveLoanRequest
from src.application.dto.responses import ApproveLoanResponse
from src.application.mappers import unit_to_response
from src.config import get_logger
from src.core.entities.inventory import InventoryUnit
from src.core.services import InventoryService

logger = get_logger(__name__)


@dataclass
class ApproveLoanResult:
    loan_id: str | None
    holder: str
    units: list[InventoryUnit]


class ApproveLoanUseCase:
    """
    Approve a loan request.

    The availability check and the assignment happen under the service
    lock, so a unit handed out by a concurrent approval or consumption is
    reported as unavailable instead of being assigned twice.
    """

    def __init__(self, service: InventoryService | None = None):
        self._service = service

    def _get_service(self) -> InventoryService:
        if self._service is None:
            from src.application.services import get_inventory_service

            self._service = get_inventory_service()
        return self._service

    async def execute(self, request: ApproveLoanRequest) -> ApproveLoanResult:
        log_action = f"Loan Approved ({request.loan_id})" if request.loan_id else "Loan Approved"
        units = await self._get_service().assign_units(
            request.unit_ids,
            request.holder,
            location=request.location,
            log_action=log_action,
            actor=request.actor,
        )
        logger.info("loan_approved", loan_id=request.loan_id, holder=request.holder)
        return ApproveLoanResult(loan_id=request.loan_id, holder=request.holder, units=units)

    def to_response(self, result: ApproveLoanResult) -> ApproveLoanResponse:
        return ApproveLoanResponse(
            loan_id=result.loan_id,
            holder=result.holder,
            units=[unit_to_response(u) for u in result.units],
        )

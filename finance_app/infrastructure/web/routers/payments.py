"""
Payment router.
Handles the filtered payment listing.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query

from finance_app.application.dto.payment_dto import PaymentListResponseDTO
from finance_app.application.use_cases.list_use_cases import ListPaymentsUseCase
from finance_app.infrastructure.auth import AuthSession, get_current_session
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository
from finance_app.infrastructure.web.dependencies import get_finance_repository

router = APIRouter()


@router.get("", response_model=PaymentListResponseDTO)
async def list_payments(
    session: Annotated[AuthSession, Depends(get_current_session)],
    repository: Annotated[SupabaseFinanceRepository, Depends(get_finance_repository)],
    status_filter: Optional[str] = Query(None, alias="status", description="Payment status or 'all'"),
    method: Optional[str] = Query(None, description="Payment method or 'all'"),
    search: Optional[str] = Query(None, max_length=255, description="Payment or reference number"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Payments per page")
):
    """
    List payments, newest first.

    - **status**: completed, pending, failed, cancelled or all
    - **method**: bank_transfer, cash, credit_card, debit_card, e_wallet, check, other or all
    - **search**: search payment number and reference number
    """
    use_case = ListPaymentsUseCase(repository)
    return await use_case.execute(status_filter, method, search, page, limit)

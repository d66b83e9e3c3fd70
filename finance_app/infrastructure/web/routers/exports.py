"""
Report export router.
Returns a report as a CSV, spreadsheet-typed CSV or PDF attachment.
"""

import logging
from typing import Annotated
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from finance_app.config import get_settings
from finance_app.application.dto.export_dto import ExportRequestDTO
from finance_app.application.use_cases.export_report_use_case import ExportReportUseCase
from finance_app.domain.models.base import ValidationError
from finance_app.domain.services.document_renderer import DocumentRenderer
from finance_app.infrastructure.auth import AuthSession, get_current_session
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository
from finance_app.infrastructure.web.dependencies import get_document_renderer, get_finance_repository

logger = logging.getLogger(__name__)

router = APIRouter()


def get_export_use_case(
    repository: Annotated[SupabaseFinanceRepository, Depends(get_finance_repository)],
    renderer: Annotated[DocumentRenderer, Depends(get_document_renderer)]
) -> ExportReportUseCase:
    """Dependency to get the export use case."""
    settings = get_settings()
    return ExportReportUseCase(
        repository,
        renderer,
        months_back=settings.report_months_back,
        top_clients_limit=settings.top_clients_limit
    )


@router.post("")
async def export_report(
    request: ExportRequestDTO,
    session: Annotated[AuthSession, Depends(get_current_session)],
    use_case: Annotated[ExportReportUseCase, Depends(get_export_use_case)]
):
    """
    Export a report.

    - **type**: csv, excel or pdf
    - **reportType**: financial_summary, invoice_report, payment_report, client_report or monthly_analysis
    - **dateRange**: `{from, to}`, both days included
    """
    try:
        result = await use_case.execute(session.user_id, request)
    except ValidationError as e:
        logger.warning(f"Rejected export of {request.report_type} as {request.export_type}: {e.message}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message})
    except Exception as e:
        logger.error(f"Export error for report {request.report_type}: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Export failed"}
        )

    return Response(
        content=result.content,
        media_type=result.content_type,
        headers=result.headers
    )

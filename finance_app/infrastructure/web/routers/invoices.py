"""
Invoice router.
Handles the invoice listing and invoice document generation, preview and upload.
"""

import logging
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import Response

from finance_app.application.dto.export_dto import DocumentUploadResponseDTO
from finance_app.application.dto.invoice_dto import InvoiceListResponseDTO
from finance_app.application.use_cases.invoice_document_use_case import GenerateInvoiceDocumentUseCase
from finance_app.application.use_cases.list_use_cases import ListInvoicesUseCase
from finance_app.domain.models.base import (
    EntityNotFoundError, ValidationError, PopupBlockedError, UploadError, RenderError
)
from finance_app.domain.models.report import ExportFormat
from finance_app.domain.services.document_renderer import DocumentRenderer
from finance_app.infrastructure.auth import AuthSession, get_current_session
from finance_app.infrastructure.export.delivery import (
    DeliveryAction, DownloadDelivery, PreviewDelivery, StorageUploadDelivery
)
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository
from finance_app.infrastructure.storage.storage_service import StorageService
from finance_app.infrastructure.web.dependencies import (
    get_document_renderer, get_finance_repository, get_storage_service
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_document_use_case(
    repository: Annotated[SupabaseFinanceRepository, Depends(get_finance_repository)],
    renderer: Annotated[DocumentRenderer, Depends(get_document_renderer)]
) -> GenerateInvoiceDocumentUseCase:
    """Dependency to get the invoice document use case."""
    return GenerateInvoiceDocumentUseCase(repository, renderer)


@router.get("", response_model=InvoiceListResponseDTO)
async def list_invoices(
    session: Annotated[AuthSession, Depends(get_current_session)],
    repository: Annotated[SupabaseFinanceRepository, Depends(get_finance_repository)],
    status_filter: Optional[str] = Query(None, alias="status", description="Invoice status or 'all'"),
    client: Optional[str] = Query(None, description="Part of the client name"),
    search: Optional[str] = Query(None, max_length=255, description="Number, title or client name"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Invoices per page")
):
    """
    List invoices, newest first.

    - **status**: draft, sent, paid, overdue, cancelled or all
    - **client**: filter by client name
    - **search**: search invoice number, title and client name
    - **page** / **limit**: offset pagination
    """
    use_case = ListInvoicesUseCase(repository)
    return await use_case.execute(status_filter, client, search, page, limit)


@router.get("/{invoice_id}/document")
async def get_invoice_document(
    invoice_id: str,
    session: Annotated[AuthSession, Depends(get_current_session)],
    use_case: Annotated[GenerateInvoiceDocumentUseCase, Depends(get_document_use_case)],
    export_format: str = Query("pdf", alias="format", description="pdf, html or csv"),
    action: DeliveryAction = Query(DeliveryAction.DOWNLOAD, description="download or preview")
):
    """
    Generate an invoice document.

    Downloads are sent as attachments; previews are served inline so the
    browser opens them in a new tab.
    """
    if action == DeliveryAction.UPLOAD:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Use POST /invoices/{invoice_id}/document/upload to store a document"
        )

    try:
        document_format = use_case.parse_format(export_format)
        delivery = PreviewDelivery() if action == DeliveryAction.PREVIEW else DownloadDelivery()
        result = await use_case.execute(invoice_id, document_format, delivery)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except PopupBlockedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except RenderError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Export failed")

    return Response(
        content=result.content,
        media_type=result.content_type,
        headers=result.headers
    )


@router.post("/{invoice_id}/document/upload", response_model=DocumentUploadResponseDTO)
async def upload_invoice_document(
    invoice_id: str,
    session: Annotated[AuthSession, Depends(get_current_session)],
    use_case: Annotated[GenerateInvoiceDocumentUseCase, Depends(get_document_use_case)],
    storage: Annotated[StorageService, Depends(get_storage_service)]
):
    """
    Generate the invoice PDF and store it under `invoices/<invoice_id>/`.

    The file record is written on a best-effort basis; `metadata_saved`
    reports whether it was.
    """
    try:
        result = await use_case.execute(invoice_id, ExportFormat.PDF, StorageUploadDelivery(storage))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except UploadError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    except RenderError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Export failed")

    return DocumentUploadResponseDTO(
        url=result.public_url,
        file_name=result.filename,
        file_path=result.file_path,
        file_size=result.size,
        metadata_saved=result.metadata_saved
    )

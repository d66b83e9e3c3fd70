"""
Service providers for the routers.
Each request gets its own repository bound to the caller's Supabase client.
"""

from typing import Annotated
from fastapi import Depends
from supabase import Client

from finance_app.config import get_settings
from finance_app.domain.services.billing_service import BillingService
from finance_app.domain.services.document_renderer import DocumentRenderer
from finance_app.infrastructure.auth.dependencies import get_user_client, get_storage_client
from finance_app.infrastructure.pagination import OffsetPagination
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository
from finance_app.infrastructure.storage.storage_service import StorageService


def get_finance_repository(
    client: Annotated[Client, Depends(get_user_client)]
) -> SupabaseFinanceRepository:
    """Dependency to get the finance repository."""
    settings = get_settings()
    return SupabaseFinanceRepository(
        client,
        default_currency=settings.default_currency,
        pagination=OffsetPagination(settings.default_page_size, settings.max_page_size)
    )


def get_document_renderer() -> DocumentRenderer:
    """Dependency to get the document renderer."""
    settings = get_settings()
    return DocumentRenderer(
        company_name=settings.company_name,
        product_name=settings.product_name,
        default_currency=settings.default_currency,
        billing_service=BillingService()
    )


def get_storage_service(
    client: Annotated[Client, Depends(get_storage_client)]
) -> StorageService:
    """Dependency to get the document storage service."""
    return StorageService(client)

"""
Use case for generating a single invoice document.
Handles rendering, encoding and delivery as download, preview or storage upload.
"""

import logging
from typing import Callable

from finance_app.domain.models.base import DomainException, RenderError, ValidationError
from finance_app.domain.models.report import ExportFormat
from finance_app.domain.services.document_renderer import DocumentRenderer
from finance_app.infrastructure.export.delivery import DeliveryMechanism, DeliveryResult
from finance_app.infrastructure.export.encoders import BaseEncoder, get_encoder
from finance_app.infrastructure.repositories.finance_repository import SupabaseFinanceRepository

logger = logging.getLogger(__name__)

INVOICE_DOCUMENT_FORMATS = (ExportFormat.PDF, ExportFormat.HTML, ExportFormat.CSV)


class GenerateInvoiceDocumentUseCase:
    """Use case for rendering an invoice into one format and delivering it."""

    def __init__(
        self,
        repository: SupabaseFinanceRepository,
        renderer: DocumentRenderer,
        encoder_factory: Callable[[ExportFormat, str], BaseEncoder] = get_encoder
    ):
        self.repository = repository
        self.renderer = renderer
        self.encoder_factory = encoder_factory

    def parse_format(self, value: str) -> ExportFormat:
        try:
            export_format = ExportFormat(value)
        except ValueError:
            raise ValidationError("Invalid export type", "format")
        if export_format not in INVOICE_DOCUMENT_FORMATS:
            raise ValidationError("Invalid export type", "format")
        return export_format

    async def execute(
        self,
        invoice_id: str,
        export_format: ExportFormat,
        delivery: DeliveryMechanism
    ) -> DeliveryResult:
        """
        Generate and deliver one invoice document.

        Raises:
            EntityNotFoundError: If the invoice does not exist
            MissingRequiredFieldError: If the invoice lacks an id or total
            RenderError: If building or encoding the document fails
            PopupBlockedError / UploadError: From the delivery mechanism
        """
        invoice = await self.repository.get_invoice(invoice_id)
        logger.info(f"Generating {export_format.value} for invoice {invoice_id} ({delivery.action.value})")

        try:
            tree = self.renderer.render_invoice(invoice)
            document = self.encoder_factory(export_format, "invoice").encode(tree)
        except DomainException:
            raise
        except Exception as e:
            logger.error(f"Rendering invoice {invoice_id} failed: {str(e)}", exc_info=True)
            raise RenderError(f"Failed to render invoice {invoice_id}") from e

        try:
            return await delivery.deliver(document)
        except DomainException as e:
            logger.error(f"Delivering invoice {invoice_id} failed: {e.message}")
            raise

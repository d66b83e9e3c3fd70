"""
Delivery mechanisms for encoded documents.
Ships the bytes to the caller as a download or preview, or uploads them to storage.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, Optional

from finance_app.domain.models.base import MetadataWriteError, PopupBlockedError, ValidationError
from finance_app.infrastructure.export.encoders.base import EncodedDocument
from finance_app.infrastructure.storage.storage_service import StorageService

logger = logging.getLogger(__name__)


class DeliveryAction(str, Enum):
    DOWNLOAD = "download"
    PREVIEW = "preview"
    UPLOAD = "upload"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one delivery. Upload results carry the stored location instead of bytes."""

    action: DeliveryAction
    filename: str
    content_type: str
    size: int
    content: Optional[bytes] = None
    file_path: Optional[str] = None
    public_url: Optional[str] = None
    metadata_saved: bool = False

    @property
    def headers(self) -> Dict[str, str]:
        """Response headers for download and preview results."""
        disposition = "inline" if self.action == DeliveryAction.PREVIEW else "attachment"
        return {"Content-Disposition": f'{disposition}; filename="{self.filename}"'}


class DeliveryMechanism(ABC):
    """One way of handing encoded bytes to the caller environment."""

    action: DeliveryAction

    @abstractmethod
    async def deliver(self, document: EncodedDocument) -> DeliveryResult:
        pass


class DownloadDelivery(DeliveryMechanism):
    """Emit the bytes as a file save named ``<reference>_<ISO date>.<ext>``."""

    action = DeliveryAction.DOWNLOAD

    def __init__(self, today: Callable[[], date] = date.today):
        self.today = today

    async def deliver(self, document: EncodedDocument) -> DeliveryResult:
        return DeliveryResult(
            action=self.action,
            filename=document.filename(self.today()),
            content_type=document.content_type,
            size=document.size,
            content=document.content
        )


class PreviewDelivery(DeliveryMechanism):
    """
    Show the bytes in a new viewing context instead of saving them.

    ``opener`` is called with the document and returns False when the
    viewer could not be opened. Without an opener the response itself is
    the viewer, served inline.
    """

    action = DeliveryAction.PREVIEW

    def __init__(
        self,
        opener: Optional[Callable[[EncodedDocument], bool]] = None,
        today: Callable[[], date] = date.today
    ):
        self.opener = opener
        self.today = today

    async def deliver(self, document: EncodedDocument) -> DeliveryResult:
        if self.opener is not None and not self.opener(document):
            logger.warning(f"Preview of {document.reference} could not be opened")
            raise PopupBlockedError()

        return DeliveryResult(
            action=self.action,
            filename=document.filename(self.today()),
            content_type=document.content_type,
            size=document.size,
            content=document.content
        )


class StorageUploadDelivery(DeliveryMechanism):
    """
    Upload the bytes to object storage and record the stored file.

    Objects are stored at ``invoices/<invoice id>/invoice-<number>-<millis>.<ext>``.
    A failed metadata write is logged and does not fail the upload.
    """

    action = DeliveryAction.UPLOAD

    def __init__(
        self,
        storage: StorageService,
        record_metadata: bool = True,
        clock_millis: Callable[[], int] = lambda: int(time.time() * 1000)
    ):
        self.storage = storage
        self.record_metadata = record_metadata
        self.clock_millis = clock_millis

    def build_path(self, document: EncodedDocument) -> str:
        if not document.entity_id:
            raise ValidationError("Only documents of a stored invoice can be uploaded", "invoice_id")
        file_name = f"invoice-{document.reference}-{self.clock_millis()}.{document.extension}"
        return f"invoices/{document.entity_id}/{file_name}"

    async def deliver(self, document: EncodedDocument) -> DeliveryResult:
        file_path = self.build_path(document)
        file_name = file_path.rsplit("/", 1)[-1]

        await self.storage.upload_document(document.content, file_path, document.content_type)
        public_url = self.storage.get_public_url(file_path)

        metadata_saved = False
        if self.record_metadata:
            try:
                await self.storage.record_file_metadata(
                    invoice_id=document.entity_id,
                    file_name=file_name,
                    file_path=file_path,
                    file_url=public_url,
                    file_type=document.extension,
                    file_size=document.size
                )
                metadata_saved = True
            except MetadataWriteError as e:
                logger.warning(f"File record for invoice {document.entity_id} not saved: {e.message}")

        return DeliveryResult(
            action=self.action,
            filename=file_name,
            content_type=document.content_type,
            size=document.size,
            file_path=file_path,
            public_url=public_url,
            metadata_saved=metadata_saved
        )

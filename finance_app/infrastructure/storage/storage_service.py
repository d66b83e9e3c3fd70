"""
Supabase Storage service for exported documents.
Handles uploads to the documents bucket and the invoice file records.
"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any

from supabase import Client

from finance_app.config import settings
from finance_app.domain.models.base import UploadError, MetadataWriteError

logger = logging.getLogger(__name__)


class StorageService:
    """Service for storing exported documents using Supabase Storage."""

    def __init__(
        self,
        supabase_client: Client,
        bucket: Optional[str] = None,
        files_table: Optional[str] = None,
        max_file_size: Optional[int] = None
    ):
        """Initialize storage service with an explicitly passed Supabase client."""
        self.client = supabase_client
        self.bucket = bucket or settings.documents_bucket
        self.files_table = files_table or settings.invoice_files_table
        self.max_file_size = max_file_size or settings.max_document_size_bytes

    async def upload_document(
        self,
        file_content: bytes,
        file_path: str,
        content_type: str
    ) -> str:
        """
        Upload document bytes under a path in the documents bucket.

        Args:
            file_content: Encoded document
            file_path: Object path, e.g. ``invoices/<id>/<file name>``
            content_type: MIME type stored with the object

        Returns:
            The stored object path

        Raises:
            UploadError: If the content is unusable or the storage write fails
        """
        self._validate_file(file_content, file_path)

        try:
            self.client.storage.from_(self.bucket).upload(
                path=file_path,
                file=file_content,
                file_options={
                    "content-type": content_type,
                    "upsert": "true"
                }
            )
        except Exception as e:
            raise UploadError(f"Upload failed: {str(e)}", file_path) from e

        logger.info(f"Uploaded {len(file_content)} bytes to {self.bucket}/{file_path}")
        return file_path

    def get_public_url(self, file_path: str) -> str:
        """Public URL of a stored object."""
        try:
            return self.client.storage.from_(self.bucket).get_public_url(file_path)
        except Exception as e:
            raise UploadError(f"Failed to resolve public URL: {str(e)}", file_path) from e

    async def record_file_metadata(
        self,
        invoice_id: str,
        file_name: str,
        file_path: str,
        file_url: str,
        file_type: str,
        file_size: int
    ) -> Dict[str, Any]:
        """
        Insert the invoice file record for an uploaded document.

        Raises:
            MetadataWriteError: If the insert fails
        """
        record = {
            "invoice_id": invoice_id,
            "file_name": file_name,
            "file_path": file_path,
            "file_url": file_url,
            "file_type": file_type,
            "file_size": file_size,
            "created_at": datetime.now().isoformat()
        }

        try:
            response = self.client.table(self.files_table).insert(record).execute()
        except Exception as e:
            raise MetadataWriteError(f"Failed to save file record: {str(e)}") from e

        if not response.data:
            raise MetadataWriteError("Failed to save file record: no row returned")
        return response.data[0]

    def _validate_file(self, content: bytes, file_path: str) -> None:
        """Validate file before upload."""
        if not content:
            raise UploadError("File content is empty", file_path)

        if len(content) > self.max_file_size:
            raise UploadError(
                f"File too large. Maximum size: {self.max_file_size / 1024 / 1024:.1f}MB",
                file_path
            )

"""
Unit tests for the delivery mechanisms.
"""

import pytest
from datetime import date
from unittest.mock import Mock, AsyncMock

from finance_app.domain.models.base import (
    MetadataWriteError,
    PopupBlockedError,
    UploadError,
    ValidationError,
)
from finance_app.domain.models.report import ExportFormat
from finance_app.infrastructure.export.delivery import (
    DeliveryAction,
    DownloadDelivery,
    PreviewDelivery,
    StorageUploadDelivery,
)
from finance_app.infrastructure.export.encoders import EncodedDocument


def today():
    return date(2026, 10, 19)


@pytest.fixture
def invoice_pdf():
    return EncodedDocument(
        content=b"%PDF-1.7 fake",
        export_format=ExportFormat.PDF,
        reference="INV-001",
        entity_id="inv-1"
    )


@pytest.fixture
def report_csv():
    return EncodedDocument(
        content=b"Invoice Number,Title\n",
        export_format=ExportFormat.CSV,
        reference="invoice_report"
    )


@pytest.fixture
def storage():
    storage = Mock()
    storage.upload_document = AsyncMock(side_effect=lambda content, path, content_type: path)
    storage.get_public_url = Mock(return_value="https://cdn.example.com/documents/file.pdf")
    storage.record_file_metadata = AsyncMock(return_value={"id": "file-1"})
    return storage


class TestDownloadDelivery:
    """Test cases for file downloads."""

    @pytest.mark.asyncio
    async def test_attachment_named_by_reference_and_date(self, report_csv):
        result = await DownloadDelivery(today=today).deliver(report_csv)

        assert result.action == DeliveryAction.DOWNLOAD
        assert result.filename == "invoice_report_2026-10-19.csv"
        assert result.content == report_csv.content
        assert result.size == len(report_csv.content)
        assert result.headers == {
            "Content-Disposition": 'attachment; filename="invoice_report_2026-10-19.csv"'
        }


class TestPreviewDelivery:
    """Test cases for previews."""

    @pytest.mark.asyncio
    async def test_served_inline(self, invoice_pdf):
        result = await PreviewDelivery(today=today).deliver(invoice_pdf)

        assert result.action == DeliveryAction.PREVIEW
        assert result.headers["Content-Disposition"] == 'inline; filename="INV-001_2026-10-19.pdf"'

    @pytest.mark.asyncio
    async def test_opener_receives_document(self, invoice_pdf):
        opener = Mock(return_value=True)

        result = await PreviewDelivery(opener=opener, today=today).deliver(invoice_pdf)

        opener.assert_called_once_with(invoice_pdf)
        assert result.content == invoice_pdf.content

    @pytest.mark.asyncio
    async def test_blocked_viewer_raises(self, invoice_pdf):
        with pytest.raises(PopupBlockedError):
            await PreviewDelivery(opener=lambda document: False).deliver(invoice_pdf)


class TestStorageUploadDelivery:
    """Test cases for storage uploads."""

    @pytest.mark.asyncio
    async def test_upload_path_and_metadata(self, storage, invoice_pdf):
        delivery = StorageUploadDelivery(storage, clock_millis=lambda: 1760000000000)

        result = await delivery.deliver(invoice_pdf)

        expected_path = "invoices/inv-1/invoice-INV-001-1760000000000.pdf"
        storage.upload_document.assert_awaited_once_with(invoice_pdf.content, expected_path, "application/pdf")
        storage.record_file_metadata.assert_awaited_once_with(
            invoice_id="inv-1",
            file_name="invoice-INV-001-1760000000000.pdf",
            file_path=expected_path,
            file_url="https://cdn.example.com/documents/file.pdf",
            file_type="pdf",
            file_size=len(invoice_pdf.content)
        )
        assert result.action == DeliveryAction.UPLOAD
        assert result.file_path == expected_path
        assert result.public_url == "https://cdn.example.com/documents/file.pdf"
        assert result.metadata_saved is True
        assert result.content is None

    @pytest.mark.asyncio
    async def test_metadata_failure_does_not_fail_upload(self, storage, invoice_pdf):
        storage.record_file_metadata.side_effect = MetadataWriteError("insert failed")

        result = await StorageUploadDelivery(storage).deliver(invoice_pdf)

        assert result.metadata_saved is False
        assert result.public_url == "https://cdn.example.com/documents/file.pdf"

    @pytest.mark.asyncio
    async def test_upload_failure_propagates(self, storage, invoice_pdf):
        storage.upload_document.side_effect = UploadError("bucket missing")

        with pytest.raises(UploadError):
            await StorageUploadDelivery(storage).deliver(invoice_pdf)
        storage.record_file_metadata.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_metadata_can_be_skipped(self, storage, invoice_pdf):
        result = await StorageUploadDelivery(storage, record_metadata=False).deliver(invoice_pdf)

        storage.record_file_metadata.assert_not_awaited()
        assert result.metadata_saved is False

    @pytest.mark.asyncio
    async def test_report_without_invoice_cannot_be_uploaded(self, storage, report_csv):
        with pytest.raises(ValidationError):
            await StorageUploadDelivery(storage).deliver(report_csv)
        storage.upload_document.assert_not_awaited()

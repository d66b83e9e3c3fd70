"""
Export DTOs for report exports and invoice documents.
"""

from typing import Any, Optional
from datetime import date
from pydantic import Field

from finance_app.application.dto.base_dto import RequestDTO, ResponseDTO


class DateRangeDTO(RequestDTO):
    """Inclusive ``{from, to}`` calendar range."""

    start: date = Field(alias="from", description="First day included")
    end: date = Field(alias="to", description="Last day included")


class ExportRequestDTO(RequestDTO):
    """
    Body of the report export endpoint.

    Fields are accepted as sent, so missing, mistyped or unknown values reach
    the use case and are answered with a 400 naming the bad field.
    """

    export_type: Optional[Any] = Field(default=None, alias="type", description="csv, excel or pdf")
    report_type: Optional[Any] = Field(default=None, alias="reportType", description="Report to export")
    date_range: Optional[Any] = Field(
        default=None,
        alias="dateRange",
        description="``{from, to}`` ISO dates, both included"
    )


class DocumentUploadResponseDTO(ResponseDTO):
    """Stored location of an uploaded invoice document."""

    success: bool = True
    url: str = Field(description="Public URL of the stored file")
    file_name: str = Field(description="Stored file name")
    file_path: str = Field(description="Object path in the documents bucket")
    file_size: int = Field(description="Size in bytes")
    metadata_saved: bool = Field(description="Whether the file record was written")

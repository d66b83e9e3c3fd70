"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import List, Optional, TypeVar, Generic
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict

from finance_app.infrastructure.pagination import PaginationMetadata


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        extra="ignore",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""
    pass


T = TypeVar('T')


class ListResponseDTO(ResponseDTO, Generic[T]):
    """Base class for paginated list responses."""

    items: List[T] = Field(description="List of items")
    total: int = Field(description="Total number of items")
    page: int = Field(description="Current page number")
    page_size: int = Field(description="Items per page")
    total_pages: int = Field(description="Total number of pages")
    has_next: bool = Field(description="Whether there are more pages")
    has_prev: bool = Field(description="Whether there are previous pages")

    @classmethod
    def from_metadata(cls, items: List[T], metadata: PaginationMetadata):
        """Create a paginated response from repository page metadata."""
        return cls(
            items=items,
            total=metadata.total_items,
            page=metadata.page,
            page_size=metadata.page_size,
            total_pages=metadata.total_pages,
            has_next=metadata.has_next,
            has_prev=metadata.has_previous
        )


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=datetime.now, description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")

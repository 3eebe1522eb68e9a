"""Error response schemas.

Every failed request returns the same envelope::

    {
        "status": 404,
        "error": "Resource Not Found",
        "message": "Article not found with id: 9c1f...",
        "details": "The requested operation could not be completed",
        "path": "/api/articles/9c1f...",
        "timestamp": "2025-06-01T12:00:00.000+00:00",
        "validationErrors": null,
        "errorId": "ERR-1A2B3C4D"
    }

Exception handlers in main.py construct these from exceptions.
"""

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class ErrorType(StrEnum):
    """Closed set of error categories reported in the ``error`` field."""

    VALIDATION_ERROR = "Validation Error"
    RESOURCE_NOT_FOUND = "Resource Not Found"
    BAD_REQUEST = "Bad Request"
    INTERNAL_SERVER_ERROR = "Internal Server Error"
    DATABASE_ERROR = "Database Error"
    BUSINESS_LOGIC_ERROR = "Business Logic Error"

    @classmethod
    def for_status(cls, status_code: int) -> "ErrorType":
        """Category for a bare HTTP status with no richer exception behind it."""
        if status_code == 404:
            return cls.RESOURCE_NOT_FOUND
        if 400 <= status_code < 500:
            return cls.BAD_REQUEST
        return cls.INTERNAL_SERVER_ERROR


def new_error_id() -> str:
    """Short tracking id for correlating a response with its log line."""
    return "ERR-" + uuid.uuid4().hex[:8].upper()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationErrorItem(_CamelModel):
    """Individual field validation error."""

    field: str = Field(examples=["title"])
    rejected_value: Any = Field(default=None, examples=[""])
    message: str = Field(examples=["Title is required and cannot be blank"])


class ErrorResponse(_CamelModel):
    """Envelope returned by all error responses."""

    status: int = Field(examples=[400])
    error: ErrorType
    message: str = Field(examples=["Validation failed for one or more fields"])
    details: str = Field(examples=["Please check the provided data and try again"])
    path: str = Field(examples=["/api/articles"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    validation_errors: list[ValidationErrorItem] | None = None
    error_id: str = Field(default_factory=new_error_id, examples=["ERR-1A2B3C4D"])

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.isoformat(timespec="milliseconds")

    def to_json(self) -> dict[str, object]:
        """JSON-ready dict with camelCase keys for JSONResponse."""
        return self.model_dump(mode="json", by_alias=True)

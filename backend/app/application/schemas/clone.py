"""Pydantic DTOs (Data Transfer Objects) for the record cloning feature."""

from typing import Any

from pydantic import BaseModel, Field


class CloneRecordRequest(BaseModel):
    """Schema for a clone request — values that override the original's."""

    data: dict[str, Any] = Field(
        default_factory=dict, examples=[{"html_body": "<p>Copy</p>"}],
    )


class CloneRecordResponse(BaseModel):
    """Returned when the default clone path created a new record."""

    id: Any


class CloneHandlerResponse(BaseModel):
    """Returned when a custom clone handler produced the result."""

    result: Any


class CloneInfoResponse(BaseModel):
    """Clone capabilities of an object."""

    object_name: str
    cloneable: bool
    cloneable_fields: list[str]
    clone_handler: str

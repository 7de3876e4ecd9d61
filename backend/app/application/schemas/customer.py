"""Pydantic DTOs (Data Transfer Objects) for the Customer feature."""

from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class CustomerPayload(BaseModel):
    """Body of a create or update request.

    Fields are deliberately lenient here; presence and type coercion are
    enforced by ``CustomerService`` so that every failure reports the same
    envelope message.
    """

    name: str | None = Field(None, examples=["Ada Lovelace"])
    date_of_birth: Any = Field(None, alias="dateOfBirth", examples=["1990-01-01"])
    member_number: Any = Field(None, alias="memberNumber", examples=[42])
    interests: str | None = Field(None, examples=["math"])

    model_config = ConfigDict(populate_by_name=True)


class CustomerResponse(BaseModel):
    """Customer as returned to the client (camelCase wire names)."""

    id: str = Field(..., alias="_id")
    name: str
    date_of_birth: date = Field(..., alias="dateOfBirth")
    member_number: int = Field(..., alias="memberNumber")
    interests: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope — clients branch on ``success``."""

    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None


class StatusResponse(BaseModel):
    """Envelope for operations that only confirm success (deletes)."""

    success: bool = True
    message: str

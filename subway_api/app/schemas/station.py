"""Pydantic models for stations."""

from pydantic import BaseModel, Field


class StationCreate(BaseModel):
    """Schema for registering a station."""

    name: str = Field(..., min_length=1, examples=["강남역"])


class StationRead(BaseModel):
    """Schema for reading a station from the API."""

    id: int
    name: str
    created_at: str = Field(..., alias="createdDate")
    updated_at: str = Field(..., alias="modifiedDate")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }

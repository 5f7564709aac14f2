"""
Pydantic schemas for subway lines.

A line is created and updated with the same request shape: its name,
color, the two endpoint stations and the distance between them.  Keys
are camelCase on the wire (``upStationId``) and snake_case in Python;
both are accepted when building the models.
"""

from typing import List

from pydantic import BaseModel, Field

from .station import StationRead


class LineRequest(BaseModel):
    """Body of ``POST /lines`` and ``PUT /lines/{id}``."""

    name: str = Field(..., min_length=1, examples=["신분당선"])
    color: str = Field(..., min_length=1, examples=["red"])
    up_station_id: int = Field(..., alias="upStationId", description="Upstream endpoint station id")
    down_station_id: int = Field(..., alias="downStationId", description="Downstream endpoint station id")
    distance: int = Field(..., gt=0, description="Distance between the two endpoints")

    model_config = {
        "populate_by_name": True,
    }


class LineResponse(BaseModel):
    """Schema for reading a line.

    ``stations`` are listed in line order, from the upstream endpoint to
    the downstream one.
    """

    id: int
    name: str
    color: str
    stations: List[StationRead] = Field(default_factory=list)
    created_at: str = Field(..., alias="createdDate")
    updated_at: str = Field(..., alias="modifiedDate")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }

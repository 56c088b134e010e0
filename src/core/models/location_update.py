"""
Location update message as pushed by tracked devices.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field

MovingState = Literal["arrived", "approaching", "passing", "moving"]


class Coords(BaseModel):
    latitude: float
    longitude: float
    accuracy: Optional[float] = Field(default=None, description="Horizontal error radius in meters")
    speed: Optional[float] = Field(default=None, description="Ground speed in meters/second")


class LocationUpdate(BaseModel):
    type: str = "location_update"
    id: str
    device: str = Field(..., min_length=1)
    timestamp: float = Field(..., description="Fix time in epoch milliseconds")
    state: Optional[MovingState] = None
    coords: Coords

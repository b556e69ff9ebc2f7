from pydantic import BaseModel, Field
from typing import Optional


class PurokLocation(BaseModel):
    name: str
    lat: float
    lng: float


class Coordinate(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class PurokAssignment(BaseModel):
    purok: Optional[str] = None
    error: Optional[str] = None

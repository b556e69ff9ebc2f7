from fastapi import APIRouter
from eclinic.geo import PUROK_LOCATIONS, nearest_zone
from eclinic.schemas.geo import PurokLocation, Coordinate, PurokAssignment

router = APIRouter()


@router.get("", response_model=list[PurokLocation])
async def list_puroks():
    return [PurokLocation(name=z.name, lat=z.lat, lng=z.lng) for z in PUROK_LOCATIONS]


@router.post("/nearest", response_model=PurokAssignment)
async def nearest_purok(coordinate: Coordinate):
    return PurokAssignment(purok=nearest_zone(coordinate.lat, coordinate.lng))

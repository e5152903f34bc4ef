"""
ZIP code lookup route.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.geocoding import get_default_zip_geocoder, normalize_zip

router = APIRouter()


class ZipLocationResponse(BaseModel):
    zip_code: str
    latitude: float
    longitude: float
    city: Optional[str] = None
    state: Optional[str] = None


@router.get("/zipcode/{zip_code}", response_model=ZipLocationResponse)
def lookup_zipcode(zip_code: str):
    key = normalize_zip(zip_code)
    if key is None:
        raise HTTPException(status_code=400, detail=f"Invalid ZIP code: {zip_code}")
    record = get_default_zip_geocoder().lookup_record(key)
    if record is None:
        raise HTTPException(status_code=404, detail="ZIP code not found")
    return ZipLocationResponse(
        zip_code=key,
        latitude=record.lat,
        longitude=record.lon,
        city=record.city,
        state=record.state,
    )

# earthproxy/routers/earthdata.py
import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from ..schemas.common import DataBundle, Location
from ..schemas.earthdata import EarthDataResponse
from ..services.estimator import Estimator, build_estimator
from ..services.gibs_worldview import integration_sources, ndvi_composite_date
from ..utils.time import iso_utc, parse_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nasa", tags=["earthdata"])

HEALTH_MESSAGE = "NASA EarthData service is running"


@lru_cache
def get_estimator() -> Estimator:
    return build_estimator()


# -------- helpers comunes --------
def _location(lat: Optional[str], lon: Optional[str]) -> Location:
    if lat is None or lon is None:
        raise HTTPException(status_code=400, detail="Latitude and longitude parameters are required")
    try:
        return Location(lat=lat, lon=lon)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid latitude or longitude values")

def _when(when: Optional[str]):
    try:
        dt = parse_date(when)
        # el compuesto NDVI resta días; fechas pegadas al año 1 desbordan
        ndvi_composite_date(dt)
        return dt
    except (ValueError, OverflowError):
        raise HTTPException(status_code=400, detail="Invalid 'when' value, expected ISO-8601")


@router.get("/earthdata", response_model=EarthDataResponse)
async def get_earthdata(
    lat: Optional[str] = Query(None, description="Latitud [-90, 90]"),
    lon: Optional[str] = Query(None, description="Longitud [-180, 180]"),
    when: Optional[str] = Query(None, description="ISO datetime; default now (UTC)"),
    seed: Optional[int] = Query(None, ge=0, description="Semilla para valores reproducibles"),
    estimator: Estimator = Depends(get_estimator),
):
    logger.info("Received EarthData request: lat=%s, lon=%s", lat, lon)
    loc = _location(lat, lon)
    dt = _when(when) if when else None
    try:
        return await estimator.estimate(loc, dt, seed)
    except Exception:
        logger.exception("Error processing EarthData request: lat=%s, lon=%s", lat, lon)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/earthdata/health", response_class=PlainTextResponse)
def health():
    return HEALTH_MESSAGE


@router.get("/earthdata/sources", response_model=DataBundle)
def earthdata_sources(
    lat: Optional[str] = Query(None),
    lon: Optional[str] = Query(None),
    when: Optional[str] = Query(None, description="ISO datetime; default now (UTC)"),
):
    loc = _location(lat, lon)
    dt = _when(when)
    return DataBundle(location=loc, timestamp=iso_utc(dt), sources=integration_sources(loc, dt))

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from structlog import get_logger

from app.dependencies.auth import require_admin
from app.dependencies.geocoding import get_geocode_client, locations_rate_limiter
from app.schemas.location import LocationRecord
from app.services.geocoding import GeocodeClient

logger = get_logger()
router = APIRouter(
    prefix="/api/locations",
    tags=["locations"],
    dependencies=[Depends(locations_rate_limiter)],
)


@router.get("/search", response_model=List[LocationRecord])
async def search_locations(
    city: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    geocoder: GeocodeClient = Depends(get_geocode_client),
):
    results = await geocoder.search(city, category)
    logger.info("Location search completed", city=city, category=category, result_count=len(results))
    return results


@router.get("/reverse", response_model=LocationRecord)
async def reverse_geocode(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    geocoder: GeocodeClient = Depends(get_geocode_client),
):
    return await geocoder.reverse(lat, lon)


@router.get("/nearby", response_model=List[LocationRecord])
async def nearby_locations(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    radius: int = Query(1000, gt=0, description="Radius in meters"),
    geocoder: GeocodeClient = Depends(get_geocode_client),
):
    return await geocoder.nearby(lat, lon, radius)


@router.post("/cache/clear", dependencies=[Depends(require_admin)])
async def clear_cache(geocoder: GeocodeClient = Depends(get_geocode_client)):
    cleared = geocoder.cache.clear()
    logger.info("Geocode cache cleared", cleared_keys=cleared)
    return {"status": "ok", "cleared_keys": cleared}

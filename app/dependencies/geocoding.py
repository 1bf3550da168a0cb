from fastapi import Request

from app.config import settings
from app.dependencies.rate_limit import GroupRateLimiter
from app.services.geocoding import GeocodeClient

# One budget per client for the whole /locations group
locations_rate_limiter = GroupRateLimiter("locations", times=settings.LOCATION_RATE_LIMIT, seconds=60)


def get_geocode_client(request: Request) -> GeocodeClient:
    return request.app.state.geocode_client

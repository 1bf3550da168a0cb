from typing import Any, Dict, List, Optional

import httpx
from structlog import get_logger

from app.core.errors import MissingParameterError, UpstreamError
from app.schemas.location import LocationRecord
from app.services.geocode_cache import GeocodeCache

logger = get_logger()

SEARCH_LIMIT = 50
# Half-width of the nearby box in degrees; the requested radius does not change it
NEARBY_BOX_DEGREES = 0.01


def _to_location(place: Dict[str, Any], address: Optional[Dict[str, Any]]) -> LocationRecord:
    return LocationRecord(
        id=place.get("place_id"),
        display_name=place.get("display_name"),
        type=place.get("type"),
        category=place.get("class"),
        latitude=float(place["lat"]),
        longitude=float(place["lon"]),
        address=address,
        importance=place.get("importance"),
        bounding_box=place.get("boundingbox"),
    )


def _shape_address(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    raw = raw or {}
    return {
        "road": raw.get("road"),
        "suburb": raw.get("suburb"),
        "city": raw.get("city") or raw.get("town"),
        "state": raw.get("state"),
        "postcode": raw.get("postcode"),
        "country": raw.get("country"),
    }


def coordinate_text(value: float) -> str:
    """Render a coordinate the way it is usually written in the query string (34, not 34.0)."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def format_places(places: Any) -> List[LocationRecord]:
    if not isinstance(places, list):
        raise ValueError("Expected a list of places from the geocoding provider")
    return [_to_location(place, _shape_address(place.get("address"))) for place in places]


class GeocodeClient:
    """Nominatim search/reverse lookups behind a GeocodeCache."""

    def __init__(
        self,
        cache: GeocodeCache,
        base_url: str,
        user_agent: str,
        country_codes: str = "in",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.country_codes = country_codes
        self.timeout = timeout
        self._transport = transport

    async def _fetch(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers={"User-Agent": self.user_agent})
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Geocoding provider error", url=url, status_code=e.response.status_code, response=e.response.text[:500])
            raise UpstreamError(f"Geocoding provider returned {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("Geocoding provider unreachable", url=url, error=str(e), error_type=type(e).__name__)
            raise UpstreamError(f"Geocoding provider unreachable: {e}") from e
        except ValueError as e:
            logger.error("Geocoding provider sent invalid JSON", url=url, error=str(e))
            raise UpstreamError(f"Invalid response from geocoding provider: {e}") from e

    def _cached(self, cache_key: str):
        entry = self.cache.get(cache_key)
        if entry is not None:
            logger.info("Geocode cache hit", cache_key=cache_key)
            return entry.value
        logger.info("Geocode cache miss", cache_key=cache_key)
        return None

    async def search(self, city: Optional[str], category: Optional[str] = None) -> List[LocationRecord]:
        if not city:
            raise MissingParameterError("city", "City parameter is required")

        cache_key = f"{city}-{category or 'all'}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        query = f"{city} {category}" if category else city
        data = await self._fetch("search", {
            "q": query,
            "format": "json",
            "addressdetails": 1,
            "limit": SEARCH_LIMIT,
            "countrycodes": self.country_codes,
        })
        results = self._reshape(format_places, data)
        self.cache.put(cache_key, results)
        return results

    async def reverse(self, lat: Optional[float], lon: Optional[float]) -> LocationRecord:
        self._require_coordinates(lat, lon)

        cache_key = f"{coordinate_text(lat)}-{coordinate_text(lon)}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        data = await self._fetch("reverse", {
            "lat": lat,
            "lon": lon,
            "format": "json",
            "addressdetails": 1,
            "zoom": 18,
        })
        # Reverse lookups keep the provider's address object as-is
        result = self._reshape(lambda place: _to_location(place, place.get("address")), data)
        self.cache.put(cache_key, result)
        return result

    async def nearby(self, lat: Optional[float], lon: Optional[float], radius: int = 1000) -> List[LocationRecord]:
        self._require_coordinates(lat, lon)

        cache_key = f"nearby-{coordinate_text(lat)}-{coordinate_text(lon)}-{radius}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        viewbox = ",".join(str(v) for v in (
            lon - NEARBY_BOX_DEGREES,
            lat + NEARBY_BOX_DEGREES,
            lon + NEARBY_BOX_DEGREES,
            lat - NEARBY_BOX_DEGREES,
        ))
        data = await self._fetch("search", {
            "format": "json",
            "addressdetails": 1,
            "limit": SEARCH_LIMIT,
            "viewbox": viewbox,
            "bounded": 1,
        })
        results = self._reshape(format_places, data)
        self.cache.put(cache_key, results)
        return results

    @staticmethod
    def _require_coordinates(lat: Optional[float], lon: Optional[float]):
        if lat is None or lon is None:
            field = "lat" if lat is None else "lon"
            raise MissingParameterError(field, "Both latitude and longitude parameters are required")

    @staticmethod
    def _reshape(shaper, data):
        try:
            return shaper(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("Malformed geocoding payload", error=str(e), error_type=type(e).__name__)
            raise UpstreamError(f"Malformed geocoding payload: {e}") from e

from typing import Any, Dict, List, Optional

from app.schemas.base import CamelModel


class LocationRecord(CamelModel):
    """One geocoding hit, whether from a forward, reverse or nearby lookup."""

    id: Optional[int] = None
    display_name: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    latitude: float
    longitude: float
    address: Optional[Dict[str, Any]] = None
    importance: Optional[float] = None
    bounding_box: Optional[List[float]] = None

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel
from app.schemas.property import Category, District, PropertyType


class PropertyFilters(CamelModel):
    district: Optional[District] = None
    property_type: Optional[PropertyType] = None
    category: Optional[Category] = None
    min_price: Optional[float] = Field(None, description="Inclusive lower bound on price.")
    max_price: Optional[float] = Field(None, description="Inclusive upper bound on price.")
    bedrooms: Optional[int] = None

    @field_validator("district", "property_type", "category", "min_price", "max_price", "bedrooms", mode="before")
    @classmethod
    def blank_as_unset(cls, value):
        # Search forms submit every filter key, leaving unset ones empty
        if isinstance(value, str) and not value.strip():
            return None
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "district": "Srinagar",
                "propertyType": "residential",
                "category": "sale",
                "minPrice": 2000000,
                "maxPrice": 6000000,
                "bedrooms": 3,
            }
        }


class SavedSearchRequest(PropertyFilters):
    name: Optional[str] = Field(None, max_length=100)


class SavedSearchOut(SavedSearchRequest):
    id: int
    created_at: datetime

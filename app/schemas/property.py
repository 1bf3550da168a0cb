import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, RootModel, field_validator

from app.schemas.base import CamelModel


class District(str, Enum):
    srinagar = "Srinagar"
    jammu = "Jammu"
    anantnag = "Anantnag"
    baramulla = "Baramulla"
    budgam = "Budgam"
    ganderbal = "Ganderbal"
    kupwara = "Kupwara"
    pulwama = "Pulwama"
    shopian = "Shopian"
    kulgam = "Kulgam"
    udhampur = "Udhampur"
    kathua = "Kathua"
    rajouri = "Rajouri"
    poonch = "Poonch"
    doda = "Doda"
    kishtwar = "Kishtwar"
    ramban = "Ramban"
    reasi = "Reasi"
    samba = "Samba"
    bandipora = "Bandipora"


class PropertyType(str, Enum):
    residential = "residential"
    commercial = "commercial"
    land = "land"
    plot = "plot"


class Category(str, Enum):
    sale = "sale"
    rent = "rent"
    homestay = "homestay"
    holiday_home = "holiday-home"


class AreaUnit(str, Enum):
    sqft = "sqft"
    sqm = "sqm"
    acres = "acres"
    kanal = "kanal"


class Amenity(str, Enum):
    parking = "parking"
    gym = "gym"
    swimming_pool = "swimming_pool"
    security = "security"
    garden = "garden"
    play_area = "play_area"
    power_backup = "power_backup"
    water_supply = "water_supply"


class PropertyStatus(str, Enum):
    available = "available"
    sold = "sold"
    rented = "rented"


class PropertyBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    location: str = Field(..., min_length=1, max_length=255)
    district: District
    category: Category
    area: float = Field(..., gt=0)
    area_unit: AreaUnit
    amenities: List[Amenity] = []
    images: List[str] = Field(..., min_length=1)
    featured: bool = False
    status: PropertyStatus = PropertyStatus.available

    @field_validator("amenities")
    @classmethod
    def _dedupe_amenities(cls, value: List[Amenity]) -> List[Amenity]:
        return list(dict.fromkeys(value))


class ResidentialPropertyCreate(PropertyBase):
    property_type: Literal["residential"]
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)


class NonResidentialPropertyCreate(PropertyBase):
    # bedrooms/bathrooms are not declared, so any supplied values are dropped
    property_type: Literal["commercial", "land", "plot"]


class PropertyCreate(RootModel[Annotated[
    Union[ResidentialPropertyCreate, NonResidentialPropertyCreate],
    Field(discriminator="property_type"),
]]):
    """A validated listing, tagged by property type."""


class PropertyUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    district: Optional[District] = None
    property_type: Optional[PropertyType] = None
    category: Optional[Category] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, gt=0)
    area_unit: Optional[AreaUnit] = None
    amenities: Optional[List[Amenity]] = None
    images: Optional[List[str]] = Field(None, min_length=1)
    featured: Optional[bool] = None
    status: Optional[PropertyStatus] = None


class OwnerOut(CamelModel):
    name: str
    email: str


class PropertyOut(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    price: float
    location: str
    district: District
    property_type: PropertyType
    category: Category
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: float
    area_unit: AreaUnit
    amenities: List[Amenity]
    images: List[str]
    featured: bool
    status: PropertyStatus
    created_by: Optional[OwnerOut] = None
    created_at: datetime
    updated_at: datetime

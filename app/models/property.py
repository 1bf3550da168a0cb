import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.models import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (
        Index("ix_properties_location_district", "location", "district"),
        Index("ix_properties_type_category", "property_type", "category"),
        Index("ix_properties_price", "price"),
        Index("ix_properties_featured", "featured"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    location = Column(String(255), nullable=False)
    district = Column(String(50), nullable=False)
    property_type = Column(String(20), nullable=False)
    category = Column(String(20), nullable=False)
    # Only set for residential listings
    bedrooms = Column(Integer)
    bathrooms = Column(Integer)
    area = Column(Float, nullable=False)
    area_unit = Column(String(10), nullable=False)
    amenities = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    images = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False)
    status = Column(
        Enum("available", "sold", "rented", name="propertystatus"),
        nullable=False,
        default="available",
        server_default="available",
    )
    created_by_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    created_by = relationship("User", lazy="joined")

import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import relationship

from app.models import Base
from app.models.property import utcnow

saved_properties = Table(
    "saved_properties",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("property_id", Uuid, ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20))
    role = Column(Enum("user", "admin", name="userrole"), nullable=False, default="user", server_default="user")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    saved_properties = relationship("Property", secondary=saved_properties, lazy="selectin")
    saved_searches = relationship(
        "SavedSearch",
        lazy="selectin",
        order_by="SavedSearch.id",
        cascade="all, delete-orphan",
    )

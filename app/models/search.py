from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Uuid

from app.models import Base
from app.models.property import utcnow


class SavedSearch(Base):
    """A user's snapshot of property filters, re-runnable later."""

    __tablename__ = "saved_searches"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100))
    district = Column(String(50))
    property_type = Column(String(20))
    category = Column(String(20))
    min_price = Column(Float)
    max_price = Column(Float)
    bedrooms = Column(Integer)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

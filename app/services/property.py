import uuid
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.config import settings
from app.core.errors import NotFoundError
from app.models import Property, User
from app.schemas.property import NonResidentialPropertyCreate, ResidentialPropertyCreate
from app.schemas.search import PropertyFilters
from app.services.filters import build_property_conditions

logger = get_logger()

PropertyRecord = Union[ResidentialPropertyCreate, NonResidentialPropertyCreate]


def _parse_id(property_id: Union[str, uuid.UUID]) -> Optional[uuid.UUID]:
    if isinstance(property_id, uuid.UUID):
        return property_id
    try:
        return uuid.UUID(str(property_id))
    except ValueError:
        return None


def _column_values(record: PropertyRecord) -> dict:
    values = record.model_dump(mode="json")
    # Non-residential records carry no room counts
    values.setdefault("bedrooms", None)
    values.setdefault("bathrooms", None)
    return values


async def list_properties(db: AsyncSession, filters: PropertyFilters) -> List[Property]:
    conditions = build_property_conditions(filters)
    stmt = select(Property).where(*conditions).order_by(Property.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_featured(db: AsyncSession, limit: int = settings.FEATURED_LIMIT) -> List[Property]:
    stmt = (
        select(Property)
        .where(Property.featured.is_(True))
        .order_by(Property.created_at.desc())
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_property(db: AsyncSession, property_id: Union[str, uuid.UUID]) -> Property:
    pid = _parse_id(property_id)
    prop = await db.get(Property, pid) if pid is not None else None
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


async def create_property(db: AsyncSession, record: PropertyRecord, owner_id: uuid.UUID) -> Property:
    prop = Property(**_column_values(record), created_by_id=owner_id)
    db.add(prop)
    await db.commit()
    await db.refresh(prop, ["created_by"])
    logger.info("Property created", property_id=str(prop.id), owner_id=str(owner_id))
    return prop


async def update_property(db: AsyncSession, property_id: Union[str, uuid.UUID], record: PropertyRecord) -> Property:
    prop = await get_property(db, property_id)
    for key, value in _column_values(record).items():
        setattr(prop, key, value)
    await db.commit()
    logger.info("Property updated", property_id=str(prop.id))
    return prop


async def delete_property(db: AsyncSession, property_id: Union[str, uuid.UUID]) -> None:
    prop = await get_property(db, property_id)
    await db.delete(prop)
    await db.commit()
    logger.info("Property deleted", property_id=str(prop.id))


async def save_property(db: AsyncSession, user: User, property_id: Union[str, uuid.UUID]) -> None:
    prop = await get_property(db, property_id)
    if prop not in user.saved_properties:
        user.saved_properties.append(prop)
        await db.commit()
    logger.info("Property saved", user_id=str(user.id), property_id=str(prop.id))


async def unsave_property(db: AsyncSession, user: User, property_id: Union[str, uuid.UUID]) -> None:
    pid = _parse_id(property_id)
    remaining = [p for p in user.saved_properties if p.id != pid]
    if len(remaining) != len(user.saved_properties):
        user.saved_properties = remaining
        await db.commit()
        logger.info("Property unsaved", user_id=str(user.id), property_id=str(pid))

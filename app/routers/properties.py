from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.database import get_session
from app.dependencies.auth import get_current_user, require_admin
from app.models import User
from app.schemas.property import PropertyCreate, PropertyOut, PropertyUpdate
from app.schemas.search import PropertyFilters
from app.services import property as property_service

logger = get_logger()
router = APIRouter(prefix="/api/properties", tags=["properties"])

# Fields a client may not write through PATCH
READ_ONLY_FIELDS = {"id", "created_by", "created_at", "updated_at"}


def get_filters(
    district: Optional[str] = Query(None),
    property_type: Optional[str] = Query(None, alias="propertyType"),
    category: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    bedrooms: Optional[str] = Query(None),
) -> PropertyFilters:
    # Validated here rather than by Query so blank values read as absent
    return PropertyFilters.model_validate({
        "district": district,
        "propertyType": property_type,
        "category": category,
        "minPrice": min_price,
        "maxPrice": max_price,
        "bedrooms": bedrooms,
    })


@router.get("", response_model=List[PropertyOut])
async def list_properties(filters: PropertyFilters = Depends(get_filters), db: AsyncSession = Depends(get_session)):
    results = await property_service.list_properties(db, filters)
    logger.info("Property search completed", filters=filters.model_dump(exclude_none=True, mode="json"), result_count=len(results))
    return results


@router.get("/featured", response_model=List[PropertyOut])
async def list_featured(db: AsyncSession = Depends(get_session)):
    return await property_service.list_featured(db)


@router.get("/{property_id}", response_model=PropertyOut)
async def get_property(property_id: str, db: AsyncSession = Depends(get_session)):
    return await property_service.get_property(db, property_id)


@router.post("", response_model=PropertyOut, status_code=status.HTTP_201_CREATED)
async def create_property(
    payload: PropertyCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
):
    return await property_service.create_property(db, payload.root, admin.id)


@router.patch("/{property_id}", response_model=PropertyOut)
async def update_property(
    property_id: str,
    patch: PropertyUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
):
    existing = await property_service.get_property(db, property_id)
    merged = PropertyOut.model_validate(existing).model_dump(mode="json", by_alias=True, exclude=READ_ONLY_FIELDS)
    merged.update(patch.model_dump(mode="json", by_alias=True, exclude_unset=True))
    # The merged listing must satisfy the same rules as a new one
    record = PropertyCreate.model_validate(merged).root
    return await property_service.update_property(db, property_id, record)


@router.delete("/{property_id}")
async def delete_property(
    property_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
):
    await property_service.delete_property(db, property_id)
    return {"message": "Property deleted successfully"}


@router.post("/{property_id}/save")
async def save_property(
    property_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    await property_service.save_property(db, user, property_id)
    return {"message": "Property saved successfully"}


@router.delete("/{property_id}/save")
async def unsave_property(
    property_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    await property_service.unsave_property(db, user, property_id)
    return {"message": "Property removed from saved list"}

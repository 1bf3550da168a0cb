import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.models import SavedSearch, User
from app.schemas.search import SavedSearchRequest
from app.schemas.user import ProfileUpdate

logger = get_logger()


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> Optional[User]:
    return await db.get(User, user_id)


async def update_profile(db: AsyncSession, user: User, update: ProfileUpdate) -> User:
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in changes.items():
        setattr(user, key, value)
    if changes:
        await db.commit()
        logger.info("Profile updated", user_id=str(user.id), fields=sorted(changes))
    return user


async def add_saved_search(db: AsyncSession, user: User, request: SavedSearchRequest) -> List[SavedSearch]:
    values = request.model_dump(mode="json")
    user.saved_searches.append(SavedSearch(**values))
    await db.commit()
    await db.refresh(user, ["saved_searches"])
    logger.info("Saved search", user_id=str(user.id), count=len(user.saved_searches))
    return user.saved_searches


async def delete_saved_search(db: AsyncSession, user: User, search_id: int) -> None:
    remaining = [s for s in user.saved_searches if s.id != search_id]
    if len(remaining) != len(user.saved_searches):
        user.saved_searches = remaining
        await db.commit()
        logger.info("Saved search removed", user_id=str(user.id), search_id=search_id)

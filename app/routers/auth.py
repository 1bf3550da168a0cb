from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.database import get_session
from app.dependencies.auth import get_current_user
from app.models import User
from app.schemas.search import SavedSearchOut, SavedSearchRequest
from app.schemas.user import LoginRequest, ProfileUpdate, RegisterRequest, TokenResponse, UserDetail, UserOut
from app.services import auth as auth_service
from app.services import user as user_service

logger = get_logger()
router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(token=auth_service.create_access_token(user.id), user=UserOut.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_session)):
    user = await auth_service.register_user(db, request)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_session)):
    user = await auth_service.authenticate(db, request)
    logger.info("User logged in", user_id=str(user.id))
    return _token_response(user)


@router.get("/me", response_model=UserDetail)
async def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserDetail)
async def update_me(
    update: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await user_service.update_profile(db, user, update)


@router.get("/saved-searches", response_model=List[SavedSearchOut])
async def list_saved_searches(user: User = Depends(get_current_user)):
    return user.saved_searches


@router.post("/saved-searches", response_model=List[SavedSearchOut])
async def create_saved_search(
    request: SavedSearchRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await user_service.add_saved_search(db, user, request)


@router.delete("/saved-searches/{search_id}")
async def delete_saved_search(
    search_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    await user_service.delete_saved_search(db, user, search_id)
    return {"message": "Search criteria removed successfully"}

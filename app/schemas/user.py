import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel
from app.schemas.property import PropertyOut
from app.schemas.search import SavedSearchOut

PHONE_PATTERN = r"^\+?[0-9][0-9 \-]{6,18}$"


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, description="At least 6 characters.")
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)


class UserOut(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    role: str


class UserDetail(UserOut):
    phone: Optional[str] = None
    saved_properties: List[PropertyOut] = []
    saved_searches: List[SavedSearchOut] = []
    created_at: datetime


class TokenResponse(CamelModel):
    token: str
    user: UserOut

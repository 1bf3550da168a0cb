from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://user:password@db:5432/royal_estates"
    REDIS_URL: str = "redis://localhost:6379/0"
    JWT_SECRET: str = "your_jwt_secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 7
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    # OpenStreetMap Nominatim geocoding
    NOMINATIM_BASE_URL: str = "https://nominatim.openstreetmap.org"
    NOMINATIM_USER_AGENT: str = "RoyalGroupRealEstates/1.0"
    GEOCODE_COUNTRY_CODES: str = "in"
    GEOCODE_CACHE_TTL_SECONDS: int = 24 * 60 * 60
    GEOCODE_TIMEOUT_SECONDS: float = 10.0
    # Requests per minute per client on /api/locations
    LOCATION_RATE_LIMIT: int = 60
    FEATURED_LIMIT: int = 6
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()

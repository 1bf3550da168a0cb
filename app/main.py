from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
from pydantic import ValidationError
from redis.asyncio import Redis
from structlog import get_logger

from app.config import settings
from app.core.errors import AppError, MissingParameterError, UpstreamError
from app.core.logging import setup_logging
from app.routers import auth, health, locations, properties, ws
from app.services.broadcast import Broadcaster
from app.services.geocode_cache import GeocodeCache
from app.services.geocoding import GeocodeClient

logger = get_logger()

app = FastAPI(title="Royal Estates API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(properties.router)
app.include_router(auth.router)
app.include_router(locations.router)
app.include_router(health.router)
app.include_router(ws.router)

app.state.geocode_client = GeocodeClient(
    cache=GeocodeCache(ttl=settings.GEOCODE_CACHE_TTL_SECONDS),
    base_url=settings.NOMINATIM_BASE_URL,
    user_agent=settings.NOMINATIM_USER_AGENT,
    country_codes=settings.GEOCODE_COUNTRY_CODES,
    timeout=settings.GEOCODE_TIMEOUT_SECONDS,
)
app.state.broadcaster = Broadcaster()


def field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic errors to ``{"field", "message"}`` pairs."""
    out = []
    for err in errors:
        if err["type"] in ("union_tag_not_found", "union_tag_invalid"):
            field = "propertyType"
        else:
            names = [part for part in err["loc"] if isinstance(part, str)]
            field = names[-1] if names else "body"
        out.append({"field": field, "message": err["msg"]})
    return out


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": field_errors(exc.errors())})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": field_errors(exc.errors())})


@app.exception_handler(MissingParameterError)
async def missing_parameter_handler(request: Request, exc: MissingParameterError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": [{"field": exc.field, "message": exc.message}]},
    )


@app.exception_handler(UpstreamError)
async def upstream_handler(request: Request, exc: UpstreamError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Error fetching location data", "message": exc.message},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", path=request.url.path, method=request.method, error=str(exc), exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": "Something went wrong!"})


@app.on_event("startup")
async def startup_event():
    setup_logging()
    redis = await Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    await FastAPILimiter.init(redis)

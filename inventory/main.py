"""FastAPI application entrypoint. No business logic; only wiring, middleware and error translation."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory.api.middleware import RequestLoggingMiddleware, envelope_response
from inventory.api.routes import router as api_router
from inventory.core.config import settings
from inventory.core.database import SessionLocal, engine, init_db
from inventory.core.errors import ServiceError
from inventory.schemas.common import ApiResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the schema and seed admin when AUTO_CREATE_SCHEMA is on; otherwise Alembic owns the schema."""
    logger.info("Inventory API starting (env=%s)", settings.APP_ENV)
    if settings.AUTO_CREATE_SCHEMA:
        db = SessionLocal()
        try:
            init_db(engine, db, settings)
        finally:
            db.close()
        logger.info("Database schema ensured")
    yield
    engine.dispose()
    logger.info("Inventory API shutdown complete")


app = FastAPI(
    title="Inventory API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it wraps everything else, CORS included.
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return envelope_response(exc.status_code, exc.message, exc.errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return envelope_response(exc.status_code, message, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    ]
    return envelope_response(status.HTTP_400_BAD_REQUEST, "Invalid request", errors)


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/", response_model=ApiResponse[dict[str, str]])
def root() -> ApiResponse[dict[str, str]]:
    """Root route; minimal payload for discovery."""
    return ApiResponse[dict[str, str]].ok({"docs": "/docs"}, "Inventory API")

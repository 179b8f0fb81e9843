# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.core.config import get_settings
from app.core.cors import CorsMiddleware
from app.core.errors import AppError, app_error_handler, validation_error_handler
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import account as _account_models  # noqa: F401
from app.models import notification as _notification_models  # noqa: F401

# Routers
from app.routers.auth import router as auth_router
from app.routers.users import router as users_router
from app.routers.accounts import router as accounts_router
from app.routers.notifications import router as notifications_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Refuse insecure configuration in production.
      - Verify DB connectivity and create tables.
    """
    settings.ensure_secure()
    if not settings.JWT_SECRET:
        logger.warning("⚠️ JWT_SECRET is not set, using the insecure development secret.")

    logger.info("🔄 Startup: Connecting to database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# --- CORS for /api/* (see app/core/cors.py for the origin rules) ---
app.add_middleware(CorsMiddleware, settings=settings, path_prefix=settings.API_PREFIX)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(accounts_router, prefix=settings.API_PREFIX)
app.include_router(notifications_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "easyfin-backend"}

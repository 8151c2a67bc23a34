"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from autoparts.config import get_settings
from autoparts.database import AsyncSessionLocal, init_db
from autoparts.errors import register_exception_handlers
from autoparts.log import configure_logging
from autoparts.routers import (
    appointments, auth, categories, customers, documents, history, orders, parts, vehicles,
)
from autoparts.seed import ensure_admin_user, ensure_categories

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    # Startup
    configure_logging(settings.log_level)
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    Path(settings.storage_dir).mkdir(parents=True, exist_ok=True)
    await init_db()
    async with AsyncSessionLocal() as session:
        await ensure_admin_user(session, settings)
        if settings.seed_categories:
            await ensure_categories(session)
    logger.info("Database initialized; API available at %s", settings.api_v1_prefix)

    yield

    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## Auto Parts Storefront API

    Catalog browsing, cart checkout and an owner portal for vehicles,
    service appointments and vehicle documents.

    ### Entities:
    * **Catalog**: Categories and parts with search, filters and sorting
    * **Orders**: Cart checkout and order tracking
    * **Vehicles**: Owner-registered vehicles
    * **Appointments**: Service bookings and service history
    * **Documents**: Insurance, logbooks and permits with expiry tracking
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix=settings.api_v1_prefix)
app.include_router(categories.router, prefix=settings.api_v1_prefix)
app.include_router(parts.router, prefix=settings.api_v1_prefix)
app.include_router(orders.router, prefix=settings.api_v1_prefix)
app.include_router(customers.router, prefix=settings.api_v1_prefix)
app.include_router(vehicles.router, prefix=settings.api_v1_prefix)
app.include_router(appointments.router, prefix=settings.api_v1_prefix)
app.include_router(history.router, prefix=settings.api_v1_prefix)
app.include_router(documents.router, prefix=settings.api_v1_prefix)

# Uploaded documents; the directory is created on startup
app.mount(
    settings.storage_url_prefix,
    StaticFiles(directory=settings.storage_dir, check_dir=False),
    name="media",
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Auto Parts Storefront API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "autoparts.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )

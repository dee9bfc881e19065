"""
Campground Admin Service

FastAPI backend-for-frontend for the admin dashboard: site class
configuration, staff schedule templates, referral programs and analytics.
All data lives in the campground REST API; this service maps form input to
API payloads and keeps a short-lived query cache.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from . import __version__
from .api import deps
from .api.errors import register_exception_handlers
from .api.routes import router
from .core.config import get_settings
from .core.logging import setup_logger


settings = get_settings()
logger = setup_logger(settings.service_name, "INFO" if not settings.debug else "DEBUG")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.service_name} starting up...")
    logger.info(f"📊 Environment: {settings.environment}")
    deps.get_services()
    yield
    logger.info(f"🛑 {settings.service_name} shutting down...")
    await deps.shutdown()


app = FastAPI(
    title="Campground Admin Service",
    description="Site classes, schedule templates, referrals and analytics for campground admins",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Instrumentator().instrument(app).expose(app)

register_exception_handlers(app)
app.include_router(router)


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.service_name,
        "upstream": settings.api_base_url,
    }


@app.get("/")
async def root():
    return {
        "service": settings.service_name,
        "version": __version__,
        "endpoints": [
            "/campgrounds/{id}/site-classes",
            "/campgrounds/{id}/sites",
            "/campgrounds/{id}/schedule-templates",
            "/campgrounds/{id}/referral-programs",
            "/analytics/nps",
            "/analytics/amenities",
            "/undo/{undo_id}",
        ],
    }


def run():
    import uvicorn
    uvicorn.run("campadmin.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()

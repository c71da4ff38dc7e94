from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from jobnexus.config import settings
from jobnexus.errors import register_error_handlers
from jobnexus.services.seed import seed_demo_data
from jobnexus.services.storage import Storage, build_storage
from jobnexus.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: optionally load the demo data set
    if settings.seed_demo_data:
        seed_demo_data(app.state.storage)
    yield


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    """Build the API. ``storage`` overrides the configured backend."""
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.storage = storage if storage is not None else build_storage(
        settings.storage_backend, settings.database_url, echo=settings.debug
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.session_https_only,
    )
    register_error_handlers(app)

    # Register routes
    from jobnexus.routes.api_auth import router as auth_router
    from jobnexus.routes.api_jobs import router as jobs_router
    from jobnexus.routes.api_applications import router as applications_router
    from jobnexus.routes.api_profile import router as profile_router
    from jobnexus.routes.api_admin import router as admin_router

    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(jobs_router, prefix="/api/jobs", tags=["jobs"])
    app.include_router(applications_router, prefix="/api/applications", tags=["applications"])
    app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    @app.middleware("http")
    async def add_cache_headers(request: Request, call_next):
        response = await call_next(request)
        # Keep API responses fresh; they depend on the session.
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response

    logger.info("%s ready with %s", settings.app_name, type(app.state.storage).__name__)
    return app

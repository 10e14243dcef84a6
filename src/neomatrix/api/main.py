"""
FastAPI application factory for the editor API

    app = create_app()
    set_service_container(services)     # see api.dependencies
"""

from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from neomatrix import __version__
from neomatrix.api.middleware.error_handler import register_exception_handlers
from neomatrix.api.routes import animation, exports, frames, history, playback
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

API_PREFIX = "/api/v1"
ROUTERS = (animation.router, frames.router, history.router, exports.router, playback.router)

# Vite / CRA dev servers of the editor shell
DEFAULT_CORS_ORIGINS = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


def create_app(
    title: str = "NeoMatrix Frame Creator",
    description: str = "Pixel-art animation editor for LED matrices",
    version: str = __version__,
    docs_enabled: bool = True,
    cors_origins: Optional[Sequence[str]] = None
) -> FastAPI:
    """
    Build the API app: CORS, error handlers, /api/v1 routers and health check.

    Args:
        title: OpenAPI title
        description: OpenAPI description
        version: Reported in OpenAPI and /api/health
        docs_enabled: Serve /docs, /redoc and /openapi.json
        cors_origins: Allowed browser origins (default: local dev servers)
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins if cors_origins is not None else DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/api/health", tags=["System"], summary="Health check")
    async def health_check():
        return {"status": "healthy", "service": "neomatrix-api", "version": version}

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": title, "docs": "/docs", "health": "/api/health"}

    log.info(f"API ready: {title} v{version}", routers=len(ROUTERS), prefix=API_PREFIX)
    return app

"""
FastAPI Application Factory

Assembles the control/preview API for the watch face:
- /api/v1/watchface routes (state, animation start/stop, display mode)
- /api/health
- CORS and the error envelope handlers

Used by main_asyncio.py (served through APIServerWrapper) and by the tests
(through TestClient, with a container built on a virtual-time scheduler).
"""

from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware.error_handler import register_exception_handlers
from api.routes import watchface
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

API_VERSION = "1.0.0"
API_PREFIX = "/api/v1"

# Local preview front-ends
DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


def create_app(
    title: str = "Glitch Watch Face",
    docs_enabled: bool = True,
    cors_origins: Optional[Sequence[str]] = None
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        title: Title shown in the OpenAPI docs
        docs_enabled: Serve /docs, /redoc and /openapi.json
        cors_origins: Allowed CORS origins (default: local dev servers)
    """
    app = FastAPI(
        title=title,
        description="Preview and control the glitch watch face",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins or DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(watchface.router, prefix=API_PREFIX)

    @app.get("/api/health", tags=["System"], summary="Health check")
    async def health_check():
        return {"status": "healthy", "service": "glitch-watchface-api", "version": API_VERSION}

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": title, "docs": "/docs", "health": "/api/health"}

    log.debug("FastAPI app created", title=title, prefix=API_PREFIX)
    return app

from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import RequestIdMiddleware
from app.api.v1.router import v1_router

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

APP_VERSION = "1.0.0"


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=APP_VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Middleware: Request ID (outermost, so error responses carry it too)
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    register_exception_handlers(app)

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    prefix = settings.api_prefix

    @app.get("/", tags=["health"])
    async def index():
        return {
            "message": f"{settings.app_name} API is running!",
            "version": APP_VERSION,
            "endpoints": {
                "projects": [
                    f"POST {prefix}/projects/create",
                    f"GET {prefix}/projects/open",
                    f"GET {prefix}/projects/{{projectId}}/bids",
                ],
                "bids": [
                    f"POST {prefix}/bids/place",
                    f"GET {prefix}/bids/my",
                    f"PUT {prefix}/bids/{{bidId}}/status",
                ],
            },
        }

    return app


app = create_app()

"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers and the one
storage façade shared by every route.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from erp.api import api_router
from erp.core.config import get_settings
from erp.core.exception_handlers import register_exception_handlers
from erp.core.lifespan import create_lifespan
from erp.infrastructure.persistence.storage.modular_storage import ModularStorage
from erp.middleware import RequestIDMiddleware


def create_app(storage: ModularStorage | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        storage: Façade to serve requests with; a new ModularStorage bound to
            the process-wide session factory when omitted.
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.storage = storage if storage is not None else ModularStorage()

    register_exception_handlers(app)

    # First added = innermost; request id wraps CORS so every response carries it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header, "X-Total-Count"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()

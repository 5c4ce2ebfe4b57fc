from __future__ import annotations

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from project_view.core.config import ClientConfig, configure_logging, load_config
from project_view.infrastructure import IdentityProvider, QueuedNotifier, StaticIdentity
from project_view.routes import settings, upload, workspace


def create_app(
    config: ClientConfig | None = None,
    *,
    identity: IdentityProvider | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    config = config or load_config()
    configure_logging(config.log_level)

    app = FastAPI(title="Project Workspace View", version="0.1.0")
    app.state.config = config
    app.state.identity = identity or StaticIdentity(token=config.token, user_id=config.user_id)
    app.state.http_client = http_client
    app.state.notifier = QueuedNotifier()
    app.state.session = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(workspace.router, prefix="/api")
    app.include_router(settings.router, prefix="/api")
    app.include_router(upload.router, prefix="/api")

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Project Workspace View",
                "docs": "/docs",
                "workspace": "/api/workspace",
            }
        )

    return app


app = create_app()

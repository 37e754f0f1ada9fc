"""FastAPI entrypoint for the line locator tool server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from line_locator.config import configure_logging, load_config
from line_locator.errors import McpError
from line_locator.mcp_handlers import register_mcp_handlers

SERVICE_TOKEN_HEADER = "X-Line-Locator-Service-Token"
AUTH_EXEMPT_PATHS = {"/health"}

logger = logging.getLogger(__name__)


def _error_json(exc: McpError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.error.envelope())


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.config = load_config()
        yield

    app = FastAPI(lifespan=lifespan)

    @app.middleware("http")
    async def enforce_service_token(request: Request, call_next):
        if request.url.path in AUTH_EXEMPT_PATHS:
            return await call_next(request)

        config = getattr(request.app.state, "config", None)
        service_token = getattr(config, "service_token", None)
        if service_token:
            supplied_token = request.headers.get(SERVICE_TOKEN_HEADER)
            if supplied_token != service_token:
                logger.warning(
                    "Rejected request to %s: bad service token", request.url.path
                )
                return _error_json(
                    McpError(
                        "AUTH_FORBIDDEN",
                        "Invalid service token.",
                        {"header": SERVICE_TOKEN_HEADER},
                        status_code=403,
                    )
                )

        return await call_next(request)

    @app.exception_handler(McpError)
    def handle_mcp_error(request: Request, exc: McpError) -> JSONResponse:
        return _error_json(exc)

    @app.get("/health", status_code=200)
    def health() -> dict[str, str]:
        return {"status": "ok"}

    register_mcp_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Serve the HTTP tool API with uvicorn."""
    config = load_config()
    configure_logging(config.log_level)
    logger.info("Starting line locator on %s:%d", config.host, config.port)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    run()

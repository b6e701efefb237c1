# predictions_api/main.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Optional
import logging
import time

import uvicorn

from predictions_api.core.config import Settings
from predictions_api.core.errors import PredictionsError
from predictions_api.routers import meta_routes, predictions_routes

logger = logging.getLogger("predictions")


# ------------ Access log middleware ------------
class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        t0 = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            dt = (time.perf_counter() - t0) * 1000
            logger.info(
                "ACCESS %s %s q=%s -> %s in %.1fms",
                request.method,
                request.url.path,
                request.url.query,
                status,
                dt,
            )
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    # ------------ Logging ------------
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app = FastAPI(
        title="Sports Predictions API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    app.add_middleware(AccessLogMiddleware)

    # ------------ CORS (open) ------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------ Error handlers ------------
    @app.exception_handler(PredictionsError)
    async def _predictions_error(request: Request, exc: PredictionsError):
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.payload)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "not_found", "path": request.url.path})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("UNHANDLED ERROR: %s %s", request.method, request.url)
        return JSONResponse(status_code=500, content={"error": "internal_error"})

    # ------------ Mount routers ------------
    app.include_router(meta_routes.router)
    app.include_router(predictions_routes.router, prefix="/api")

    logger.info(
        "predictions api ready: provider=%s has_key=%s timeout=%.1fs",
        settings.provider,
        bool(settings.api_key),
        settings.upstream_timeout_s,
    )
    return app


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()

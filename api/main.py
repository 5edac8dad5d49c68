"""
api/main.py - punkt wejścia FastAPI.

Lifespan:
  - Tworzy jeden ExpressionEngine (bezstanowy, współdzielony przez żądania)

MalformedExpression → HTTP 422 przez globalny handler błędów.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.routers import evaluate
from api.schemas import HealthResponse
from config import Settings
from contracts import MalformedExpression
from engine import ExpressionEngine

logger = logging.getLogger("opcalc.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.engine = ExpressionEngine(settings=settings)
    logger.info("opcalc API ready (precedence mode: %s).", settings.precedence_mode.value)
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            precedence_mode=settings.precedence_mode,
        )

    # Globalny handler błędów
    @app.exception_handler(MalformedExpression)
    async def malformed_expression_handler(request: Request, exc: MalformedExpression):
        logger.debug("Malformed request on %s: %s", request.url.path, exc.reason)
        return JSONResponse(
            status_code=422,
            content={"detail": "malformed expression", "reason": exc.reason},
        )

    return app


app = create_app()

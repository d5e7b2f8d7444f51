"""FastAPI application exposing the trade evaluator."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from src.config import AppSettings, get_settings
from src.models import EvaluateRequest, serialize_results
from src.scoring.engine import TradeEvaluator
from src.scoring.errors import EvaluationError

from .cors import CorsPolicy

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    settings = settings or get_settings()
    _setup_logging(settings.api.log_level)

    app = FastAPI(title="Trade Evaluator API", version="1.0.0")
    cors_policy = CorsPolicy.from_settings(settings.api)
    default_evaluator = TradeEvaluator(settings.scoring.to_policy())

    app.state.settings = settings
    app.state.cors_policy = cors_policy
    app.state.evaluator = default_evaluator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_policy.allowed_origins,
        allow_origin_regex=cors_policy.allow_origin_regex,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registered after CORSMiddleware so it runs first and rejects unknown origins.
    @app.middleware("http")
    async def enforce_origin(request: Request, call_next):
        origin = request.headers.get("origin")
        if not cors_policy.is_allowed(origin):
            logger.warning("CORS blocked: %s", origin)
            return JSONResponse(
                status_code=403,
                content={"error": "CORS blocked", "details": "Not allowed by CORS"},
            )
        return await call_next(request)

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("Starting trade evaluator API (env: %s)", settings.env)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        logger.info("Shutting down trade evaluator API")

    @app.exception_handler(EvaluationError)
    async def evaluation_error_handler(_: Request, exc: EvaluationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    @app.get("/healthz", response_class=PlainTextResponse)
    def healthz() -> str:
        return "ok"

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Backend is running"

    @app.post("/api/evaluate-trades")
    def evaluate_trades(payload: EvaluateRequest, request: Request) -> List[Dict[str, Any]]:
        """Score submitted trades against the caller's tolerances."""

        results = request.app.state.evaluator.evaluate(payload.tolerances, payload.trades)
        return serialize_results(results)

    return app


app = create_app()


__all__ = ["app", "create_app"]

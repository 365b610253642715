# courtside/main.py
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from courtside.core.config import Settings, get_settings
from courtside.routers import board_routes

logger = logging.getLogger("courtside")


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _access_log(request: Request, call_next):
    t0 = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        logger.info(
            "ACCESS %s %s -> %s in %.1fms",
            request.method,
            request.url.path,
            status,
            (time.perf_counter() - t0) * 1000,
        )


async def _unhandled(request: Request, exc: Exception):
    logger.exception("UNHANDLED ERROR: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "internal_error"})


async def _health():
    return {"ok": True}


async def _status():
    s = get_settings()
    return {
        "ok": True,
        "has_api_key": bool(s.api_key),
        "sport": s.sport,
        "league": s.league,
        "sportsbook": s.sportsbook,
        "timezone": s.timezone,
    }


def create_app() -> FastAPI:
    _configure_logging(get_settings())

    app = FastAPI(title="Courtside NBA Board", version="1.0.0", redoc_url=None)
    app.middleware("http")(_access_log)
    app.add_exception_handler(Exception, _unhandled)
    app.add_api_route("/health", _health, methods=["GET"])
    app.add_api_route("/status", _status, methods=["GET"])
    app.include_router(board_routes.router)
    return app


app = create_app()

# courtside/routers/board_routes.py
from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from courtside.core.config import get_settings
from courtside.core.errors import CourtsideError
from courtside.models.types import Board
from courtside.services.board import load_board
from courtside.services.opticodds import OpticOddsClient
from courtside.services.render import render_board, render_error

logger = logging.getLogger("courtside.board_routes")
router = APIRouter(tags=["NBA"])


async def fetch_board() -> Board:
    settings = get_settings()
    async with OpticOddsClient(settings) as client:
        return await load_board(client, tz=settings.timezone)


# -------------------------
# 🏀  Board page (HTML, auto-refresh)
# -------------------------
@router.get("/", response_class=HTMLResponse)
async def board_page():
    try:
        settings = get_settings()
        board = await fetch_board()
    except (httpx.HTTPError, CourtsideError) as e:
        logger.exception("board page failed: %s", e)
        return HTMLResponse(render_error(), status_code=500)
    return HTMLResponse(render_board(board, refresh_seconds=settings.refresh_seconds))


# -------------------------
# 🧾  Board data (JSON)
# -------------------------
@router.get("/api/board")
async def board_json():
    """
    Date-grouped games for today and tomorrow with odds chips and finals.
    """
    try:
        return await fetch_board()
    except (httpx.HTTPError, CourtsideError) as e:
        logger.exception("board json failed: %s", e)
        raise HTTPException(status_code=502, detail="fetch_failed")

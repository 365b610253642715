# courtside/services/render.py
from __future__ import annotations

from html import escape
from typing import Any, List, Optional

from courtside.models.types import Board, GameView, OddsChip

TITLE = "NBA Schedule (Today & Tomorrow)"
NO_GAMES = "No NBA games found for today or tomorrow."
FETCH_FAILED = "Error fetching NBA data."
NO_ODDS = "No FanDuel odds available yet."

STYLE = """
    body { margin: 0; padding: 24px 20px; font-family: system-ui, -apple-system, "Segoe UI", sans-serif;
           background: #050816; color: #e5e7eb; }
    .container { max-width: 1100px; margin: 0 auto; }
    h1 { text-align: center; margin-bottom: 4px; }
    .subtitle { text-align: center; font-size: 0.8rem; opacity: 0.6; margin-bottom: 22px; }
    .date-header { font-size: 1.2rem; font-weight: 600; margin: 18px 0 12px;
                   border-bottom: 1px solid rgba(255,255,255,0.15); }
    .date-tag { font-size: 0.8rem; opacity: 0.8; margin-left: 6px; }
    .game-card { background: #111827; border-radius: 14px; padding: 14px 16px; margin-bottom: 12px; }
    .teams { font-weight: 600; font-size: 1.05rem; }
    .vs { font-weight: 400; opacity: 0.7; margin: 0 4px; }
    .meta { font-size: 0.8rem; opacity: 0.9; margin: 4px 0; }
    .status-tag { padding: 2px 8px; border-radius: 999px; font-size: 0.72rem; text-transform: uppercase; }
    .status-live { background: #dc2626; }
    .status-unplayed { background: #22c55e; color: #022c22; }
    .status-completed { background: #4b5563; }
    .final-box { border: 1px solid rgba(148,163,184,0.6); border-radius: 12px; padding: 8px 10px; margin: 8px 0; }
    .final-label { font-size: 0.75rem; text-transform: uppercase; opacity: 0.7; }
    .final-score { font-weight: 600; }
    .odds-row { margin-top: 4px; }
    .odds-label { font-weight: 600; font-size: 0.82rem; margin-right: 4px; }
    .odds-chip { display: inline-block; padding: 4px 10px; border-radius: 999px; border: 1px solid #4b5563;
                 font-size: 0.85rem; margin-right: 6px; }
    .odds-chip-fav { border-color: #22c55e; }
    .odds-chip-dog { border-color: #ef4444; }
    .no-odds { font-size: 0.75rem; opacity: 0.6; }
"""


def _text(v: Any) -> str:
    return escape("" if v is None else str(v))


def _page(body: str, refresh_seconds: Optional[int] = None) -> str:
    refresh = f'<meta http-equiv="refresh" content="{int(refresh_seconds)}" />' if refresh_seconds else ""
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        '<meta charset="UTF-8" />\n'
        f"<title>{escape(TITLE)}</title>\n{refresh}\n"
        f"<style>{STYLE}</style>\n</head>\n<body>\n"
        f'<div class="container">\n{body}\n</div>\n</body>\n</html>\n'
    )


def _chip_row(label: str, chips: List[OddsChip]) -> str:
    if not chips:
        return ""
    parts = [f'<div class="odds-row"><span class="odds-label">{label}</span>']
    for c in chips:
        cls = f"odds-chip odds-chip-{c['tone']}" if c["tone"] else "odds-chip"
        parts.append(f'<span class="{cls}">{_text(c["label"])}: {_text(c["display"])}</span>')
    parts.append("</div>")
    return "".join(parts)


def _game_card(g: GameView, tz_label: str) -> str:
    out = [
        '<div class="game-card">',
        f'<div class="teams">{_text(g["awayTeam"])}<span class="vs">@</span>{_text(g["homeTeam"])}</div>',
        '<div class="meta">'
        f'<span class="status-tag status-{g["status"]}">{_text(g["statusLabel"] or g["status"])}</span> '
        f'<span>Start: {_text(g["startTimeLocal"])} {_text(tz_label)}</span></div>',
    ]

    final = g["final"]
    if final is not None:
        out.append('<div class="final-box"><div class="final-label">Final</div>')
        if final.get("available"):
            out.append(f'<div class="final-score">{_text(final["scoreText"])}</div>')
            out.append(f'<div class="final-winner">{_text(final["winnerText"])}</div>')
        else:
            out.append(f'<div class="final-score">{_text(final.get("message"))}</div>')
        out.append("</div>")

    out.append(_chip_row("ML", g["moneyline"]))
    out.append(_chip_row("SPREAD", g["spread"]))
    out.append(_chip_row("TOTAL", g["total"]))

    if g["status"] != "completed" and not g["hasOdds"]:
        out.append(f'<div class="no-odds">{escape(NO_ODDS)}</div>')

    out.append("</div>")
    return "".join(out)


def render_board(board: Board, refresh_seconds: Optional[int] = 30) -> str:
    if not board["dates"]:
        return _page(f"<h1>{escape(NO_GAMES)}</h1>")

    body = [
        f"<h1>{escape(TITLE)}</h1>",
        '<div class="subtitle">Powered by OpticOdds · '
        f"Auto-refreshes every {int(refresh_seconds or 0)} seconds · "
        f"Last updated ({_text(board['tzLabel'])}): {_text(board['lastUpdated'])}</div>",
    ]
    for group in board["dates"]:
        tag = f'<span class="date-tag">({_text(group["tag"])})</span>' if group["tag"] else ""
        body.append(f'<section class="date-section"><div class="date-header">{_text(group["date"])}{tag}</div>')
        body.extend(_game_card(g, board["tzLabel"]) for g in group["games"])
        body.append("</section>")
    return _page("\n".join(body), refresh_seconds)


def render_error() -> str:
    return _page(f"<h1>{escape(FETCH_FAILED)}</h1>")

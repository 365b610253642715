# courtside/services/board.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from courtside.models.types import (
    Board,
    DateGroup,
    FinalView,
    Fixture,
    GameView,
    OddsChip,
    OddsQuote,
    ResultRecord,
    Status,
)
from courtside.services.dates import (
    TzLike,
    fixture_date_key,
    format_last_updated,
    format_start_time,
    today_and_tomorrow,
    tz_label,
)
from courtside.services.odds_math import favorite_index, format_american, implied_probability, total_tone
from courtside.services.opticodds import OpticOddsClient
from courtside.services.scores import extract_score, winner_side

logger = logging.getLogger("courtside.board")

MONEYLINE = "Moneyline"
SPREAD = "Point Spread"
TOTAL = "Total Points"

FINAL_PENDING = "Final score not available yet."


def normalize_status(raw: Any) -> Status:
    s = raw.strip().lower() if isinstance(raw, str) else ""
    if s == "live":
        return "live"
    if s == "completed":
        return "completed"
    return "unplayed"


def main_lines(quotes: Sequence[OddsQuote], market: str) -> List[OddsQuote]:
    return [q for q in quotes if isinstance(q, dict) and q.get("market") == market and q.get("is_main")]


def _chip(quote: OddsQuote, label: Any, tone: Optional[str]) -> OddsChip:
    price = quote.get("price")
    return {
        "label": "" if label is None else str(label),
        "price": price,
        "display": format_american(price),
        "impliedProb": implied_probability(price),
        "tone": tone,
    }


def _ranked_chips(quotes: List[OddsQuote], fav: Optional[int], label_keys: Sequence[str]) -> List[OddsChip]:
    chips = []
    for i, q in enumerate(quotes):
        label = next((q.get(k) for k in label_keys if q.get(k)), None)
        chips.append(_chip(q, label, "fav" if i == fav else "dog"))
    return chips


def _final_view(fixture: Fixture, result: Optional[ResultRecord]) -> FinalView:
    score = extract_score(fixture, result)
    if not score.available:
        return {"available": False, "message": FINAL_PENDING}

    home = fixture.get("home_team_display") or ""
    away = fixture.get("away_team_display") or ""
    winner = winner_side(score)
    if winner == "tie":
        winner_text = "Tie"
    else:
        winner_text = f"Winner: {home if winner == 'home' else away}"
    return {
        "available": True,
        "homeScore": score.home_score,
        "awayScore": score.away_score,
        "winner": winner,
        "scoreText": f"{away} {score.away_score} – {score.home_score} {home}",
        "winnerText": winner_text,
    }


def build_game(
    fixture: Fixture,
    quotes: Sequence[OddsQuote],
    result: Optional[ResultRecord],
    date_key: str,
    tz: Optional[TzLike] = None,
) -> GameView:
    status = normalize_status(fixture.get("status"))

    moneyline = main_lines(quotes, MONEYLINE)
    spreads = main_lines(quotes, SPREAD)
    totals = main_lines(quotes, TOTAL)
    ml_fav = favorite_index(moneyline)
    spread_fav = favorite_index(spreads)

    return {
        "gameId": fixture.get("id"),
        "date": date_key,
        "status": status,
        "statusLabel": fixture.get("status") or "",
        "homeTeam": fixture.get("home_team_display") or "",
        "awayTeam": fixture.get("away_team_display") or "",
        "startTime": fixture.get("start_date"),
        "startTimeLocal": format_start_time(fixture.get("start_date"), tz),
        "moneyline": _ranked_chips(moneyline, ml_fav, ("selection", "name")),
        "spread": _ranked_chips(spreads, spread_fav, ("name",)),
        "total": [_chip(q, q.get("name"), total_tone(q.get("name"))) for q in totals],
        "favorites": {"moneyline": ml_fav, "spread": spread_fav},
        "hasOdds": bool(moneyline or spreads or totals),
        "final": _final_view(fixture, result) if status == "completed" else None,
    }


def build_view(
    fixtures: Sequence[Fixture],
    odds_by_fixture: Mapping[Any, Sequence[OddsQuote]],
    results_by_fixture: Mapping[Any, ResultRecord],
    reference_date: datetime,
    tz: Optional[TzLike] = None,
) -> List[DateGroup]:
    """
    Group fixtures by local calendar date and turn each into a GameView.

    Per-date lists keep fetch order; dates are sorted ascending. Odds and
    results keyed by ids outside `fixtures` are simply never looked up.
    """
    today, tomorrow = today_and_tomorrow(reference_date, tz)

    by_date: Dict[str, List[GameView]] = {}
    for fx in fixtures:
        if not isinstance(fx, dict):
            continue
        key = fixture_date_key(fx.get("start_date"), tz)
        fid = fx.get("id")
        game = build_game(
            fx,
            odds_by_fixture.get(fid) or [],
            results_by_fixture.get(fid),
            key,
            tz,
        )
        by_date.setdefault(key, []).append(game)

    groups: List[DateGroup] = []
    for d in sorted(by_date):
        tag = "Today" if d == today else "Tomorrow" if d == tomorrow else None
        groups.append({"date": d, "tag": tag, "games": by_date[d]})
    return groups


async def load_board(
    client: OpticOddsClient,
    now: Optional[datetime] = None,
    tz: Optional[TzLike] = None,
) -> Board:
    """
    Fetch today's and tomorrow's fixtures concurrently, then odds and results
    (each a sequential batch loop), and build the date-grouped view.
    Transport errors propagate to the caller.
    """
    now = now or datetime.now(timezone.utc)
    today, tomorrow = today_and_tomorrow(now, tz)

    per_day = await asyncio.gather(client.fixtures_for_date(today), client.fixtures_for_date(tomorrow))
    fixtures: List[Fixture] = [fx for day in per_day for fx in day]
    logger.info("board %s/%s: %d fixtures", today, tomorrow, len(fixtures))

    ids = [fx.get("id") for fx in fixtures if fx.get("id")]
    odds = await client.odds_for_fixtures(ids)
    results = await client.results_for_fixtures(ids)

    groups = build_view(fixtures, odds, results, now, tz)
    return {
        "today": today,
        "tomorrow": tomorrow,
        "lastUpdated": format_last_updated(now, tz),
        "tzLabel": tz_label(now, tz),
        "gameCount": sum(len(g["games"]) for g in groups),
        "dates": groups,
    }

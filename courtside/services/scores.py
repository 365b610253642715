# courtside/services/scores.py
from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from courtside.models.types import ScorePair, Side

# A strategy picks one candidate object out of (fixture, result), or None.
Strategy = Callable[[Optional[Dict[str, Any]], Optional[Dict[str, Any]]], Any]


def _child(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


# Priority order matters: the separately fetched result wins over whatever
# the fixture listing carries.
SCORE_STRATEGIES: List[Tuple[str, Strategy]] = [
    ("result", lambda fixture, result: result),
    ("result.fixture", lambda fixture, result: _child(result, "fixture")),
    ("result.result", lambda fixture, result: _child(result, "result")),
    ("result.fixture.result", lambda fixture, result: _child(_child(result, "fixture"), "result")),
    ("fixture", lambda fixture, result: fixture),
    ("fixture.result", lambda fixture, result: _child(fixture, "result")),
]


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _totals(candidate: Any) -> Optional[ScorePair]:
    scores = _child(candidate, "scores")
    home = _child(_child(scores, "home"), "total")
    away = _child(_child(scores, "away"), "total")
    if _is_number(home) and _is_number(away):
        return ScorePair(home, away)
    return None


def extract_score(
    fixture: Optional[Dict[str, Any]],
    result: Optional[Dict[str, Any]] = None,
) -> ScorePair:
    """
    Resolve (home, away) totals from the first candidate in SCORE_STRATEGIES
    that exposes both scores.home.total and scores.away.total as numbers.
    Returns ScorePair(None, None) when nothing qualifies.
    """
    for _name, pick in SCORE_STRATEGIES:
        pair = _totals(pick(fixture, result))
        if pair is not None:
            return pair
    return ScorePair(None, None)


def winner_side(score: ScorePair) -> Optional[Side]:
    if not score.available:
        return None
    if score.home_score > score.away_score:
        return "home"
    if score.away_score > score.home_score:
        return "away"
    return "tie"

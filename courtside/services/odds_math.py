# courtside/services/odds_math.py
from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence

from courtside.models.types import Tone


def _to_number(price: Any) -> Optional[float]:
    """American price as a float, or None if it is not a usable number."""
    if isinstance(price, bool) or price is None:
        return None
    if isinstance(price, (int, float)):
        n = float(price)
    elif isinstance(price, str):
        try:
            n = float(price.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(n) or math.isinf(n):
        return None
    return n


def implied_probability(price: Any) -> Optional[float]:
    """
    American odds -> implied probability (0..1), ignoring the book's margin.
      +150 -> 100 / 250 = 0.4
      -150 -> 150 / 250 = 0.6
    0 and non-numeric prices are invalid (None).
    """
    n = _to_number(price)
    if n is None or n == 0:
        return None
    if n > 0:
        return 100.0 / (n + 100.0)
    return -n / (-n + 100.0)


def favorite_index(quotes: Sequence[Dict[str, Any]]) -> Optional[int]:
    """Index of the quote with the highest implied probability; first one wins ties."""
    best_idx: Optional[int] = None
    best_prob = -1.0
    for i, q in enumerate(quotes):
        p = implied_probability(q.get("price") if isinstance(q, dict) else None)
        if p is not None and p > best_prob:
            best_idx, best_prob = i, p
    return best_idx


def total_tone(name: Any) -> Optional[Tone]:
    # Over/Under is styled by name, not by price.
    s = (name or "").strip().lower() if isinstance(name, str) else ""
    if s.startswith("over"):
        return "fav"
    if s.startswith("under"):
        return "dog"
    return None


def format_american(price: Any) -> Any:
    n = _to_number(price)
    if n is None:
        return price
    text = str(int(n)) if n.is_integer() else str(n)
    return f"+{text}" if n > 0 else text

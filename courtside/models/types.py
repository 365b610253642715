# courtside/models/types.py
from typing import Any, Dict, List, NamedTuple, Optional, Union

from typing_extensions import Literal, TypedDict

Status = Literal["unplayed", "live", "completed"]
Tone = Literal["fav", "dog"]
Side = Literal["home", "away", "tie"]

# Raw upstream records are loosely shaped; only the keys we read are listed.
Fixture = Dict[str, Any]
OddsQuote = Dict[str, Any]
ResultRecord = Dict[str, Any]
Price = Union[int, float, str, None]


class ScorePair(NamedTuple):
    home_score: Optional[float]
    away_score: Optional[float]

    @property
    def available(self) -> bool:
        return self.home_score is not None and self.away_score is not None


class OddsChip(TypedDict):
    label: str
    price: Price
    display: Price
    impliedProb: Optional[float]
    tone: Optional[Tone]


class FinalView(TypedDict, total=False):
    available: bool
    homeScore: Optional[float]
    awayScore: Optional[float]
    winner: Optional[Side]
    scoreText: str
    winnerText: str
    message: str


class GameView(TypedDict):
    gameId: str
    date: str
    status: Status
    statusLabel: str
    homeTeam: str
    awayTeam: str
    startTime: Optional[str]
    startTimeLocal: str
    moneyline: List[OddsChip]
    spread: List[OddsChip]
    total: List[OddsChip]
    favorites: Dict[str, Optional[int]]
    hasOdds: bool
    final: Optional[FinalView]


class DateGroup(TypedDict):
    date: str
    tag: Optional[str]
    games: List[GameView]


class Board(TypedDict):
    today: str
    tomorrow: str
    lastUpdated: str
    tzLabel: str
    gameCount: int
    dates: List[DateGroup]

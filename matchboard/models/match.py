"""Match view model and tournament snapshot."""

import math
import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

TABLE_NUMBER_PATTERN = re.compile(r"\d+")


class MatchState(str, Enum):
    """Match states reported by Challonge that the dashboard cares about"""

    OPEN = "open"  # Players known, match can be played (or is being played)
    PENDING = "pending"  # Waiting on earlier matches


def table_number(station_name: str | None) -> float:
    """Numeric table number from the first run of digits in a station name.

    Stations without any digits sort after every numbered station.
    """
    if not station_name:
        return math.inf
    match = TABLE_NUMBER_PATTERN.search(station_name)
    return int(match.group()) if match else math.inf


class MatchView(BaseModel):
    """A single match, resolved and ready for display"""

    model_config = ConfigDict(frozen=True)

    id: str
    station: str
    player1: str
    player2: str
    underway_at: datetime | None = None
    started_at: datetime | None = None
    state: str | None = None
    suggested_play_order: float | None = None

    @property
    def table_number(self) -> float:
        return table_number(self.station)

    @property
    def is_underway(self) -> bool:
        """Players are at the table and the match clock is running"""
        return self.underway_at is not None

    @property
    def since(self) -> datetime | None:
        """When the match went underway, or when it was opened"""
        return self.underway_at or self.started_at

    @property
    def match_name(self) -> str:
        return f"{self.player1} vs {self.player2}"


class TournamentSnapshot(BaseModel):
    """Display-ready state of one tournament at one point in time"""

    model_config = ConfigDict(frozen=True)

    active: tuple[MatchView, ...] = ()
    pending: tuple[MatchView, ...] = ()
    last_updated: datetime | None = None

    @classmethod
    def empty(cls) -> "TournamentSnapshot":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.active and not self.pending


def format_duration(diff: int) -> str:
    """Format duration in seconds to human readable format"""
    if diff < 60:
        return f"{diff}s"
    elif diff < 3600:
        minutes = diff // 60
        seconds = diff % 60
        if seconds > 0:
            return f"{minutes}m {seconds}s"
        else:
            return f"{minutes}m"
    else:
        hours = diff // 3600
        minutes = (diff % 3600) // 60
        if minutes > 0:
            return f"{hours}h {minutes}m"
        else:
            return f"{hours}h"

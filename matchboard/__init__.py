"""Live tournament match dashboard backed by the Challonge API."""

from .api import ChallongeAPI, DemoChallongeAPI, FetchError
from .cache import SnapshotCache
from .models import MatchView, TournamentSnapshot

__version__ = "1.0.0"
__all__ = [
    "ChallongeAPI",
    "DemoChallongeAPI",
    "FetchError",
    "SnapshotCache",
    "MatchView",
    "TournamentSnapshot",
]

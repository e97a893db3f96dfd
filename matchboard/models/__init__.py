"""Data models for the dashboard and the Challonge API."""

from .match import MatchState, MatchView, TournamentSnapshot, table_number

__all__ = ["MatchState", "MatchView", "TournamentSnapshot", "table_number"]

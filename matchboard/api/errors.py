"""Errors raised while talking to Challonge."""


class FetchError(Exception):
    """Refreshing a tournament from Challonge failed"""

    def __init__(self, tournament_id: str, message: str):
        super().__init__(f"{tournament_id}: {message}")
        self.tournament_id = tournament_id


class UpstreamUnavailable(FetchError):
    """Network, DNS or timeout failure before a response arrived"""


class UpstreamRejected(FetchError):
    """Challonge answered with a non-2xx status"""

    def __init__(self, tournament_id: str, status: int, body: str = ""):
        super().__init__(tournament_id, f"HTTP {status}: {body[:200]}")
        self.status = status


class MalformedPayload(FetchError):
    """Response body was not the JSON shape we expect"""

"""API module for tournament data fetching."""

from .challonge_api import ChallongeAPI, DemoChallongeAPI, FetchResult
from .errors import FetchError, MalformedPayload, UpstreamRejected, UpstreamUnavailable

__all__ = [
    "ChallongeAPI",
    "DemoChallongeAPI",
    "FetchResult",
    "FetchError",
    "MalformedPayload",
    "UpstreamRejected",
    "UpstreamUnavailable",
]

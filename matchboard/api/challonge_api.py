"""Challonge v2 API client: fetch a tournament and reshape it for display."""

import asyncio
from datetime import datetime
from typing import Any, Union

import aiohttp
from pydantic import ValidationError

from ..models.challonge_api import (
    ChallongeMatchesResponse,
    ChallongeMatchTimestamps,
    ChallongeStationsResponse,
)
from ..models.match import MatchState, MatchView, TournamentSnapshot, table_number
from ..models.mock_data import MOCK_MATCHES_PAYLOAD, MOCK_STATIONS_PAYLOAD
from ..utils.logging import log
from .errors import FetchError, MalformedPayload, UpstreamRejected, UpstreamUnavailable

DEFAULT_BASE_URL = "https://api.challonge.com/v2"
DEFAULT_TIMEOUT = 10.0

INVITATION_PENDING_MARKER = " (invitation pending)"
UNKNOWN_PLAYER = "?"
UNKNOWN_STATION = "Table ?"

# Either a fresh snapshot or the reason there isn't one
FetchResult = Union[TournamentSnapshot, FetchError]


class ChallongeAPI:
    """Handle API calls to Challonge"""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key: str | None = api_key
        self.base_url: str = base_url.rstrip("/")
        self.timeout: float = timeout

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": self.api_key or "",
            "Authorization-Type": "v1",
            "Content-Type": "application/vnd.api+json",
            "Accept": "application/json",
        }

    async def fetch_snapshot(self, tournament_id: str) -> FetchResult:
        """Fetch matches and stations for a tournament.

        Never raises for upstream trouble: the FetchError is returned so the
        caller can decide what to keep showing.
        """
        log(f"🔍 Refreshing tournament {tournament_id}")
        try:
            async with aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as session:
                raw_matches = await self._get_json(session, tournament_id, "matches")
                raw_stations = await self._get_json(session, tournament_id, "stations")

            try:
                matches = ChallongeMatchesResponse.model_validate(raw_matches)
                stations = ChallongeStationsResponse.model_validate(raw_stations)
            except ValidationError as e:
                log(f"❌ Pydantic validation error: {e}")
                raise MalformedPayload(
                    tournament_id, f"unexpected response shape: {e}"
                ) from e

            snapshot = self.normalize(matches, stations)
            log(
                f"✅ {tournament_id}: {len(snapshot.active)} active, "
                f"{len(snapshot.pending)} pending"
            )
            return snapshot

        except FetchError as e:
            log(f"❌ API Error: {type(e).__name__}: {e}")
            return e

    async def _get_json(
        self, session: aiohttp.ClientSession, tournament_id: str, resource: str
    ) -> Any:
        url = f"{self.base_url}/tournaments/{tournament_id}/{resource}.json"
        try:
            async with session.get(url) as response:
                log(f"📡 {resource} response status: {response.status}")

                if not 200 <= response.status < 300:
                    error_text = await response.text()
                    raise UpstreamRejected(tournament_id, response.status, error_text)

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedPayload(
                        tournament_id, f"{resource} is not valid JSON: {e}"
                    ) from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamUnavailable(
                tournament_id, f"{resource}: {type(e).__name__}: {e}"
            ) from e

    @staticmethod
    def normalize(
        matches: ChallongeMatchesResponse,
        stations: ChallongeStationsResponse,
        now: datetime | None = None,
    ) -> TournamentSnapshot:
        """Join participants and stations onto matches and split by state"""
        participants: dict[str, str] = {}
        for item in matches.included:
            if item.type != "participant":
                continue
            name = (item.attributes.name or "").replace(INVITATION_PENDING_MARKER, "")
            participants[str(item.id)] = name or f"Player {item.id}"

        station_names: dict[str, str] = {
            str(station.id): station.attributes.name or f"Table {station.id}"
            for station in stations.data
        }

        active: list[MatchView] = []
        pending: list[MatchView] = []
        skipped = 0

        for match in matches.data:
            state = match.attributes.state
            if state not in (MatchState.OPEN.value, MatchState.PENDING.value):
                skipped += 1
                continue

            timestamps = match.attributes.timestamps or ChallongeMatchTimestamps()
            view = MatchView(
                id=str(match.id),
                station=station_names.get(
                    match.related_id("station") or "", UNKNOWN_STATION
                ),
                player1=participants.get(
                    match.related_id("player1") or "", UNKNOWN_PLAYER
                ),
                player2=participants.get(
                    match.related_id("player2") or "", UNKNOWN_PLAYER
                ),
                underway_at=timestamps.underwayAt,
                started_at=timestamps.startedAt,
                state=state,
                suggested_play_order=match.attributes.suggestedPlayOrder,
            )

            if state == MatchState.OPEN.value:
                active.append(view)
            else:
                pending.append(view)

        active.sort(key=lambda m: table_number(m.station))
        pending.sort(
            key=lambda m: (
                m.suggested_play_order is None,
                m.suggested_play_order or 0,
            )
        )

        log(
            f"📊 Normalized {len(matches.data)} matches: {len(active)} active, "
            f"{len(pending)} pending, {skipped} skipped"
        )
        return TournamentSnapshot(
            active=tuple(active),
            pending=tuple(pending),
            last_updated=now or datetime.now().astimezone(),
        )


class DemoChallongeAPI(ChallongeAPI):
    """Serve the built-in mock tournament instead of calling Challonge"""

    def __init__(self, delay: float = 0.1):
        super().__init__(api_key=None)
        self.delay = delay

    async def fetch_snapshot(self, tournament_id: str) -> FetchResult:
        log(f"🧪 Loading mock data for {tournament_id}")
        await asyncio.sleep(self.delay)  # Simulate network delay
        return self.normalize(
            ChallongeMatchesResponse.model_validate(MOCK_MATCHES_PAYLOAD),
            ChallongeStationsResponse.model_validate(MOCK_STATIONS_PAYLOAD),
        )

"""Per-tournament snapshot cache with serve-stale-on-error refresh."""

import asyncio
import logging
import time
from typing import Callable, MutableMapping, NamedTuple

from ..api.challonge_api import ChallongeAPI, FetchResult
from ..api.errors import FetchError
from ..models.match import TournamentSnapshot
from ..utils.logging import log

DEFAULT_REFRESH_INTERVAL = 15.0


class CacheEntry(NamedTuple):
    """A snapshot and the clock reading taken when it was stored"""

    snapshot: TournamentSnapshot
    fetched_at: float


class SnapshotCache:
    """Serve tournament snapshots, refreshing from Challonge when stale.

    Each tournament id is in one of three states:

    - uncached: fetch now; on failure return an empty snapshot
    - fresh (age <= refresh_interval): return the cached snapshot
    - stale: fetch now; on failure keep returning the old snapshot

    Concurrent callers that find the same id uncached or stale share one
    upstream fetch. ``get`` never raises.
    """

    def __init__(
        self,
        api: ChallongeAPI,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        default_tournament_id: str | None = None,
        store: MutableMapping[str, CacheEntry] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {refresh_interval}")
        self.api = api
        self.refresh_interval: float = refresh_interval
        self.default_tournament_id: str | None = default_tournament_id
        self._store: MutableMapping[str, CacheEntry] = store if store is not None else {}
        self._clock = clock
        self._inflight: dict[str, asyncio.Task[TournamentSnapshot]] = {}

    def peek(self, tournament_id: str) -> CacheEntry | None:
        """Cached entry for a tournament without triggering a fetch"""
        return self._store.get(tournament_id)

    def age(self, tournament_id: str) -> float | None:
        entry = self._store.get(tournament_id)
        if entry is None:
            return None
        return self._clock() - entry.fetched_at

    def is_fresh(self, tournament_id: str) -> bool:
        age = self.age(tournament_id)
        return age is not None and age <= self.refresh_interval

    def invalidate(self, tournament_id: str | None = None) -> None:
        """Drop one tournament (or everything) so the next get refetches"""
        if tournament_id is None:
            self._store.clear()
        else:
            self._store.pop(tournament_id, None)

    async def get_snapshot(self, tournament_id: str | None = None) -> TournamentSnapshot:
        """Snapshot for a tournament, defaulting to the configured one"""
        tournament_id = tournament_id or self.default_tournament_id
        if not tournament_id:
            log("⚠️  No tournament id given and no default configured", logging.WARNING)
            return TournamentSnapshot.empty()
        return await self.get(tournament_id)

    async def get(self, tournament_id: str) -> TournamentSnapshot:
        entry = self._store.get(tournament_id)
        if entry is not None and self.is_fresh(tournament_id):
            return entry.snapshot
        return await self.refresh(tournament_id)

    async def refresh(self, tournament_id: str) -> TournamentSnapshot:
        """Fetch now regardless of age, keeping the old snapshot on failure"""
        task = self._inflight.get(tournament_id)
        if task is None:
            task = asyncio.ensure_future(self._refresh(tournament_id))
            self._inflight[tournament_id] = task
        else:
            log(f"⏳ Joining in-flight refresh for {tournament_id}")

        # A cancelled caller must not cancel the fetch other callers await
        return await asyncio.shield(task)

    async def _refresh(self, tournament_id: str) -> TournamentSnapshot:
        try:
            try:
                result: FetchResult = await self.api.fetch_snapshot(tournament_id)
            except Exception as e:
                result = FetchError(tournament_id, f"{type(e).__name__}: {e}")

            if isinstance(result, FetchError):
                return self._fallback(tournament_id, result)

            self._store[tournament_id] = CacheEntry(result, self._clock())
            return result
        finally:
            self._inflight.pop(tournament_id, None)

    def _fallback(self, tournament_id: str, error: FetchError) -> TournamentSnapshot:
        previous = self._store.get(tournament_id)
        if previous is None:
            log(
                f"⚠️  Refresh of {tournament_id} failed with nothing cached, "
                f"serving empty snapshot: {error}",
                logging.WARNING,
            )
            return TournamentSnapshot.empty()

        log(
            f"⚠️  Refresh of {tournament_id} failed, serving snapshot from "
            f"{self._clock() - previous.fetched_at:.0f}s ago: {error}",
            logging.WARNING,
        )
        return previous.snapshot

"""Shared fixtures for the matchboard test suite"""

import asyncio
from datetime import datetime, timezone

import pytest

from matchboard.api.errors import FetchError
from matchboard.models.match import MatchView, TournamentSnapshot
from matchboard.utils.logging import set_console_logging, set_log_file


@pytest.fixture(autouse=True)
def isolated_log(tmp_path):
    """Keep test runs out of the real operator log"""
    set_log_file(str(tmp_path / "matchboard.log"))
    set_console_logging(False)
    yield
    set_console_logging(True)


class FakeClock:
    """Monotonic clock the test moves by hand"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubAPI:
    """Stands in for ChallongeAPI; replays queued results in order"""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def fetch_snapshot(self, tournament_id: str):
        self.calls.append(tournament_id)
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception) and not isinstance(result, FetchError):
            raise result
        return result


def make_snapshot(*stations: str, pending: int = 0) -> TournamentSnapshot:
    """Snapshot with one open match per station name and N pending matches"""
    active = tuple(
        MatchView(id=str(i), station=name, player1=f"P{i}a", player2=f"P{i}b", state="open")
        for i, name in enumerate(stations)
    )
    queued = tuple(
        MatchView(
            id=f"q{i}",
            station="Table ?",
            player1=f"Q{i}a",
            player2=f"Q{i}b",
            state="pending",
            suggested_play_order=i,
        )
        for i in range(pending)
    )
    return TournamentSnapshot(
        active=active,
        pending=queued,
        last_updated=datetime(2022, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def clock():
    return FakeClock()

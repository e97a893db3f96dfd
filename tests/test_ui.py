"""UI tests for the HTML renderer and the terminal display"""

from datetime import datetime, timedelta, timezone

import pytest
from textual.widgets import DataTable

from conftest import StubAPI, make_snapshot
from matchboard.cache.snapshot_cache import SnapshotCache
from matchboard.models.match import MatchView, TournamentSnapshot
from matchboard.ui.html_dashboard import format_clock, render_dashboard
from matchboard.ui.terminal_display import TerminalDashboard, time_since


@pytest.mark.ui
class TestHtmlDashboard:
    """Test the rendered page"""

    def test_refresh_rounds_up_to_whole_seconds(self):
        html = render_dashboard(TournamentSnapshot.empty(), "Cup", 2.5)
        assert '<meta http-equiv="refresh" content="3">' in html

    def test_refresh_is_at_least_one_second(self):
        html = render_dashboard(TournamentSnapshot.empty(), "Cup", 0.2)
        assert '<meta http-equiv="refresh" content="1">' in html

    def test_status_follows_underway(self):
        snapshot = TournamentSnapshot(
            active=(
                MatchView(
                    id="1",
                    station="Table 1",
                    player1="Alice",
                    player2="Bob",
                    underway_at=datetime(2022, 1, 1, 10, 0, tzinfo=timezone.utc),
                ),
                MatchView(id="2", station="Table 2", player1="Carol", player2="Dan"),
            ),
            last_updated=datetime(2022, 1, 1, 10, 1, tzinfo=timezone.utc),
        )

        html = render_dashboard(snapshot, "Cup", 15)

        assert html.count("Match underway") == 1
        assert html.count("Waiting for players") == 1
        assert "Last updated:" in html

    def test_pending_section_hidden_when_empty(self):
        html = render_dashboard(make_snapshot("Table 1"), "Cup", 15)
        assert "Upcoming matches" not in html

    def test_format_clock(self):
        assert format_clock(None) == "-"
        assert format_clock(datetime(2022, 1, 1, 9, 5, 7)) == "09:05:07"


@pytest.mark.ui
class TestTimeSince:
    """Test the duration column"""

    def test_underway_duration(self):
        since = datetime(2022, 1, 1, 10, 0, tzinfo=timezone.utc)
        match = MatchView(id="1", station="Table 1", player1="A", player2="B", underway_at=since)

        assert time_since(match, now=since + timedelta(minutes=2, seconds=5)) == "2m 5s"

    def test_without_timestamps(self):
        match = MatchView(id="1", station="Table 1", player1="A", player2="B")
        assert time_since(match) == "-"

    def test_clock_skew_shows_dash(self):
        since = datetime(2022, 1, 1, 10, 0, tzinfo=timezone.utc)
        match = MatchView(id="1", station="Table 1", player1="A", player2="B", started_at=since)

        assert time_since(match, now=since - timedelta(seconds=30)) == "-"


@pytest.mark.ui
class TestTerminalDashboard:
    """Test the Textual app"""

    @pytest.mark.asyncio
    async def test_tables_show_snapshot(self, clock):
        api = StubAPI(make_snapshot("Table 1", "Table 2", pending=3))
        cache = SnapshotCache(api, default_tournament_id="cup", clock=clock)
        app = TerminalDashboard(cache, "Spring Cup")

        async with app.run_test() as pilot:
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.query_one("#active-table", DataTable).row_count == 2
            assert app.query_one("#pending-table", DataTable).row_count == 3
            assert app.title == "Spring Cup"
            assert app.last_update != ""

        assert api.calls == ["cup"]

    @pytest.mark.asyncio
    async def test_refresh_key_forces_fetch(self, clock):
        api = StubAPI(make_snapshot("Table 1"), make_snapshot("Table 1", "Table 2"))
        cache = SnapshotCache(api, default_tournament_id="cup", clock=clock)
        app = TerminalDashboard(cache, "Spring Cup")

        async with app.run_test() as pilot:
            await pilot.pause()
            await app.workers.wait_for_complete()

            await pilot.press("r")
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert len(api.calls) == 2
            assert app.query_one("#active-table", DataTable).row_count == 2

    @pytest.mark.asyncio
    async def test_empty_tournament(self, clock):
        api = StubAPI(TournamentSnapshot.empty())
        cache = SnapshotCache(api, default_tournament_id="cup", clock=clock)
        app = TerminalDashboard(cache, "Empty Cup")

        async with app.run_test() as pilot:
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.query_one("#active-table", DataTable).row_count == 0
            assert app.last_update == "no data yet"

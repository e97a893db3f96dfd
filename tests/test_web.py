"""Integration tests for the HTTP surface"""

import pytest
from aiohttp import test_utils

from conftest import StubAPI, make_snapshot
from matchboard.api.challonge_api import DemoChallongeAPI
from matchboard.api.errors import UpstreamUnavailable
from matchboard.cache.snapshot_cache import SnapshotCache
from matchboard.models.match import MatchView, TournamentSnapshot
from matchboard.web.server import create_app


def make_client(cache: SnapshotCache, title: str = "Spring Cup"):
    return test_utils.TestClient(test_utils.TestServer(create_app(cache, title)))


@pytest.mark.integration
class TestDashboardRoutes:
    """Test the HTML and JSON routes"""

    @pytest.mark.asyncio
    async def test_dashboard_renders_default_tournament(self, clock):
        api = StubAPI(make_snapshot("Table 2", "Table 10", pending=1))
        cache = SnapshotCache(api, default_tournament_id="spring-cup", clock=clock)

        async with make_client(cache) as client:
            response = await client.get("/")
            html = await response.text()

        assert response.status == 200
        assert response.content_type == "text/html"
        assert api.calls == ["spring-cup"]
        assert "<title>Spring Cup</title>" in html
        assert '<meta http-equiv="refresh" content="15">' in html
        assert html.index("Table 2") < html.index("Table 10")
        assert "Upcoming matches (1)" in html
        assert "Q0a" in html

    @pytest.mark.asyncio
    async def test_dashboard_for_other_tournament(self, clock):
        api = StubAPI(make_snapshot("Table 1"))
        cache = SnapshotCache(api, default_tournament_id="spring-cup", clock=clock)

        async with make_client(cache) as client:
            response = await client.get("/t/side-event")

        assert response.status == 200
        assert api.calls == ["side-event"]

    @pytest.mark.asyncio
    async def test_dashboard_survives_upstream_failure(self, clock):
        api = StubAPI(UpstreamUnavailable("spring-cup", "DNS failure"))
        cache = SnapshotCache(api, default_tournament_id="spring-cup", clock=clock)

        async with make_client(cache) as client:
            response = await client.get("/")
            html = await response.text()

        assert response.status == 200
        assert "No matches on the tables right now." in html
        assert "Waiting for tournament data" in html

    @pytest.mark.asyncio
    async def test_player_names_are_escaped(self, clock):
        snapshot = TournamentSnapshot(
            active=(
                MatchView(
                    id="1",
                    station="Table 1",
                    player1="<script>alert(1)</script>",
                    player2="Bob & Co",
                    state="open",
                ),
            )
        )
        cache = SnapshotCache(StubAPI(snapshot), default_tournament_id="cup", clock=clock)

        async with make_client(cache) as client:
            html = await (await client.get("/")).text()

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "Bob &amp; Co" in html

    @pytest.mark.asyncio
    async def test_snapshot_json(self, clock):
        cache = SnapshotCache(
            DemoChallongeAPI(delay=0), default_tournament_id="demo", clock=clock
        )

        async with make_client(cache) as client:
            response = await client.get("/api/snapshot")
            payload = await response.json()

        assert response.status == 200
        assert [m["station"] for m in payload["active"]] == ["Table 2", "Table 10"]
        assert [m["id"] for m in payload["pending"]] == ["104", "103"]
        assert payload["last_updated"] is not None

    @pytest.mark.asyncio
    async def test_snapshot_json_is_cached(self, clock):
        api = StubAPI(make_snapshot("Table 1"))
        cache = SnapshotCache(api, default_tournament_id="cup", clock=clock)

        async with make_client(cache) as client:
            await client.get("/api/snapshot/cup")
            await client.get("/api/snapshot/cup")
            await client.get("/")

        assert api.calls == ["cup"]

    @pytest.mark.asyncio
    async def test_health(self, clock):
        cache = SnapshotCache(StubAPI(make_snapshot()), clock=clock)

        async with make_client(cache) as client:
            response = await client.get("/healthz")
            payload = await response.json()

        assert payload == {"status": "ok"}


@pytest.mark.integration
class TestStartupWarmup:
    """The default tournament is fetched when the server starts"""

    @pytest.mark.asyncio
    async def test_warm_fetches_default_tournament(self, clock):
        api = StubAPI(make_snapshot("Table 1"))
        cache = SnapshotCache(api, default_tournament_id="cup", clock=clock)

        app = create_app(cache, "Cup", warm=True)
        async with test_utils.TestClient(test_utils.TestServer(app)):
            assert api.calls == ["cup"]
            assert cache.is_fresh("cup")

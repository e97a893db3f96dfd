"""aiohttp server exposing the dashboard page and a JSON snapshot endpoint."""

from aiohttp import web

from ..cache.snapshot_cache import SnapshotCache
from ..ui.html_dashboard import render_dashboard
from ..utils.logging import log

CACHE_KEY = web.AppKey("cache", SnapshotCache)
TITLE_KEY = web.AppKey("title", str)


async def handle_dashboard(request: web.Request) -> web.Response:
    cache = request.app[CACHE_KEY]
    snapshot = await cache.get_snapshot(request.match_info.get("tournament_id"))
    html = render_dashboard(snapshot, request.app[TITLE_KEY], cache.refresh_interval)
    return web.Response(text=html, content_type="text/html")


async def handle_snapshot(request: web.Request) -> web.Response:
    cache = request.app[CACHE_KEY]
    snapshot = await cache.get_snapshot(request.match_info.get("tournament_id"))
    return web.json_response(text=snapshot.model_dump_json())


async def handle_health(_request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def _warm_default_tournament(app: web.Application) -> None:
    cache = app[CACHE_KEY]
    if cache.default_tournament_id:
        log(f"🚀 Initial fetch for {cache.default_tournament_id}")
        await cache.get_snapshot()


def create_app(cache: SnapshotCache, title: str, warm: bool = False) -> web.Application:
    """Build the web application around a snapshot cache"""
    app = web.Application()
    app[CACHE_KEY] = cache
    app[TITLE_KEY] = title

    app.router.add_get("/", handle_dashboard)
    app.router.add_get("/t/{tournament_id}", handle_dashboard)
    app.router.add_get("/api/snapshot", handle_snapshot)
    app.router.add_get("/api/snapshot/{tournament_id}", handle_snapshot)
    app.router.add_get("/healthz", handle_health)

    if warm:
        app.on_startup.append(_warm_default_tournament)
    return app


def run_server(cache: SnapshotCache, title: str, host: str, port: int) -> None:
    log(f"🌐 Server running on http://{host}:{port}")
    log(f"🏆 Tournament: {title}")
    app = create_app(cache, title, warm=True)
    web.run_app(app, host=host, port=port, print=None)
    log("👋 Server stopped")

"""Main entry point for the dashboard."""

import sys

from .api.challonge_api import ChallongeAPI, DemoChallongeAPI
from .cache.snapshot_cache import SnapshotCache
from .config import ConfigError, Settings, build_parser, load_settings
from .models.mock_data import MOCK_TOURNAMENT_ID
from .utils.logging import log, set_log_file


def build_cache(settings: Settings) -> SnapshotCache:
    """Wire the API client and the cache from settings"""
    if settings.use_demo_data:
        api: ChallongeAPI = DemoChallongeAPI()
        tournament_id = settings.tournament_id or MOCK_TOURNAMENT_ID
    else:
        api = ChallongeAPI(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
        )
        tournament_id = settings.tournament_id

    return SnapshotCache(
        api,
        refresh_interval=settings.refresh_interval,
        default_tournament_id=tournament_id,
    )


def cleanup_terminal():
    """Cleanup terminal state to prevent mouse tracking issues"""
    sys.stdout.write("\033[?1000l\033[?1003l\033[?1015l\033[?1006l\033[?25h\033[?1004l")
    sys.stdout.flush()


def main(argv: list[str] | None = None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.log_file:
        set_log_file(args.log_file)

    try:
        settings = load_settings(args)
    except ConfigError as e:
        log(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    log("🔍 Configuration:")
    log(f"   API key: {'***' + settings.api_key[-4:] if settings.api_key else 'None'}")
    log(f"   Tournament: {settings.tournament_id}")
    log(f"   Refresh interval: {settings.refresh_interval_ms} ms")

    if settings.use_demo_data:
        log("🏆 Running in DEMO mode with mock data")
        log("   Set CHALLONGE_API_KEY and TOURNAMENT_ID for real data")
    else:
        log("🌐 Running with REAL Challonge data")

    cache = build_cache(settings)

    if settings.tui:
        from .ui.terminal_display import TerminalDashboard

        app = TerminalDashboard(cache, settings.title)
        try:
            log("🏁 Starting terminal display...")
            app.run()
        except KeyboardInterrupt:
            log("\n👋 Terminal display stopped")
        finally:
            # Always clean up terminal state regardless of how app exits
            cleanup_terminal()
        return

    from .web.server import run_server

    run_server(cache, settings.title, settings.host, settings.port)


if __name__ == "__main__":
    main()

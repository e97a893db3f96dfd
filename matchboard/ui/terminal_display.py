"""Terminal display of the dashboard for screens without a browser."""

from datetime import datetime
from typing import ClassVar

from textual import work
from textual.app import App, ComposeResult
from textual.binding import BindingType
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Static
from textual.widgets.data_table import CellDoesNotExist

from ..cache.snapshot_cache import SnapshotCache
from ..models.match import MatchView, TournamentSnapshot, format_duration
from ..utils.logging import log, set_console_logging


def time_since(match: MatchView, now: datetime | None = None) -> str:
    """How long a match has been underway (or waiting for its players)"""
    if match.since is None:
        return "-"
    now = now or datetime.now(match.since.tzinfo)
    diff = int((now - match.since).total_seconds())
    return format_duration(diff) if diff >= 0 else "-"


class TerminalDashboard(App[None]):
    """Active and upcoming matches in two tables"""

    CSS: ClassVar[
        str
    ] = """
    Screen {
        layout: vertical;
    }

    Header {
        dock: top;
        height: 1;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-1;
    }

    .section {
        border: solid $primary;
        height: auto;
        margin: 0 0 1 0;
    }

    .section-title {
        background: $primary;
        color: $text;
        padding: 0 1;
        text-align: center;
        height: 1;
    }

    DataTable {
        height: auto;
        min-height: 3;
    }

    #status-line {
        height: 1;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    last_update: reactive[str] = reactive("")

    def __init__(
        self,
        cache: SnapshotCache,
        title: str,
        tournament_id: str | None = None,
    ):
        super().__init__()
        self.cache = cache
        self.tournament_id = tournament_id
        self.snapshot: TournamentSnapshot = TournamentSnapshot.empty()
        self.title = title

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static("Current matches", classes="section-title", id="active-title"),
            DataTable(id="active-table"),
            classes="section",
        )
        yield Vertical(
            Static("Upcoming matches", classes="section-title", id="pending-title"),
            DataTable(id="pending-table"),
            classes="section",
        )
        yield Static("Loading...", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        set_console_logging(False)

        active_table = self.query_one("#active-table", DataTable)
        active_table.add_column("Station", width=12)
        active_table.add_column("Match", width=36)
        active_table.add_column("Status", width=20)
        active_table.add_column("Since", width=10, key="since")
        active_table.cursor_type = "row"

        pending_table = self.query_one("#pending-table", DataTable)
        pending_table.add_column("#", width=4)
        pending_table.add_column("Match", width=36)
        pending_table.cursor_type = "row"

        self.set_interval(1.0, self.update_durations)
        self.set_interval(self.cache.refresh_interval, self.load_snapshot)
        self.load_snapshot()

    def on_unmount(self) -> None:
        set_console_logging(True)

    @work(exclusive=True)
    async def load_snapshot(self, force: bool = False) -> None:
        """Pull the current snapshot from the cache (async worker)"""
        if force and (self.tournament_id or self.cache.default_tournament_id):
            snapshot = await self.cache.refresh(
                self.tournament_id or self.cache.default_tournament_id
            )
        else:
            snapshot = await self.cache.get_snapshot(self.tournament_id)
        self.show_snapshot(snapshot)

    def show_snapshot(self, snapshot: TournamentSnapshot) -> None:
        self.snapshot = snapshot
        if snapshot.last_updated:
            self.last_update = snapshot.last_updated.astimezone().strftime("%H:%M:%S")
        else:
            self.last_update = "no data yet"

        active_table = self.query_one("#active-table", DataTable)
        active_table.clear()
        for match in snapshot.active:
            active_table.add_row(
                match.station,
                match.match_name,
                "Match underway" if match.is_underway else "Waiting for players",
                time_since(match),
                key=match.id,
            )

        pending_table = self.query_one("#pending-table", DataTable)
        pending_table.clear()
        for match in snapshot.pending:
            order = match.suggested_play_order
            pending_table.add_row(
                str(int(order)) if order is not None else "-",
                match.match_name,
                key=match.id,
            )

        self.query_one("#pending-title", Static).update(
            f"Upcoming matches ({len(snapshot.pending)})"
        )
        log(
            f"🔄 Display updated: {len(snapshot.active)} active, "
            f"{len(snapshot.pending)} pending"
        )

    def watch_last_update(self, value: str) -> None:
        for status_line in self.query("#status-line").results(Static):
            status_line.update(f"Last updated: {value}")

    def update_durations(self) -> None:
        """Tick the 'Since' column (called every second)"""
        active_table = self.query_one("#active-table", DataTable)
        for match in self.snapshot.active:
            try:
                active_table.update_cell(match.id, "since", time_since(match))
            except CellDoesNotExist:
                # Row vanished between refreshes
                continue

    def action_refresh(self) -> None:
        self.load_snapshot(force=True)

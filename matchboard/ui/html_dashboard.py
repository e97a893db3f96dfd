"""HTML rendering of a tournament snapshot."""

import math
from datetime import datetime

from jinja2 import Environment, PackageLoader, select_autoescape

from ..models.match import TournamentSnapshot

_environment: Environment | None = None


def format_clock(value: datetime | None) -> str:
    """Local wall-clock time of a timestamp, e.g. 14:03:09"""
    if value is None:
        return "-"
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%H:%M:%S")


def get_environment() -> Environment:
    global _environment

    if _environment is None:
        _environment = Environment(
            loader=PackageLoader("matchboard", "ui/templates"),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _environment.filters["clock"] = format_clock
    return _environment


def render_dashboard(
    snapshot: TournamentSnapshot, title: str, refresh_interval: float
) -> str:
    """Render the auto-refreshing dashboard page"""
    template = get_environment().get_template("dashboard.html.j2")
    return template.render(
        snapshot=snapshot,
        title=title,
        refresh_seconds=max(1, math.ceil(refresh_interval)),
    )

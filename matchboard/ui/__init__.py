"""Renderers for tournament snapshots."""

from .html_dashboard import render_dashboard
from .terminal_display import TerminalDashboard

__all__ = ["render_dashboard", "TerminalDashboard"]

"""Settings loaded once at startup: CLI flags over environment over .env."""

import argparse
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .api.challonge_api import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


class ConfigError(Exception):
    """Startup configuration is unusable"""


class Settings(BaseModel):
    """Immutable runtime configuration"""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    tournament_id: str | None = None
    title: str = "Tournament"
    refresh_interval_ms: int = 15000
    request_timeout: float = DEFAULT_TIMEOUT
    base_url: str = DEFAULT_BASE_URL
    host: str = "0.0.0.0"
    port: int = 3000
    demo: bool = False
    tui: bool = False
    log_file: str | None = None

    @field_validator("refresh_interval_ms")
    @classmethod
    def _positive_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("refresh interval must be positive")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request timeout must be positive")
        return value

    @property
    def refresh_interval(self) -> float:
        """Refresh interval in seconds"""
        return self.refresh_interval_ms / 1000

    @property
    def use_demo_data(self) -> bool:
        return self.demo or not self.api_key


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live tournament match dashboard")
    parser.add_argument("--api-key", help="Challonge API key (CHALLONGE_API_KEY)")
    parser.add_argument("--tournament", help="Default tournament id (TOURNAMENT_ID)")
    parser.add_argument("--title", help="Dashboard title (TOURNAMENT_NAME)")
    parser.add_argument(
        "--interval",
        type=int,
        help="Refresh interval in milliseconds (UPDATE_INTERVAL, default 15000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Upstream request timeout in seconds (REQUEST_TIMEOUT, default 10)",
    )
    parser.add_argument("--host", help="Bind address (HOST, default 0.0.0.0)")
    parser.add_argument("--port", type=int, help="HTTP port (PORT, default 3000)")
    parser.add_argument("--env-file", default=".env", help="Path to a .env file")
    parser.add_argument("--log-file", help="Write the operator log here")
    parser.add_argument("--demo", action="store_true", help="Run with demo data")
    parser.add_argument(
        "--tui", action="store_true", help="Show the terminal display instead of serving HTTP"
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Merge CLI flags, the environment and the .env file into Settings"""
    load_dotenv(args.env_file, override=False)

    def pick(flag, env_name):
        return flag if flag is not None else os.getenv(env_name)

    values = {
        "api_key": pick(args.api_key, "CHALLONGE_API_KEY"),
        "tournament_id": pick(args.tournament, "TOURNAMENT_ID"),
        "title": pick(args.title, "TOURNAMENT_NAME"),
        "refresh_interval_ms": pick(args.interval, "UPDATE_INTERVAL"),
        "request_timeout": pick(args.timeout, "REQUEST_TIMEOUT"),
        "base_url": os.getenv("CHALLONGE_BASE_URL"),
        "host": pick(args.host, "HOST"),
        "port": pick(args.port, "PORT"),
        "demo": args.demo,
        "tui": args.tui,
        "log_file": args.log_file,
    }

    try:
        settings = Settings(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as e:
        raise ConfigError(str(e)) from e

    if not settings.use_demo_data and not settings.tournament_id:
        raise ConfigError("TOURNAMENT_ID (or --tournament) is required with an API key")
    return settings

"""
Configuration and application state management.
"""

import logging
import os
from enum import Enum

from dotenv import load_dotenv
from fastapi import HTTPException

from .fetcher import ArticleFetcher

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Self-hosted Omnivore API
DEFAULT_API_URL = "http://localhost:4000/api/graphql"


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Mode(str, Enum):
    """Deployment mode."""
    AUTHENTICATED = "authenticated"  # server holds the token
    PUBLIC = "public"  # callers pass their own token


class Config:
    """Application configuration from environment."""
    OMNIVORE_API_URL: str = os.getenv("OMNIVORE_API_URL") or DEFAULT_API_URL
    OMNIVORE_AUTH_TOKEN: str = os.getenv("OMNIVORE_AUTH_TOKEN", "")
    PUBLIC_MODE: bool = _parse_bool(os.getenv("PUBLIC_MODE"))

    PORT: int = int(os.getenv("PORT", "8787"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def mode(self) -> Mode:
        return Mode.PUBLIC if self.PUBLIC_MODE else Mode.AUTHENTICATED


config = Config()


class AppState:
    """Shared application state, set once at startup."""
    mode: Mode | None = None
    fetcher: ArticleFetcher | None = None  # authenticated mode only


state = AppState()


def init_state(cfg: Config = config) -> AppState:
    """
    Resolve the deployment mode and build the shared fetcher.

    Must run exactly once per process. A second call raises instead of
    quietly keeping the identity from the first.
    """
    if state.mode is not None:
        raise RuntimeError("Application state already initialized")

    state.mode = cfg.mode()
    if state.mode is Mode.AUTHENTICATED:
        if cfg.OMNIVORE_AUTH_TOKEN:
            state.fetcher = ArticleFetcher(cfg.OMNIVORE_API_URL, cfg.OMNIVORE_AUTH_TOKEN)
        else:
            logger.warning("OMNIVORE_AUTH_TOKEN is not set. /feed will fail until it is.")

    logger.info(f"Running in {state.mode.value} mode against {cfg.OMNIVORE_API_URL}")
    return state


def get_mode() -> Mode:
    """Dependency to get the deployment mode."""
    if state.mode is None:
        raise HTTPException(status_code=500, detail="Server not initialized")
    return state.mode


def get_shared_fetcher() -> ArticleFetcher:
    """Dependency to get the server-wide fetcher (authenticated mode)."""
    if not state.fetcher:
        raise HTTPException(status_code=500, detail="Omnivore token not configured")
    return state.fetcher

"""
Tests for configuration and startup state.
"""

import pytest
from fastapi import HTTPException

from omnifeed.config import (
    DEFAULT_API_URL,
    Config,
    Mode,
    _parse_bool,
    get_mode,
    get_shared_fetcher,
    init_state,
    state,
)


@pytest.fixture
def clean_state():
    """Uninitialized state, restored afterwards."""
    original_mode = state.mode
    original_fetcher = state.fetcher
    state.mode = None
    state.fetcher = None

    yield state

    state.mode = original_mode
    state.fetcher = original_fetcher


def _config(public: bool = False, token: str = "tok", url: str = DEFAULT_API_URL) -> Config:
    cfg = Config()
    cfg.PUBLIC_MODE = public
    cfg.OMNIVORE_AUTH_TOKEN = token
    cfg.OMNIVORE_API_URL = url
    return cfg


class TestParseBool:
    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", "on"])
    def test_truthy(self, value):
        assert _parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "", "off"])
    def test_falsy(self, value):
        assert _parse_bool(value) is False

    def test_default(self):
        assert _parse_bool(None, default=True) is True


class TestInitState:
    """Tests for one-time state initialization."""

    def test_authenticated_builds_shared_fetcher(self, clean_state):
        init_state(_config(url="https://omnivore.test/api/graphql"))
        assert state.mode is Mode.AUTHENTICATED
        assert state.fetcher.endpoint == "https://omnivore.test/api/graphql"
        assert get_shared_fetcher() is state.fetcher

    def test_public_has_no_shared_fetcher(self, clean_state):
        init_state(_config(public=True))
        assert state.mode is Mode.PUBLIC
        assert state.fetcher is None

    def test_authenticated_without_token(self, clean_state):
        init_state(_config(token=""))
        assert state.fetcher is None
        with pytest.raises(HTTPException) as exc_info:
            get_shared_fetcher()
        assert exc_info.value.status_code == 500

    def test_second_init_raises(self, clean_state):
        """Re-initializing must not silently keep or replace the first identity."""
        init_state(_config(token="first"))
        first = state.fetcher

        with pytest.raises(RuntimeError):
            init_state(_config(token="second"))
        assert state.fetcher is first

    def test_get_mode_before_init(self, clean_state):
        with pytest.raises(HTTPException):
            get_mode()

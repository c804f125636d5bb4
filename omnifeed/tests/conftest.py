"""
Pytest fixtures for backend tests.
"""

import pytest
from fastapi.testclient import TestClient

from omnifeed.config import Mode, state
from omnifeed.fetcher import ArticleFetcher
from omnifeed.server import app

API_URL = "https://omnivore.test/api/graphql"
SERVER_TOKEN = "server-token"


def _edge(
    id: str = "a1",
    title: str = "First Article",
    url: str = "https://example.com/first",
    **extra
) -> dict:
    node = {
        "id": id,
        "title": title,
        "slug": title.lower().replace(" ", "-"),
        "url": url,
        "description": f"About {title}",
        "content": f"<p>{title} body</p>",
        "author": "Jane Doe",
        "siteName": "Example",
        "publishedAt": "2024-01-15T10:30:00.000Z",
        "savedAt": "2024-01-16T08:00:00.000Z",
        "labels": [{"name": "tech"}],
    }
    node.update(extra)
    return {"cursor": id, "node": node}


@pytest.fixture
def make_edge():
    """Factory for a fully populated search edge."""
    return _edge


@pytest.fixture
def make_envelope():
    """Factory for a successful search response around some edges."""
    def _envelope(edges: list) -> dict:
        return {
            "data": {
                "search": {
                    "edges": edges,
                    "pageInfo": {
                        "hasNextPage": False,
                        "endCursor": None,
                        "totalCount": len(edges),
                    },
                }
            }
        }
    return _envelope


@pytest.fixture
def auth_state():
    """Authenticated mode with a shared fetcher."""
    original_mode = state.mode
    original_fetcher = state.fetcher

    state.mode = Mode.AUTHENTICATED
    state.fetcher = ArticleFetcher(API_URL, SERVER_TOKEN)

    yield state

    state.mode = original_mode
    state.fetcher = original_fetcher


@pytest.fixture
def public_state():
    """Public mode: no shared fetcher."""
    original_mode = state.mode
    original_fetcher = state.fetcher

    state.mode = Mode.PUBLIC
    state.fetcher = None

    yield state

    state.mode = original_mode
    state.fetcher = original_fetcher


@pytest.fixture
def auth_client(auth_state):
    """Test client in authenticated mode."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def public_client(public_state):
    """Test client in public mode."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

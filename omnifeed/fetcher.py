"""
Article Fetcher - Query saved articles from the Omnivore GraphQL API.

Handles:
- The search query and its variables (cursor, page size, filter)
- Passing the API token through the Authorization header
- Turning transport, timeout, status and JSON failures into FetchError
"""

import asyncio
import logging

import aiohttp

from .exceptions import FetchError

logger = logging.getLogger(__name__)


SEARCH_QUERY = """
query Search($after: String, $first: Int, $query: String) {
  search(first: $first, after: $after, query: $query) {
    ... on SearchSuccess {
      edges {
        cursor
        node {
          id
          title
          slug
          url
          originalArticleUrl
          author
          description
          content
          siteName
          publishedAt
          savedAt
          createdAt
          labels {
            name
          }
        }
      }
      pageInfo {
        hasNextPage
        endCursor
        totalCount
      }
    }
    ... on SearchError {
      errorCodes
    }
  }
}
"""


class ArticleFetcher:
    """
    Client for one Omnivore endpoint and token.

    The endpoint and token are fixed at construction. In authenticated mode a
    single instance is built at startup and shared by every request; in public
    mode each request gets its own instance through `create()`.
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        user_agent: str | None = None,
        timeout: float | None = None
    ):
        self._endpoint = endpoint
        self._token = token
        self.timeout = timeout  # seconds; None keeps the aiohttp default
        self._headers = {
            "Authorization": token,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent or "omnifeed/1.0",
        }

    @classmethod
    def create(cls, endpoint: str, token: str) -> "ArticleFetcher":
        """Build a fresh, unshared fetcher for a caller-supplied token."""
        return cls(endpoint, token)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return f"ArticleFetcher(endpoint={self._endpoint!r})"

    async def fetch_articles(
        self,
        cursor: str | None = None,
        limit: int = 10,
        query: str = ""
    ) -> dict:
        """
        Run the search query and return the decoded response body.

        Args:
            cursor: Pagination cursor (`after`), None for the first page
            limit: Number of articles to request (`first`)
            query: Omnivore search filter, forwarded verbatim

        Returns:
            The raw JSON envelope. Its shape is checked by the caller.

        Raises:
            FetchError: On network failure, timeout, non-2xx status or invalid JSON
        """
        payload = {
            "query": SEARCH_QUERY,
            "variables": {
                "after": cursor,
                "first": limit,
                "query": query,
            },
        }
        logger.debug(f"Querying {self._endpoint} (limit={limit}, query={query!r})")

        session_kwargs = {}
        if self.timeout is not None:
            session_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(headers=self._headers, **session_kwargs) as session:
                async with session.post(self._endpoint, json=payload) as resp:
                    resp.raise_for_status()
                    return await resp.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.warning(f"Omnivore API at {self._endpoint} returned HTTP {e.status}")
            raise FetchError(f"Omnivore API returned HTTP {e.status}", status=e.status) from e
        except asyncio.TimeoutError as e:
            logger.warning(f"Timed out waiting for Omnivore API at {self._endpoint}")
            raise FetchError("Timed out waiting for Omnivore API") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Could not reach Omnivore API at {self._endpoint}: {e}")
            raise FetchError(f"Could not reach Omnivore API: {e}") from e
        except ValueError as e:
            logger.warning(f"Omnivore API at {self._endpoint} returned invalid JSON: {e}")
            raise FetchError("Omnivore API returned invalid JSON") from e

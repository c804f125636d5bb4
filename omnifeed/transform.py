"""
Fetch saved articles and turn them into an RSS feed.
"""

import json
import logging
from dataclasses import dataclass

from .exceptions import OmnivoreError, UpstreamContractError
from .fetcher import ArticleFetcher
from .models import MalformedResponse, decode_search_response
from .rss import convert_articles_to_rss

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def parse_limit(value: str | int | None) -> int | None:
    """
    Parse the `limit` query parameter.

    Returns None for anything that is not a positive decimal integer, so the
    caller falls back to the default instead of forwarding garbage upstream.
    Zero and negative values count as missing on purpose, and so do strings
    with trailing junk such as "5abc".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None

    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    limit = int(text)
    return limit if limit > 0 else None


@dataclass
class FeedOptions:
    """Request-derived options for building one feed."""
    req_url: str
    limit: int = DEFAULT_LIMIT
    query: str = ""

    @classmethod
    def from_request(
        cls,
        req_url: str,
        limit: str | int | None = None,
        query: str | None = None
    ) -> "FeedOptions":
        parsed = parse_limit(limit)
        return cls(
            req_url=req_url,
            limit=parsed if parsed is not None else DEFAULT_LIMIT,
            query=query or "",
        )


async def handle_transform(fetcher: ArticleFetcher, options: FeedOptions) -> str:
    """
    Fetch one page of saved articles and render it as RSS.

    Raises:
        FetchError: The upstream request failed
        UpstreamContractError: The response has no `data.search.edges` list,
            usually because the token is invalid or expired
    """
    try:
        data = await fetcher.fetch_articles(None, options.limit, options.query)
        logger.debug(f"Response from Omnivore API: {json.dumps(data, indent=2, default=str)}")

        result = decode_search_response(data)
        if isinstance(result, MalformedResponse):
            logger.error(
                "Invalid response structure from Omnivore API "
                f"({result.reason}). This might be due to an invalid API token. "
                f"Error codes: {result.error_codes}. "
                f"Raw response: {json.dumps(result.payload, default=str)}"
            )
            raise UpstreamContractError(result)

        logger.info(
            f"Converting {len(result.edges)} articles "
            f"(limit={options.limit}, query={options.query!r})"
        )
        return convert_articles_to_rss(result.edges, options.req_url)
    except OmnivoreError as e:
        logger.error(f"Failed to build feed: {e}")
        raise

"""
Feed routes: saved articles as RSS.

`/feed` serves the server-held token, `/public` a caller-supplied one. Each
route answers requests made in the wrong mode with a 200 guidance message.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from ..config import Mode, config, get_mode, get_shared_fetcher
from ..fetcher import ArticleFetcher
from ..schemas import MessageResponse
from ..transform import FeedOptions, handle_transform

router = APIRouter(tags=["feed"])

RSS_MEDIA_TYPE = "application/xml"


@router.get("/feed", response_model=None)
async def feed(
    request: Request,
    mode: Annotated[Mode, Depends(get_mode)],
    limit: str | None = None,
    query: str | None = None
) -> Response | MessageResponse:
    """Saved articles for the server's own token."""
    if mode is Mode.PUBLIC:
        return MessageResponse(msg="Public mode enabled, please use the /public endpoint.")

    fetcher = get_shared_fetcher()
    options = FeedOptions.from_request(str(request.url), limit, query)
    body = await handle_transform(fetcher, options)
    return Response(content=body, media_type=RSS_MEDIA_TYPE)


@router.get("/public", response_model=None)
async def public_feed(
    request: Request,
    mode: Annotated[Mode, Depends(get_mode)],
    token: str | None = None,
    limit: str | None = None,
    query: str | None = None
) -> Response | MessageResponse:
    """Saved articles for the token given in the query string."""
    if mode is not Mode.PUBLIC:
        return MessageResponse(msg="Public mode disabled, please use the /feed endpoint.")
    if not token:
        return MessageResponse(
            msg="In public mode, please provide a token, or deploy your own instance."
        )

    # Never shared: each request carries its own token
    fetcher = ArticleFetcher.create(config.OMNIVORE_API_URL, token)
    options = FeedOptions.from_request(str(request.url), limit, query)
    body = await handle_transform(fetcher, options)
    return Response(content=body, media_type=RSS_MEDIA_TYPE)

"""
Miscellaneous routes: readiness message.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..config import Mode, get_mode
from ..schemas import MessageResponse

router = APIRouter(tags=["misc"])

PUBLIC_MODE_HINT = "Public mode enabled, please use the /public?token=<your omnivore token> endpoint."


@router.get("/", response_model=None)
async def index(
    mode: Annotated[Mode, Depends(get_mode)]
) -> MessageResponse | PlainTextResponse:
    """Report readiness, or explain how to use public mode."""
    if mode is Mode.PUBLIC:
        return PlainTextResponse(PUBLIC_MODE_HINT)
    return MessageResponse(msg="Server is ready.")

"""
Pydantic models for API responses.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Guidance message for requests that hit the wrong route for the mode."""
    msg: str


class ErrorResponse(BaseModel):
    """Body of a failed request."""
    detail: str

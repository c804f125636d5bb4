"""
Error types for upstream failures.

Routes never catch these; the server maps them to a generic 500 response.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import MalformedResponse


class OmnivoreError(Exception):
    """Base class for failures talking to the Omnivore API."""


class FetchError(OmnivoreError):
    """
    The GraphQL request itself failed.

    Raised for network errors, non-2xx responses and bodies that are not JSON.
    `status` is set when the upstream answered with an HTTP error.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class UpstreamContractError(OmnivoreError):
    """The response decoded fine but has no `data.search.edges` list."""

    def __init__(self, response: "MalformedResponse"):
        super().__init__(f"Invalid response structure from Omnivore API: {response.reason}")
        self.response = response

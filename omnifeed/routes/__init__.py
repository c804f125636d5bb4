"""
API route modules.
"""

from .feed import router as feed_router
from .misc import router as misc_router

__all__ = [
    "feed_router",
    "misc_router",
]

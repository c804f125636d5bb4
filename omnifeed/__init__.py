"""
Omnivore RSS Backend

A FastAPI service that republishes Omnivore saved articles as an RSS feed.
"""

__version__ = "1.0.0"

"""
Omnivore search response models.

The upstream field names are owned by the Omnivore GraphQL schema. They are
kept in ARTICLE_FIELDS so that a schema change only touches this table.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Article attribute -> candidate node keys, first non-empty one wins
ARTICLE_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "url": ("url", "originalArticleUrl"),
    "slug": ("slug",),
    "description": ("description",),
    "content": ("content",),
    "author": ("author",),
    "site_name": ("siteName",),
    "published": ("publishedAt", "savedAt", "createdAt"),
}

# Seconds fraction of any length; fromisoformat before 3.11 takes only 3 or 6 digits
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


@dataclass
class Article:
    """One saved article, mapped from a search edge."""
    id: str | None = None
    title: str | None = None
    url: str | None = None
    slug: str | None = None
    description: str | None = None
    content: str | None = None
    author: str | None = None
    site_name: str | None = None
    published: datetime | None = None
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_edge(cls, edge: Any) -> "Article":
        """
        Map a raw edge to an Article.

        Never raises: anything that is not an `{"node": {...}}` dict, and any
        field of the wrong type, simply comes out as None.
        """
        node = edge.get("node") if isinstance(edge, dict) else None
        if not isinstance(node, dict):
            return cls()

        values: dict[str, Any] = {}
        for attr, keys in ARTICLE_FIELDS.items():
            if attr == "published":
                values[attr] = _first_datetime(node, keys)
            else:
                values[attr] = _first_string(node, keys)

        return cls(labels=_label_names(node.get("labels")), **values)


def _first_string(node: dict, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = node.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _first_datetime(node: dict, keys: tuple[str, ...]) -> datetime | None:
    for key in keys:
        parsed = parse_timestamp(node.get(key))
        if parsed is not None:
            return parsed
    return None


def _label_names(labels: Any) -> list[str]:
    if not isinstance(labels, list):
        return []
    names = []
    for label in labels:
        name = label.get("name") if isinstance(label, dict) else None
        if isinstance(name, str) and name.strip():
            names.append(name.strip())
    return names


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp. Naive values are assumed to be UTC."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ─────────────────────────────────────────────────────────────
# Response envelope
# ─────────────────────────────────────────────────────────────

@dataclass
class SearchResult:
    """A response that has the `data.search.edges` list."""
    edges: list
    page_info: dict | None = None


@dataclass
class MalformedResponse:
    """A response without the expected shape, kept whole for diagnostics."""
    payload: Any
    reason: str
    error_codes: list[str] = field(default_factory=list)


def decode_search_response(payload: Any) -> SearchResult | MalformedResponse:
    """
    Check the shape of a decoded search response.

    Omnivore answers an invalid token with HTTP 200 and either a top-level
    `errors` array or a `SearchError` union member, so the status code alone
    does not tell success apart from failure.
    """
    error_codes = _collect_error_codes(payload)

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return MalformedResponse(payload, "response has no 'data' object", error_codes)

    search = data.get("search")
    if not isinstance(search, dict):
        return MalformedResponse(payload, "response has no 'data.search' object", error_codes)

    edges = search.get("edges")
    if not isinstance(edges, list):
        return MalformedResponse(payload, "response has no 'data.search.edges' list", error_codes)

    page_info = search.get("pageInfo")
    return SearchResult(
        edges=edges,
        page_info=page_info if isinstance(page_info, dict) else None,
    )


def _collect_error_codes(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []

    codes: list[str] = []
    errors = payload.get("errors")
    if isinstance(errors, list):
        for error in errors:
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                codes.append(error["message"])

    data = payload.get("data")
    search = data.get("search") if isinstance(data, dict) else None
    if isinstance(search, dict) and isinstance(search.get("errorCodes"), list):
        codes.extend(str(code) for code in search["errorCodes"])

    return codes

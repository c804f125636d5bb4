"""RSS 2.0 generation for saved-article lists."""

import re
import xml.etree.ElementTree as ET
from email.utils import format_datetime
from typing import Iterable

from bs4 import BeautifulSoup

from .models import Article

ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"

ET.register_namespace("atom", ATOM_NS)
ET.register_namespace("content", CONTENT_NS)
ET.register_namespace("dc", DC_NS)

FEED_TITLE = "Omnivore Saved Articles"
FEED_DESCRIPTION = "Articles saved to Omnivore, newest first."
GENERATOR = "omnifeed"

SUMMARY_LENGTH = 300

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)
_WHITESPACE = re.compile(r"\s+")


def convert_articles_to_rss(
    edges: Iterable,
    req_url: str,
    title: str = FEED_TITLE,
    description: str = FEED_DESCRIPTION
) -> str:
    """
    Build an RSS 2.0 document from search edges.

    One item is emitted per edge, in the order given. Missing fields leave
    out the matching element instead of failing.

    Args:
        edges: Raw `data.search.edges` entries
        req_url: URL of the request that produced this feed, used as the
            channel link and the atom self link
        title: Channel title
        description: Channel description

    Returns:
        RSS XML string with declaration
    """
    root = ET.Element("rss", version="2.0")
    channel = ET.SubElement(root, "channel")

    _text_element(channel, "title", title)
    _text_element(channel, "link", req_url)
    ET.SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        href=clean_xml_text(req_url),
        rel="self",
        type="application/rss+xml",
    )
    _text_element(channel, "description", description)
    _text_element(channel, "generator", GENERATOR)

    for edge in edges:
        _add_item(channel, Article.from_edge(edge))

    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(
        root, encoding="unicode"
    )


def _add_item(channel: ET.Element, article: Article) -> None:
    """Add an <item> for one article."""
    item = ET.SubElement(channel, "item")

    _text_element(item, "title", article.title or "Untitled")

    if article.url:
        _text_element(item, "link", article.url)

    if article.id:
        _text_element(item, "guid", article.id, isPermaLink="false")
    elif article.url:
        _text_element(item, "guid", article.url, isPermaLink="true")
    elif article.slug:
        _text_element(item, "guid", article.slug, isPermaLink="false")

    if article.published:
        _text_element(item, "pubDate", format_datetime(article.published))

    summary = article.description or summarize_html(article.content)
    if summary:
        _text_element(item, "description", summary)

    if article.author:
        _text_element(item, f"{{{DC_NS}}}creator", article.author)

    for label in article.labels:
        _text_element(item, "category", label)

    if article.content:
        _text_element(item, f"{{{CONTENT_NS}}}encoded", article.content)


def _text_element(parent: ET.Element, tag: str, text: str, **attrs: str) -> ET.Element:
    elem = ET.SubElement(parent, tag, **attrs)
    elem.text = clean_xml_text(text)
    return elem


def clean_xml_text(text: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return _INVALID_XML_CHARS.sub("", text)


def summarize_html(html: str | None, length: int = SUMMARY_LENGTH) -> str | None:
    """
    Plain-text summary of article HTML.

    Whitespace is collapsed and the text is cut at the last word boundary
    before `length` characters, with an ellipsis appended when cut.
    """
    if not html:
        return None

    text = BeautifulSoup(html, "html.parser").get_text(" ", strip=True)
    text = _WHITESPACE.sub(" ", text).strip()
    if not text:
        return None
    if len(text) <= length:
        return text

    cut = text[:length]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip() + "…"

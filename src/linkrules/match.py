"""Rule match helpers.

A match function receives the read-only `MarkdownLink` and returns:

- a falsy value (None/False) when the rule does not apply,
- True when it applies without rewriting anything,
- a patch dict when it applies and some fields must change first.

An empty dict counts as a match here even though it is falsy in Python;
`rules.normalize_rule` treats any mapping result as a hit.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urljoin, urlsplit

from .link import MarkdownLink

MatchResult = bool | Mapping[str, Any] | None
LinkMatcher = Callable[[MarkdownLink], MatchResult]

EXTERNAL_SCHEMES: tuple[str, ...] = ("http:", "https:")
PAGE_EXTENSIONS: frozenset[str] = frozenset({"html", "htm"})

# Only the path of a relative address matters, so any fixed base will do.
_DOWNLOAD_BASE = "https://localhost"


def prefix(value: str) -> LinkMatcher:
    """Match links whose href, title or text starts with `value`.

    Fields are checked in that order; the first hit is returned with the
    prefix stripped. Only one field is ever rewritten.
    """

    def _match(link: MarkdownLink) -> MatchResult:
        if link.href and link.href.startswith(value):
            return {"href": link.href[len(value) :]}
        if link.title and link.title.startswith(value):
            return {"title": link.title[len(value) :]}
        if link.text and link.text.startswith(value):
            return {"text": link.text[len(value) :]}
        return None

    return _match


def external() -> LinkMatcher:
    """Match absolute http(s) links, or links tagged with `external:`."""

    tagged = prefix("external:")

    def _match(link: MarkdownLink) -> MatchResult:
        if link.href and link.href.startswith(EXTERNAL_SCHEMES):
            return {}
        return tagged(link)

    return _match


def _download_filename(href: str) -> str | None:
    try:
        path = urlsplit(urljoin(_DOWNLOAD_BASE, href)).path
    except ValueError:
        return None

    parts = path.split(".")
    if len(parts) < 2:
        return None

    extension = parts[-1].lower()
    # Any extension length qualifies; only page extensions are excluded.
    if extension in PAGE_EXTENSIONS:
        return None
    return path.split("/")[-1]


def download() -> LinkMatcher:
    """Match links to files, or links tagged with `download:`.

    A file link is one whose path ends in an extension other than a page
    extension (html, htm). The match carries the file name as `download`.
    """

    tagged = prefix("download:")

    def _match(link: MarkdownLink) -> MatchResult:
        if link.href:
            filename = _download_filename(link.href)
            if filename is not None:
                return {"download": filename}
        return tagged(link)

    return _match


def same_page() -> LinkMatcher:
    """Match fragment-only links (`#section`)."""

    def _match(link: MarkdownLink) -> MatchResult:
        return bool(link.href and link.href.startswith("#"))

    return _match

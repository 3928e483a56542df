"""Link records exchanged between rules.

A `MarkdownLink` is the read-only view a rule's match function sees: the
address, title and visible text of an `<a>` element. A `Link` is the full
record a rule produces. Both are frozen; every helper returns a new value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

AttrValue = str | bool | int

MARKDOWN_FIELDS: tuple[str, ...] = ("href", "title", "text")
LINK_FIELDS: tuple[str, ...] = (*MARKDOWN_FIELDS, "class_name", "rel", "target", "download")

# Spellings used by HTML ("class") and hast ("className") rule tables.
KEY_ALIASES: dict[str, str] = {"class": "class_name", "className": "class_name"}


def canonical_key(key: str) -> str:
    key = str(key)
    return KEY_ALIASES.get(key, key)


@dataclass(frozen=True, slots=True)
class MarkdownLink:
    href: str | None = None
    title: str | None = None
    text: str | None = None


@dataclass(frozen=True, slots=True)
class Link:
    """Attributes of a hyperlink while it moves through the rule chain.

    Well-known attributes are plain fields. Anything else lives in `extra`
    and is written to the element as-is.
    """

    href: str | None = None
    title: str | None = None
    text: str | None = None
    class_name: str | None = None
    rel: str | None = None
    target: str | None = None
    download: str | bool | None = None
    extra: Mapping[str, AttrValue | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only copy of the caller's mapping.
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_markdown(cls, link: MarkdownLink) -> Link:
        return cls(href=link.href, title=link.title, text=link.text)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Link:
        return cls().merge(values)

    @property
    def markdown(self) -> MarkdownLink:
        return MarkdownLink(href=self.href, title=self.title, text=self.text)

    def get(self, key: str, default: Any = None) -> Any:
        key = canonical_key(key)
        if key in LINK_FIELDS:
            value = getattr(self, key)
            return default if value is None else value
        return self.extra.get(key, default)

    def merge(self, patch: Link | MarkdownLink | Mapping[str, Any] | None) -> Link:
        """Return a copy of this link with `patch` applied over it.

        Patch fields win. For `Link`/`MarkdownLink` patches only the fields
        that are set take part; for mappings every key given is applied.
        """

        items = patch_items(patch)
        if not items:
            return self

        known: dict[str, Any] = {}
        extra = dict(self.extra)
        for key, value in items.items():
            if key in LINK_FIELDS:
                known[key] = value
            else:
                extra[key] = value

        values = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        values.update(known)
        return Link(**values, extra=extra)

    def as_dict(self) -> dict[str, Any]:
        """Set attributes only, well-known fields first then extras."""
        out: dict[str, Any] = {}
        for name in LINK_FIELDS:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        out.update(self.extra)
        return out


def patch_items(patch: Link | MarkdownLink | Mapping[str, Any] | None) -> dict[str, Any]:
    """Flatten any patch shape to a dict keyed by canonical attribute name."""

    if patch is None:
        return {}
    if isinstance(patch, Link):
        return patch.as_dict()
    if isinstance(patch, MarkdownLink):
        return {name: getattr(patch, name) for name in MARKDOWN_FIELDS if getattr(patch, name) is not None}
    if isinstance(patch, Mapping):
        return {canonical_key(key): value for key, value in patch.items()}
    raise TypeError(f"Unsupported link patch: {type(patch).__name__}")

"""Rule action helpers.

Each helper returns a `LinkTransformer`: a function taking a `Link` and
returning a new, patched `Link`. The input link is never modified.
"""

from __future__ import annotations

from collections.abc import Callable

from .link import AttrValue, Link, canonical_key

LinkTransformer = Callable[[Link], Link]


def set_attr(key: str, value: AttrValue) -> LinkTransformer:
    """Set the link attribute `key` to `value`."""

    key = canonical_key(key)

    def _set(link: Link) -> Link:
        return link.merge({key: value})

    return _set


def merge_tokens(existing: str, value: str) -> str:
    """Merge `value` into a space-separated token list.

    `value` comes first, then the existing tokens in their original order,
    without duplicates.
    """

    tokens = [value, *existing.strip().split(" ")]
    return " ".join(dict.fromkeys(tokens))


def merge_attr(key: str, value: str) -> LinkTransformer:
    """Merge `value` into a space-separated attribute like class or rel.

    - if the attribute has no value, it is set to `value`
    - if the attribute already holds `value`, nothing changes
    - otherwise `value` is prepended to the existing tokens
    """

    key = canonical_key(key)

    def _merge(link: Link) -> Link:
        existing = link.get(key)
        if existing and isinstance(existing, str):
            return link.merge({key: merge_tokens(existing, value)})
        return link.merge({key: value})

    return _merge


def merge_class(class_name: str) -> LinkTransformer:
    """Add `class_name` to the link's classes unless already present."""
    return merge_attr("class_name", class_name)

"""Apply a compiled rule chain to the `<a>` elements of a tree."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .link import Link, MarkdownLink
from .node import text_node
from .rules import CompiledRule, RuleSpec, compile_rules
from .visit import SKIP, is_element, visit

if TYPE_CHECKING:
    from .link import AttrValue
    from .node import Node
    from .visit import VisitAction

LINK_TAG = "a"

# Link fields written back one by one, as (field, attribute) pairs.
_WRITE_BACK: tuple[tuple[str, str], ...] = (
    ("href", "href"),
    ("title", "title"),
    ("target", "target"),
    ("class_name", "class"),
    ("download", "download"),
    ("rel", "rel"),
)


@dataclass(frozen=True, slots=True)
class LinkProcessorOptions:
    """Rules to apply, in order, and whether builtin rules are appended."""

    rules: tuple[RuleSpec, ...] = field(default_factory=tuple)
    use_builtin: bool = True

    def __post_init__(self) -> None:
        # Accept lists from user code; a lone rule is a one-element list.
        rules = self.rules
        if isinstance(rules, str) or callable(rules) or not isinstance(rules, Sequence):
            rules = (rules,)
        object.__setattr__(self, "rules", tuple(rules))
        object.__setattr__(self, "use_builtin", bool(self.use_builtin))


def _attr_value(value: AttrValue) -> str:
    if value is True:
        return ""
    return str(value)


def extract_link(node: Node) -> MarkdownLink:
    """Read the rule-visible part of an `<a>` element."""

    attrs = node.attributes
    first = node.first_child
    return MarkdownLink(
        href=attrs.get("href"),
        title=attrs.get("title"),
        text=first.text_content if first is not None and first.is_text else None,
    )


def write_link(node: Node, link: Link) -> None:
    """Write the set fields of `link` back into `node`.

    Unset or empty well-known fields leave the element alone; they never
    clear an attribute. Extra fields are applied last and may overwrite.
    """

    attrs = node.attributes
    for name, attr in _WRITE_BACK:
        value = getattr(link, name)
        if value:
            attrs[attr] = _attr_value(value)

    if link.text:
        node.replace_children(text_node(link.text))

    for key, value in link.extra.items():
        # Attribute names are stored lowercase, as Node does.
        key = key.lower()
        if value is None or value is False:
            attrs.pop(key, None)
        else:
            attrs[key] = _attr_value(value)


class LinkProcessor:
    """Rewrite `<a>` elements with an ordered, first-match-wins rule chain.

    The rule list is resolved and compiled once, here. An unknown builtin
    name raises `RuleConfigError` immediately. When no rule survives
    resolution a warning is logged and the processor leaves every tree
    untouched.
    """

    __slots__ = ("_chain", "logger", "options")

    def __init__(
        self,
        options: LinkProcessorOptions | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.options = options if options is not None else LinkProcessorOptions()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._chain: tuple[CompiledRule, ...] = compile_rules(
            self.options.rules,
            use_builtin=self.options.use_builtin,
        )
        if not self._chain:
            self.logger.warning("no rule active")
        else:
            self.logger.debug("Compiled %d link rule(s)", len(self._chain))

    @property
    def active(self) -> bool:
        return bool(self._chain)

    def process(self, link: MarkdownLink) -> Link | None:
        """Return the first non-skip rule result for `link`, or None.

        Every rule sees the same original link; later rules are not consulted
        once one produces a result.
        """

        for rule in self._chain:
            result = rule(link)
            if result is not None:
                return result
        return None

    def _visit_link(self, node: Node) -> VisitAction:
        link = self.process(extract_link(node))
        if link is not None:
            write_link(node, link)
        # Link contents are never link targets themselves.
        return SKIP

    def apply(self, tree: Node) -> Node:
        """Process every `<a>` element of `tree` in place and return `tree`."""

        if not self._chain:
            return tree
        visit(tree, self._visit_link, test=_is_link)
        return tree

    __call__ = apply


def _is_link(node: Node) -> bool:
    return is_element(node) and node.tag_name == LINK_TAG


def link_processor(
    options: LinkProcessorOptions | None = None,
    *,
    rules: Sequence[RuleSpec] | None = None,
    use_builtin: bool | None = None,
    logger: logging.Logger | None = None,
) -> LinkProcessor:
    """Build a `LinkProcessor` from options or keyword arguments.

    Keyword arguments override the matching fields of `options`.
    """

    base = options if options is not None else LinkProcessorOptions()
    options = LinkProcessorOptions(
        rules=base.rules if rules is None else rules,
        use_builtin=base.use_builtin if use_builtin is None else use_builtin,
    )
    return LinkProcessor(options, logger=logger)


def process_links(tree: Node, options: LinkProcessorOptions | None = None) -> Node:
    """One-shot helper: build a processor and apply it to `tree`."""
    return LinkProcessor(options).apply(tree)

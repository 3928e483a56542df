from .actions import merge_attr, merge_class, set_attr
from .link import Link, MarkdownLink
from .match import download, external, prefix, same_page
from .node import Node
from .processor import LinkProcessor, LinkProcessorOptions, link_processor, process_links
from .rules import (
    BUILTIN_RULES,
    BuiltinRule,
    MatcherRule,
    RuleConfigError,
    TransformRule,
    compile_rules,
    normalize_rule,
)
from .serialize import to_html

__all__ = [
    "BUILTIN_RULES",
    "BuiltinRule",
    "Link",
    "LinkProcessor",
    "LinkProcessorOptions",
    "MarkdownLink",
    "MatcherRule",
    "Node",
    "RuleConfigError",
    "TransformRule",
    "compile_rules",
    "download",
    "external",
    "link_processor",
    "merge_attr",
    "merge_class",
    "normalize_rule",
    "prefix",
    "process_links",
    "same_page",
    "set_attr",
    "to_html",
]

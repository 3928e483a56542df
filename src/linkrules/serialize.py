"""HTML serialization utilities for linkrules DOM nodes."""

from html import escape

from .node import COMMENT, CONTAINER_NAMES, TEXT

# HTML5 void elements (no closing tag)
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})


def serialize_start_tag(name, attrs):
    attr_parts = []
    for key, value in (attrs or {}).items():
        if value is None or value == "":
            attr_parts.append(key)
        else:
            attr_parts.append(f'{key}="{escape(str(value), quote=True)}"')
    if not attr_parts:
        return f"<{name}>"
    return f"<{name} {' '.join(attr_parts)}>"


def to_html(node):
    """Convert node to a compact HTML string.

    Unlike a pretty printer, no whitespace is added, so the output of an
    untouched tree is stable across runs.
    """
    if node.tag_name in CONTAINER_NAMES:
        return "".join(to_html(child) for child in node.children)

    if node.tag_name == TEXT:
        return escape(node.text_content or "", quote=False)

    if node.tag_name == COMMENT:
        return f"<!--{node.text_content or ''}-->"

    if node.tag_name == "!doctype":
        return "<!DOCTYPE html>"

    name = node.tag_name
    start = serialize_start_tag(name, node.attributes)
    if name in VOID_ELEMENTS:
        return start

    inner = "".join(to_html(child) for child in node.children)
    return f"{start}{inner}</{name}>"

TEXT = "#text"
COMMENT = "#comment"
CONTAINER_NAMES = frozenset({"#document", "#document-fragment"})


class Node:
    """Represents a DOM-like node.
    - tag_name: e.g., 'a', 'p', etc. Use '#text' for text nodes.
    - attributes: dict of tag attributes
    - children: list of child Nodes
    - parent: reference to parent Node (or None for root)
    - text_content: inline text for text and comment nodes.
    """

    __slots__ = (
        "attributes",
        "children",
        "parent",
        "tag_name",
        "text_content",
    )

    def __init__(self, tag_name, attributes=None, text_content=None, children=None):
        if tag_name is None or tag_name == "":
            msg = "Empty tag_name passed to Node constructor"
            raise ValueError(msg)

        self.tag_name = tag_name
        if attributes:
            # Lowercase attribute names deterministically; keep first occurrence
            lowered = {}
            for k, v in attributes.items():
                lk = k.lower()
                if lk not in lowered:
                    lowered[lk] = v
            self.attributes = lowered
        else:
            self.attributes = {}
        self.children = []
        self.parent = None
        self.text_content = text_content if text_content is not None else ""
        for child in children or ():
            self.append_child(child)

    @property
    def is_text(self):
        return self.tag_name == TEXT

    @property
    def is_element(self):
        return not self.tag_name.startswith("#") and self.tag_name != "!doctype"

    @property
    def first_child(self):
        return self.children[0] if self.children else None

    def append_child(self, child):
        if self._would_create_circular_reference(child):
            msg = f"Adding {child.tag_name} as child of {self.tag_name} would create circular reference"
            raise ValueError(msg)

        if child.parent is not None:
            child.parent.children.remove(child)

        child.parent = self
        self.children.append(child)

    def _would_create_circular_reference(self, child):
        """Check if adding child would make it an ancestor of itself."""
        current = self
        while current is not None:
            if current is child:
                return True
            current = current.parent
        return False

    def remove_child(self, child):
        """Remove a child node and clear its parent link."""
        if child not in self.children:
            return
        self.children.remove(child)
        child.parent = None

    def replace_children(self, *children):
        """Drop every current child and append `children` in order."""
        for old in list(self.children):
            self.remove_child(old)
        for child in children:
            self.append_child(child)

    def __repr__(self):
        if self.tag_name == TEXT:
            return f"Node(#text='{self.text_content[:30]}')"
        if self.tag_name == COMMENT:
            return f"Node(#comment='{self.text_content[:30]}')"
        return f"Node(<{self.tag_name}>, children={len(self.children)})"

    def to_test_format(self, indent=0):
        if self.tag_name in CONTAINER_NAMES:
            return "\n".join(child.to_test_format(0) for child in self.children)
        if self.tag_name == TEXT:
            return f'| {" " * indent}"{self.text_content}"'
        if self.tag_name == COMMENT:
            return f"| {' ' * indent}<!-- {self.text_content} -->"

        result = f"| {' ' * indent}<{self.tag_name}>"
        # Attributes on their own lines, sorted for deterministic output
        for key, value in sorted(self.attributes.items()):
            result += f'\n| {" " * (indent + 2)}{key}="{value}"'

        if self.children:
            parts = [result]
            parts.extend(child.to_test_format(indent + 2) for child in self.children)
            return "\n".join(parts)
        return result


def text_node(value):
    return Node(TEXT, text_content=value)


def element(tag_name, attributes=None, *children):
    """Build an element node; plain strings in `children` become text nodes."""
    node = Node(tag_name, attributes)
    for child in children:
        node.append_child(text_node(child) if isinstance(child, str) else child)
    return node


def fragment(*children):
    return element("#document-fragment", None, *children)

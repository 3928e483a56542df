"""Depth-first tree traversal.

The visitor is called for every node in document order (pre-order). Its
return value steers the walk:

- `CONTINUE` (or None): descend into the node's children.
- `SKIP`: do not descend into this node's children.
- `EXIT`: stop the walk.

Children are read after the visitor returns, so a visitor may replace the
children of the node it is visiting.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from .node import Node


class VisitAction(Enum):
    CONTINUE = "continue"
    SKIP = "skip"
    EXIT = "exit"


CONTINUE = VisitAction.CONTINUE
SKIP = VisitAction.SKIP
EXIT = VisitAction.EXIT


def visit(
    tree: Node,
    visitor: Callable[[Node], VisitAction | None],
    *,
    test: Callable[[Node], bool] | None = None,
) -> None:
    """Walk `tree` calling `visitor` on each node that passes `test`.

    Nodes failing `test` are not passed to the visitor but their children are
    still walked.
    """

    stack: list[Node] = [tree]
    while stack:
        node = stack.pop()
        action = None
        if test is None or test(node):
            action = visitor(node)
        if action is EXIT:
            return
        if action is SKIP:
            continue
        # Reversed so the first child is popped first
        stack.extend(reversed(node.children))


def is_element(node: Node) -> bool:
    return node.is_element

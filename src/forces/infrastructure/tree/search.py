"""Depth-first search and text collection over a Node tree."""

from typing import Callable, Optional

from .node import Node, NodeKind

Predicate = Callable[[Node], bool]


def _preorder(root: Node):
    # Explicit stack so deeply nested markup cannot exhaust the recursion limit
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


def find_first(root: Node, predicate: Predicate) -> Optional[Node]:
    """
    Return the first node in pre-order that satisfies predicate.

    The root is visited first, then each child subtree left to right.
    Returns None when no node matches.
    """
    for node in _preorder(root):
        if predicate(node):
            return node
    return None


def collect_text(root: Node) -> Optional[str]:
    """
    Join the payloads of all text nodes under root with newlines.

    Returns None when the subtree holds no text nodes at all, which is
    distinct from text nodes that happen to be empty.
    """
    chunks = [node.text() for node in _preorder(root) if node.is_text()]
    if not chunks:
        return None
    return "\n".join(chunks)


def is_element(tag: str | None = None) -> Predicate:
    """Match element nodes, optionally restricted to a tag name."""

    def predicate(node: Node) -> bool:
        if node.kind is not NodeKind.ELEMENT:
            return False
        return tag is None or node.tag == tag

    return predicate


def has_attribute(key: str, value: str) -> Predicate:
    """Match element nodes whose attribute key equals value exactly."""

    def predicate(node: Node) -> bool:
        if node.kind is not NodeKind.ELEMENT:
            return False
        return node.attributes().get(key) == value

    return predicate


def has_class(name: str) -> Predicate:
    """Match element nodes carrying the given class token."""

    def predicate(node: Node) -> bool:
        if node.kind is not NodeKind.ELEMENT:
            return False
        return name in node.attributes().get("class", "").split()

    return predicate


def element_children(node: Node) -> list[Node]:
    """Direct element children, skipping text, comments and whitespace."""
    return [child for child in node.children() if child.kind is NodeKind.ELEMENT]

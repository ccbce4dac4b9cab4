"""Generic markup tree traversal."""

from .node import Node, NodeKind, SoupNode
from .search import (
    Predicate,
    collect_text,
    element_children,
    find_first,
    has_attribute,
    has_class,
    is_element,
)

__all__ = [
    "Node",
    "NodeKind",
    "Predicate",
    "SoupNode",
    "collect_text",
    "element_children",
    "find_first",
    "has_attribute",
    "has_class",
    "is_element",
]

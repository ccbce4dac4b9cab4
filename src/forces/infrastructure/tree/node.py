"""Node protocol and its BeautifulSoup adapter."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Protocol

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag


class NodeKind(Enum):
    ELEMENT = "element"
    TEXT = "text"
    OTHER = "other"


class Node(Protocol):
    """Read-only view of a markup tree node."""

    @property
    def kind(self) -> NodeKind: ...

    @property
    def tag(self) -> str: ...

    @property
    def parent(self) -> Optional["Node"]: ...

    def attributes(self) -> Mapping[str, str]: ...

    def children(self) -> list["Node"]: ...

    def is_text(self) -> bool: ...

    def text(self) -> str: ...


class SoupNode:
    """Adapts a bs4 element to the Node protocol."""

    __slots__ = ("element",)

    def __init__(self, element: PageElement):
        self.element = element

    @classmethod
    def from_html(cls, html: str | bytes) -> "SoupNode":
        """Parse markup with lxml and wrap the document root."""
        return cls(BeautifulSoup(html, "lxml"))

    @property
    def kind(self) -> NodeKind:
        if isinstance(self.element, Tag):
            return NodeKind.ELEMENT
        # Comments, doctypes and CDATA are PreformattedString subclasses
        if isinstance(self.element, NavigableString) and not isinstance(
            self.element, PreformattedString
        ):
            return NodeKind.TEXT
        return NodeKind.OTHER

    @property
    def tag(self) -> str:
        if isinstance(self.element, Tag):
            return self.element.name
        return ""

    @property
    def parent(self) -> Optional["SoupNode"]:
        if self.element.parent is None:
            return None
        return SoupNode(self.element.parent)

    def attributes(self) -> Mapping[str, str]:
        if not isinstance(self.element, Tag):
            return {}
        attrs = {}
        for key, value in self.element.attrs.items():
            # Multi-valued attributes such as class come back as lists
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attrs[key] = value
        return attrs

    def children(self) -> list["SoupNode"]:
        if not isinstance(self.element, Tag):
            return []
        return [SoupNode(child) for child in self.element.children]

    def is_text(self) -> bool:
        return self.kind is NodeKind.TEXT

    def text(self) -> str:
        if self.is_text():
            return str(self.element)
        return ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SoupNode):
            return NotImplemented
        return self.element is other.element

    def __hash__(self) -> int:
        return id(self.element)

    def __repr__(self) -> str:
        if self.is_text():
            return f"SoupNode(text={self.text()!r})"
        return f"SoupNode(<{self.tag} {dict(self.attributes())}>)"

"""Protocol interfaces for parsers."""

from typing import Protocol

from forces.domain.exceptions import ParsingError
from forces.domain.models import ContestIdentifier, ProblemIdentifier
from forces.infrastructure.tree import Node


class URLParserProtocol(Protocol):
    """Protocol for URL parsing."""

    @classmethod
    def parse_contest_url(cls, url: str) -> ContestIdentifier:
        """Parse URL to extract contest identifier."""
        ...

    @classmethod
    def build_contest_url(cls, identifier: ContestIdentifier) -> str:
        """Build contest URL from identifier."""
        ...

    @classmethod
    def build_problem_url(cls, identifier: ProblemIdentifier) -> str:
        """Build problem URL from identifier."""
        ...


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get_text(self, url: str) -> str:
        """Get text content from URL."""
        ...


class PageFetcherProtocol(Protocol):
    """Protocol for fetching a page as a parsed node tree."""

    async def fetch_tree(self, url: str) -> Node:
        """Fetch URL and return the root of its markup tree."""
        ...


__all__ = [
    "HTTPClientProtocol",
    "PageFetcherProtocol",
    "ParsingError",
    "URLParserProtocol",
]

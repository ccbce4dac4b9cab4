"""Fetches pages and parses them into node trees."""

from loguru import logger

from forces.infrastructure.parsers.interfaces import HTTPClientProtocol
from forces.infrastructure.tree import SoupNode


class PageFetcher:
    """Fetch HTML over HTTP and parse it with lxml."""

    def __init__(self, http_client: HTTPClientProtocol):
        self.http_client = http_client

    async def fetch_tree(self, url: str) -> SoupNode:
        html = await self.http_client.get_text(url)
        logger.debug(f"Fetched {len(html)} characters from {url}")
        return SoupNode.from_html(html)

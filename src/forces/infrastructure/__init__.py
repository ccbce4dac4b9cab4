from .http_client import AsyncHTTPClient
from .page_fetcher import PageFetcher

__all__ = [
    "AsyncHTTPClient",
    "PageFetcher",
]

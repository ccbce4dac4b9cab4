"""Async HTTP client for Codeforces pages."""

from typing import Optional

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession, Response
from loguru import logger

from forces.domain.exceptions import FetchError

DEFAULT_TIMEOUT = 30.0


class AsyncHTTPClient:
    """Thin wrapper around curl_cffi with browser impersonation and a bounded timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, impersonate: str = "chrome"):
        """
        Initialize client.

        Args:
            timeout: Per-request timeout in seconds
            impersonate: Browser fingerprint passed to curl_cffi
        """
        self.timeout = timeout
        self.impersonate = impersonate
        self._session: Optional[AsyncSession] = None

    def _get_session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession()
        return self._session

    async def get(self, url: str) -> Response:
        """GET url, raising FetchError on transport failure or non-2xx status."""
        logger.debug(f"GET {url}")
        try:
            response = await self._get_session().get(
                url, impersonate=self.impersonate, timeout=self.timeout
            )
        except CurlError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise FetchError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Request to {url} returned HTTP {response.status_code}")
            raise FetchError(url, f"HTTP {response.status_code}")

        return response

    async def get_text(self, url: str) -> str:
        """Get text content from URL."""
        response = await self.get(url)
        return response.text

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

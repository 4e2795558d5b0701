"""
Collector HTTP client base.

Shared aiohttp session handling for the login and ingestion calls.
"""

from typing import Optional
import aiohttp

from .config import CollectorConfig

USER_AGENT = "BeaconAgent/1.0"


class CollectorClient:
    """Owns (or borrows) an aiohttp session bound to the collector."""

    def __init__(
        self,
        config: Optional[CollectorConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or CollectorConfig()
        self._session = session
        self._owns_session = session is None

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.config.timeout)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    def _get_headers(self) -> dict:
        return {
            'Content-Type': 'application/json',
            'User-Agent': USER_AGENT,
        }

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

"""
Authenticator.

Exchanges the agent's shared secret for a bearer token at the
collector's login endpoint.
"""

import asyncio
import json
import logging
from typing import Optional
import aiohttp

from .client import CollectorClient
from .config import CollectorConfig
from .errors import AuthError

logger = logging.getLogger(__name__)


class Authenticator(CollectorClient):
    """
    Performs the shared-secret login.

    A single request per call, no retries. Anything short of a 200 with a
    usable ``token`` field raises AuthError.
    """

    def __init__(
        self,
        shared_secret: str,
        config: Optional[CollectorConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(config, session)
        if not shared_secret:
            raise AuthError("shared secret is empty")
        self._shared_secret = shared_secret

    async def acquire_token(self) -> str:
        """Log in and return the bearer token."""
        url = self.config.login_url
        payload = json.dumps({'shared_secret': self._shared_secret})

        try:
            session = await self._get_session()
            async with session.post(
                url,
                data=payload,
                headers=self._get_headers(),
                timeout=self.timeout,
            ) as response:
                body = await response.text(errors="replace")
                if response.status != 200:
                    raise AuthError(
                        f"login endpoint answered {response.status} {response.reason}: {body[:200]}",
                        status=response.status,
                    )
        except asyncio.TimeoutError as e:
            raise AuthError(f"login request to {url} timed out") from e
        except aiohttp.ClientError as e:
            raise AuthError(f"login request to {url} failed: {e}") from e

        return self._extract_token(body, response.status)

    @staticmethod
    def _extract_token(body: str, status: int) -> str:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise AuthError(f"login response is not JSON: {body[:200]!r}", status=status) from e

        token = data.get('token') if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthError("login response has no token field", status=status)
        return token

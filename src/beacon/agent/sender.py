"""
Metrics Reporter.

Delivers one Sample per cycle to the collector's ingestion endpoint.
Delivery is best effort: every failure surfaces as a ReportError and is
never retried here.
"""

import asyncio
import logging
import aiohttp

from .client import CollectorClient
from .errors import ReportError
from .models import Sample

logger = logging.getLogger(__name__)


class MetricsReporter(CollectorClient):
    """Posts samples with the agent's bearer token."""

    def _get_auth_headers(self, token: str) -> dict:
        headers = self._get_headers()
        headers['Authorization'] = f'Bearer {token}'
        return headers

    async def report(self, sample: Sample, token: str) -> None:
        """Send a sample, raising ReportError unless the collector answers 200."""
        try:
            payload = sample.to_json()
        except (TypeError, ValueError) as e:
            raise ReportError(f"cannot serialize sample {sample!r}: {e}") from e

        url = self.config.metrics_url

        try:
            session = await self._get_session()
            async with session.post(
                url,
                data=payload,
                headers=self._get_auth_headers(token),
                timeout=self.timeout,
            ) as response:
                if response.status != 200:
                    error_text = await response.text(errors="replace")
                    raise ReportError(
                        f"collector answered {response.status} {response.reason}",
                        status=response.status,
                        body=error_text[:500],
                    )
        except asyncio.TimeoutError as e:
            raise ReportError(f"request to {url} timed out after {self.config.timeout}s") from e
        except aiohttp.InvalidURL as e:
            raise ReportError(f"invalid ingestion URL {url}: {e}") from e
        except aiohttp.ClientError as e:
            raise ReportError(f"request to {url} failed: {e}") from e

        logger.debug(f"Delivered {payload} to {url}")

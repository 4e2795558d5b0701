"""
psutil-backed samplers.

Drop-in replacements for the command samplers that read kernel counters
directly instead of parsing tool output.
"""

import asyncio
import psutil

from ..errors import SampleError
from .base import Sampler


class PsutilCPUSampler(Sampler):
    """CPU percentage over a short blocking interval."""

    metric = "cpu_usage"

    def __init__(self, interval: float = 0.5):
        self.interval = interval

    def _read(self) -> float:
        return float(psutil.cpu_percent(interval=self.interval))

    async def sample(self) -> float:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._read)
        except (psutil.Error, OSError) as e:
            raise SampleError(f"psutil cpu_percent failed: {e}") from e


class PsutilDiskSampler(Sampler):
    """Usage percentage of the filesystem holding ``path``."""

    metric = "disk_usage"

    def __init__(self, path: str = "/"):
        self.path = path

    def _read(self) -> float:
        return float(psutil.disk_usage(self.path).percent)

    async def sample(self) -> float:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._read)
        except (psutil.Error, OSError) as e:
            raise SampleError(f"psutil disk_usage({self.path}) failed: {e}") from e

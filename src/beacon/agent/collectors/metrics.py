"""
Metric sampler.

Runs the disk and CPU samplers for one cycle and assembles a Sample.
A failing sampler leaves its field at zero and records the error; it
never stops the other sampler.
"""

import asyncio
import logging
from typing import Optional

from ..config import SamplingConfig
from ..errors import SampleError
from ..models import Sample
from .base import Sampler
from .cpu import CPUUsageSampler
from .disk import DiskUsageSampler
from .system import PsutilCPUSampler, PsutilDiskSampler

logger = logging.getLogger(__name__)


def build_samplers(config: SamplingConfig) -> tuple[Sampler, Sampler]:
    """Return the (disk, cpu) samplers for the configured strategy."""
    if config.strategy == "psutil":
        return PsutilDiskSampler(config.disk_path), PsutilCPUSampler()
    return (
        DiskUsageSampler(config.disk_path, timeout=config.command_timeout),
        CPUUsageSampler(timeout=config.command_timeout),
    )


class MetricSampler:
    """Collects one Sample per call from a disk and a CPU sampler."""

    def __init__(
        self,
        config: Optional[SamplingConfig] = None,
        disk: Optional[Sampler] = None,
        cpu: Optional[Sampler] = None,
    ):
        self.config = config or SamplingConfig()
        if disk is None or cpu is None:
            default_disk, default_cpu = build_samplers(self.config)
            disk = disk or default_disk
            cpu = cpu or default_cpu
        self.disk = disk
        self.cpu = cpu

    async def _read(self, sampler: Sampler) -> tuple[float, Optional[str]]:
        """Take one reading, converting any failure into an error string."""
        try:
            return await sampler.sample(), None
        except SampleError as e:
            logger.warning(f"Error sampling {sampler.metric}, reporting 0: {e}")
            return 0.0, str(e)
        except Exception as e:
            logger.exception(f"Unexpected error sampling {sampler.metric}")
            return 0.0, f"unexpected error: {e}"

    async def collect(self) -> Sample:
        """Sample disk and CPU, independently of each other's outcome."""
        if self.config.parallel:
            disk_result, cpu_result = await asyncio.gather(
                self._read(self.disk),
                self._read(self.cpu),
            )
        else:
            disk_result = await self._read(self.disk)
            cpu_result = await self._read(self.cpu)

        sample = Sample()
        sample.disk_usage, disk_error = disk_result
        sample.cpu_usage, cpu_error = cpu_result

        if disk_error:
            sample.errors[self.disk.metric] = disk_error
        if cpu_error:
            sample.errors[self.cpu.metric] = cpu_error

        return sample

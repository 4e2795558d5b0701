"""
Beacon Agent Collectors.

Each sampler derives one utilization metric from the host.
"""

from .base import Sampler
from .command import CommandSampler, parse_percentage, run_command
from .cpu import CPUUsageSampler, parse_cpu_output
from .disk import DiskUsageSampler, parse_disk_output
from .metrics import MetricSampler, build_samplers
from .system import PsutilCPUSampler, PsutilDiskSampler

__all__ = [
    "Sampler",
    "CommandSampler",
    "CPUUsageSampler",
    "DiskUsageSampler",
    "PsutilCPUSampler",
    "PsutilDiskSampler",
    "MetricSampler",
    "build_samplers",
    "parse_percentage",
    "parse_cpu_output",
    "parse_disk_output",
    "run_command",
]
